from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

# Word pool for memorization practice
WORD_POOL: tuple[str, ...] = (
    "apple", "bridge", "castle", "dolphin", "eagle", "forest", "garden", "horizon", "island",
    "jungle", "kite", "lantern", "mountain", "nebula", "ocean", "pyramid", "quartz", "rainbow",
    "sunset", "thunder", "umbrella", "volcano", "whisper", "xylophone", "yacht", "zenith", "anchor",
    "balloon", "compass", "diamond", "eclipse", "falcon", "glacier", "harbor", "igloo", "jasmine",
    "kingdom", "lighthouse", "meteor", "notebook", "orchid", "phoenix", "quicksand", "river",
    "starlight", "twilight", "universe", "velvet", "waterfall", "zephyr", "amber", "brisk",
    "carve", "mint", "slope", "crimp", "eager", "faint", "slick", "brim", "torch", "clasp", "prune",
    "vivid", "charm", "creek", "blunt", "patch", "dwell", "hush", "ash", "glide", "snarl", "sprout",
    "keen", "craft", "dune", "crisp", "roam", "trace", "shift", "ember", "hollow", "gale", "steep",
    "murky", "sober", "flint", "cedar", "bloom", "grain", "twist", "plume", "plush", "cloak", "stark",
    "gorge", "brink", "swell", "rogue", "twine", "froth", "glare", "mossy", "lucid", "churn", "fetch",
    "grime", "ripple", "maple", "spire", "spur", "whisp", "knoll", "tether", "sprig", "flake", "spool",
    "quiet", "bellow", "clutch", "glint", "hefty", "drape", "smirk", "quaint", "brood", "swift",
    "noble", "droop", "veer", "spout", "linen", "moss", "waver", "gleam", "flurry", "frost", "blush",
    "grin", "spade", "envy", "syrup", "brittle",
)

MAX_GRID_SIDE = 20
EMPTY_ANSWER = "(empty)"


def generate_grid(rows: int, cols: int, rng: Optional[random.Random] = None) -> List[List[str]]:
    """Random ``rows x cols`` word grid; the shuffled pool repeats when it runs short."""
    rng = rng or random.Random()
    total = rows * cols
    words: List[str] = []
    while len(words) < total:
        batch = list(WORD_POOL)
        rng.shuffle(batch)
        words.extend(batch)
    return [words[i * cols:(i + 1) * cols] for i in range(rows)]


@dataclass
class Mistake:
    row: int
    col: int
    correct_word: str
    user_answer: str


@dataclass
class RecallResult:
    correct: int = 0
    total: int = 0
    mistakes: List[Mistake] = field(default_factory=list)

    @property
    def incorrect(self) -> int:
        return self.total - self.correct

    @property
    def percentage(self) -> int:
        if self.total == 0:
            return 0
        # half-up like the mobile client
        return int(self.correct * 100 / self.total + 0.5)


def grade_recall(words: Sequence[Sequence[str]], answers: Sequence[Sequence[str]]) -> RecallResult:
    """Compare recalled answers with the shown grid, ignoring case.

    Positions in ``mistakes`` are 1-based. Missing rows or cells count as empty answers.
    """
    result = RecallResult()
    for r, row in enumerate(words):
        for c, word in enumerate(row):
            result.total += 1
            answer = ""
            if r < len(answers) and c < len(answers[r]):
                answer = answers[r][c] or ""
            if answer.lower() == word.lower():
                result.correct += 1
            else:
                result.mistakes.append(
                    Mistake(row=r + 1, col=c + 1, correct_word=word, user_answer=answer or EMPTY_ANSWER)
                )
    return result

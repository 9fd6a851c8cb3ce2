# backend/src/memory_api/utils/validators.py
import math
import re

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6


def is_valid_email(email) -> bool:
    return isinstance(email, str) and bool(EMAIL_RE.match(email))


def is_valid_password(password) -> bool:
    return isinstance(password, str) and len(password) >= MIN_PASSWORD_LENGTH


def is_number(x) -> bool:
    # bool is an int subclass but never a score
    if isinstance(x, bool):
        return False
    if isinstance(x, int):
        return True
    return isinstance(x, float) and math.isfinite(x)

"""Memory Trainer backend: accounts and per-day score tracking."""

__version__ = "0.1.0"

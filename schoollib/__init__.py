"""School library workstation: pupil register, reading diaries and reading-log editing on SQLite."""

__version__ = "0.1.0"
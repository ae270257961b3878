# app/errors.py


class KeyRushError(Exception):
    """Base class for application errors."""


class WordSourceError(KeyRushError):
    """Word or quote retrieval failed; callers fall back to the local pool."""

"""
errors.py

Exception types raised at the engine boundary.
"""


class InvalidInputError(ValueError):
    """A word, pattern or guess that violates the engine's input contract."""

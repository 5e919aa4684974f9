from __future__ import annotations


class InvalidSeed(ValueError):
    """Seed cannot initialize the LFSR register."""


class InvalidSeedLength(InvalidSeed):
    pass


class InvalidSeedCharacter(InvalidSeed):
    pass


class InvalidTaps(ValueError):
    pass


class KeyLengthMismatch(ValueError):
    """Keystream length differs from the data length (strict cipher mode)."""

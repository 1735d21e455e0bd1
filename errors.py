# errors.py
from __future__ import annotations


class EnigmaError(ValueError):
    """Root of every fault raised by the cipher engine and its readers."""


# ── alphabet & permutation ──────────────────────────────────────────
class AlphabetError(EnigmaError):
    pass


class PermutationError(EnigmaError):
    pass


class SymbolError(PermutationError):
    """A symbol-level permute/invert was given a non-member symbol."""


# ── configuration ──────────────────────────────────────────────────
class ConfigError(EnigmaError):
    pass


class RotorConstructionError(ConfigError):
    pass


class SlotCompositionError(ConfigError):
    pass


class RotorNotFoundError(ConfigError):
    pass


class SettingLengthError(ConfigError):
    pass


class ConfigGrammarError(ConfigError):
    pass


__all__ = [
    "EnigmaError",
    "AlphabetError",
    "PermutationError",
    "SymbolError",
    "ConfigError",
    "RotorConstructionError",
    "SlotCompositionError",
    "RotorNotFoundError",
    "SettingLengthError",
    "ConfigGrammarError",
]

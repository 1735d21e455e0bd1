# utilities.py
from __future__ import annotations

from typing import Dict, Tuple

from alphabet_and_permutation import UPPER, Alphabet, Permutation
from errors import ConfigGrammarError
from rotor_and_reflector import Rotor

# ────────────────────────────────────────────────────────────────────────
#  1. Wheel database – the Naval (M4) set in cycle notation
# ────────────────────────────────────────────────────────────────────────

# name -> (type tag as written in a config file, cycles)
NAVAL_WHEELS: Dict[str, Tuple[str, str]] = {
    "I":     ("MQ",  "(AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)"),
    "II":    ("ME",  "(FIXVYOMW) (CDKLHUP) (ESZ) (BJ) (GR) (NT) (A) (Q)"),
    "III":   ("MV",  "(ABDHPEJT) (CFLVMZOYQIRWUKXSG) (N)"),
    "IV":    ("MJ",  "(AEPLIYWCOXMRFZBSTGJQNH) (DV) (KU)"),
    "V":     ("MZ",  "(AVOLDRWFIUQ)(BZKSMNHYC) (EGTJPX)"),
    "VI":    ("MZM", "(AJQDVLEOZWIYTS) (CGMNHFUX) (BPRK)"),
    "VII":   ("MZM", "(ANOUPFRIMBZTLWKSVEGCJYDHXQ)"),
    "VIII":  ("MZM", "(AFLSETWUNDHOZVICQ) (BKJ) (GXY) (MPR)"),
    "Beta":  ("N",   "(ALBEVFCYODJWUGNMQTZSKPR) (HIX)"),
    "Gamma": ("N",   "(AFNIRLBSQWVXGUZDKMTPCOYJHE)"),
    "B":     ("R",   "(AE) (BN) (CK) (DQ) (FU) (GY) (HW) (IJ) (LO) (MP) "
                     "(RX) (SZ) (TV)"),
    "C":     ("R",   "(AR) (BD) (CO) (EJ) (FN) (GT) (HK) (IV) (LM) (PW) "
                     "(QZ) (SX) (UY)"),
    # wide B of the three-rotor Enigma I; "B" above is the thin M4 wheel
    "UKWB":  ("R",   "(AY) (BR) (CU) (DH) (EQ) (FS) (GL) (IP) (JX) (KN) (MO) "
                     "(TZ) (VW)"),
}

NAVAL_ROTORS = 5
NAVAL_PAWLS = 3


def build_rotor(name: str, tag: str, cycles: str, alphabet: Alphabet) -> Rotor:
    """Build one wheel from its config-file type tag (R, N or M<notches>)."""
    kind, notches = tag[:1], tag[1:]
    if kind in ("N", "R") and notches:
        raise ConfigGrammarError(f"Non-moving rotor {name!r} cannot have notches {notches!r}")
    perm = Permutation(cycles, alphabet)
    if kind == "M":
        return Rotor.moving(name, perm, notches)
    if kind == "N":
        return Rotor.fixed(name, perm)
    if kind == "R":
        return Rotor.reflector(name, perm)
    raise ConfigGrammarError(f"Unknown rotor type tag {tag!r} for {name!r}")


def naval_catalog(alphabet: Alphabet | None = None) -> Dict[str, Rotor]:
    """Fresh Rotor objects for every Naval wheel, keyed by name."""
    alphabet = alphabet or Alphabet(UPPER)
    return {
        name: build_rotor(name, tag, cycles, alphabet)
        for name, (tag, cycles) in NAVAL_WHEELS.items()
    }


def naval_config_text() -> str:
    """The Naval wheel set written out in the configuration-file grammar."""
    lines = [f"{UPPER}", f"{NAVAL_ROTORS} {NAVAL_PAWLS}"]
    width = max(map(len, NAVAL_WHEELS))
    for name, (tag, cycles) in NAVAL_WHEELS.items():
        lines.append(f" {name:<{width}} {tag:<4}{cycles}")
    return "\n".join(lines) + "\n"


# ────────────────────────────────────────────────────────────────────────
#  2. Output helpers
# ────────────────────────────────────────────────────────────────────────


def group_blocks(text: str, block: int = 5) -> str:
    """Drop whitespace and split *text* into space-separated groups of *block*."""
    if block < 1:
        raise ValueError(f"Block size must be positive, got {block}")
    clean = "".join(ch for ch in text if not ch.isspace())
    return " ".join(clean[i : i + block] for i in range(0, len(clean), block))


__all__ = [
    "NAVAL_WHEELS",
    "NAVAL_ROTORS",
    "NAVAL_PAWLS",
    "build_rotor",
    "naval_catalog",
    "naval_config_text",
    "group_blocks",
]

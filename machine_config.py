# machine_config.py
"""Readers for the two text formats that drive a Machine.

A configuration file names the alphabet, slot counts and the wheel catalog::

    ABCDEFGHIJKLMNOPQRSTUVWXYZ
    5 3
    I    MQ  (AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)
    Beta N   (ALBEVFCYODJWUGNMQTZSKPR) (HIX)
    B    R   (AE) (BN) (CK) ...

A setting line picks wheels, positions, optional rings and the plugboard::

    * B Beta III IV I AXLE (YF) (HZ)
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List

from alphabet_and_permutation import Alphabet, Permutation
from debug import Debug
from errors import ConfigGrammarError, SettingLengthError
from machine import Machine
from rotor_and_reflector import Rotor
from utilities import build_rotor

_int_re = re.compile(r"^\d+$")
_cycles_re = re.compile(r"^(\([^()*]+\))*$")
_tag_re = re.compile(r"^(R|N|M.*)$")


# ────────────────────────────────────────────────────────────────────────
#  1. Configuration file
# ────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class MachineConfig:
    """Everything a configuration file declares."""

    alphabet: Alphabet
    num_rotors: int
    pawls: int
    rotors: Dict[str, Rotor] = field(default_factory=dict)

    def build_machine(self, debug: Debug | None = None) -> Machine:
        return Machine(
            self.alphabet, self.num_rotors, self.pawls, self.rotors, debug=debug
        )


def _join_cycles(tokens: List[str], where: str) -> str:
    cycles = "".join(tokens)
    if not _cycles_re.match(cycles):
        raise ConfigGrammarError(f"Malformed cycles {cycles!r} for {where}")
    return cycles


def read_config(text: str, debug: Debug | None = None) -> MachineConfig:
    """Parse a configuration file's *text* into a MachineConfig."""
    tokens = text.split()
    if not tokens:
        raise ConfigGrammarError("Configuration is empty: no alphabet")

    alphabet = Alphabet(tokens[0])
    if len(tokens) < 3:
        raise ConfigGrammarError("Configuration truncated: no rotor/pawl counts")
    if not (_int_re.match(tokens[1]) and _int_re.match(tokens[2])):
        raise ConfigGrammarError(
            f"Rotor and pawl counts must be integers, got {tokens[1]!r} {tokens[2]!r}"
        )
    cfg = MachineConfig(alphabet, int(tokens[1]), int(tokens[2]))

    pos = 3
    while pos < len(tokens):
        name = tokens[pos]
        if name.startswith("("):
            raise ConfigGrammarError(f"Expected a rotor name, got {name!r}")
        if pos + 1 >= len(tokens):
            raise ConfigGrammarError(f"Rotor {name!r} has no type description")
        tag = tokens[pos + 1]
        if not _tag_re.match(tag):
            raise ConfigGrammarError(f"Bad type description {tag!r} for rotor {name!r}")

        pos += 2
        start = pos
        while pos < len(tokens) and tokens[pos].startswith("("):
            pos += 1
        cycles = _join_cycles(tokens[start:pos], f"rotor {name!r}")

        if name in cfg.rotors:
            raise ConfigGrammarError(f"Rotor {name!r} declared twice")
        cfg.rotors[name] = build_rotor(name, tag, cycles, alphabet)
        if debug is not None:
            debug.log("config", f"rotor {name} {tag} {cycles or '(identity)'}")

    if not cfg.rotors:
        raise ConfigGrammarError("Configuration declares no rotors")
    return cfg


# ────────────────────────────────────────────────────────────────────────
#  2. Setting lines
# ────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class Setting:
    names: List[str]
    positions: str
    rings: str | None
    plugboard: str


def is_setting_line(line: str) -> bool:
    return line.lstrip().startswith("*")


def parse_setting(line: str, num_rotors: int) -> Setting:
    """Split a ``*`` line into rotor names, positions, rings and plug cycles."""
    tokens = line.split()
    if not tokens or tokens[0] != "*":
        raise ConfigGrammarError(f"Setting line must start with '*': {line!r}")

    names = tokens[1 : 1 + num_rotors]
    rest = tokens[1 + num_rotors :]
    if len(names) != num_rotors or not rest:
        raise ConfigGrammarError(
            f"Setting line needs {num_rotors} rotor names and a position setting"
        )
    if any(n.startswith("(") for n in names) or rest[0].startswith("("):
        raise ConfigGrammarError(f"Setting line is missing rotor names or positions: {line!r}")

    positions, rest = rest[0], rest[1:]
    rings = None
    if rest and not rest[0].startswith("("):
        rings, rest = rest[0], rest[1:]
    if any(not tok.startswith("(") for tok in rest):
        raise ConfigGrammarError(f"Unexpected tokens in setting line: {line!r}")

    return Setting(names, positions, rings, _join_cycles(rest, "plugboard"))


def apply_setting(machine: Machine, line: str) -> Setting:
    """Parse *line* and configure *machine* from it.

    Plugboard, lengths and symbols are all checked before any slot is
    touched, so a rejected line leaves the machine as it was.
    """
    setting = parse_setting(line, machine.num_rotors())
    plugboard = Permutation(setting.plugboard, machine.alphabet)
    expected = machine.num_rotors() - 1
    for label, value in (("positions", setting.positions), ("rings", setting.rings)):
        if value is None:
            continue
        if len(value) != expected:
            raise SettingLengthError(
                f"{label.capitalize()} {value!r} must have {expected} symbols"
            )
        for ch in value:
            machine.alphabet.to_index(ch)

    machine.insert_rotors(setting.names)
    machine.set_rotors(setting.positions)
    rings = setting.rings or machine.alphabet.to_char(0) * expected
    machine.set_ring(rings)
    machine.set_plugboard(plugboard)
    return setting


__all__ = [
    "MachineConfig",
    "Setting",
    "read_config",
    "is_setting_line",
    "parse_setting",
    "apply_setting",
]

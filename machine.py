# machine.py  ──────────────────────────────────────────────────────
from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from alphabet_and_permutation import Alphabet, Permutation
from debug import Debug
from errors import (
    ConfigError,
    RotorNotFoundError,
    SettingLengthError,
    SlotCompositionError,
)
from rotor_and_reflector import Rotor, RotorKind


class Machine:
    """An Enigma-style machine with *num_rotors* slots and *pawls* moving ones.

    Slot 0 holds the reflector, slots ``1 .. num_rotors - pawls - 1`` hold
    fixed rotors and the last *pawls* slots hold moving rotors; the last slot
    is the fast rotor.
    """

    def __init__(
        self,
        alphabet: Alphabet,
        num_rotors: int,
        pawls: int,
        all_rotors: Mapping[str, Rotor] | Iterable[Rotor],
        *,
        debug: Debug | None = None,
    ) -> None:
        if num_rotors <= 1 or pawls < 0 or pawls >= num_rotors:
            raise ConfigError(
                f"Need 1 < rotors and 0 <= pawls < rotors, got {num_rotors} and {pawls}"
            )

        self._alphabet = alphabet
        self._num_rotors = num_rotors
        self._pawls = pawls
        self._catalog = self._index_catalog(all_rotors)
        self._slots: list[Rotor] = []
        self._plugboard = Permutation.identity(alphabet)
        self.debug = debug

    @staticmethod
    def _index_catalog(
        all_rotors: Mapping[str, Rotor] | Iterable[Rotor],
    ) -> dict[str, Rotor]:
        rotors = all_rotors.values() if isinstance(all_rotors, Mapping) else all_rotors
        catalog: dict[str, Rotor] = {}
        for rotor in rotors:
            if rotor.name in catalog:
                raise ConfigError(f"Duplicate rotor name {rotor.name!r}")
            catalog[rotor.name] = rotor
        return catalog

    # ── read-only views ─────────────────────────────────────────
    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    def num_rotors(self) -> int:
        return self._num_rotors

    def num_pawls(self) -> int:
        return self._pawls

    @property
    def configured(self) -> bool:
        """True once rotors have been inserted."""
        return bool(self._slots)

    def get_rotor(self, k: int) -> Rotor:
        """Rotor in slot *k*; slot 0 is the reflector."""
        self._require_slots()
        if not (0 <= k < self._num_rotors):
            raise IndexError(f"Slot {k} out of range 0–{self._num_rotors - 1}")
        return self._slots[k]

    @property
    def plugboard(self) -> Permutation:
        return self._plugboard

    def window(self) -> str:
        """Visible positions of slots 1..R-1, left to right."""
        return "".join(
            self._alphabet.to_char(r.setting()) for r in self._slots[1:]
        )

    # ── slot assignment ─────────────────────────────────────────
    def insert_rotors(self, names: Sequence[str]) -> None:
        """Fill every slot with the named rotors (names[0] is the reflector).

        Nothing changes unless the whole assignment is valid.
        """
        if len(names) != self._num_rotors:
            raise SlotCompositionError(
                f"Expected {self._num_rotors} rotor names, got {len(names)}"
            )
        candidate: list[Rotor] = []
        for name in names:
            try:
                candidate.append(self._catalog[name])
            except KeyError:
                raise RotorNotFoundError(f"Rotor {name!r} is not in the catalog") from None

        self._verify_slots(candidate)
        self._slots = candidate
        if self.debug is not None:
            self.debug.log("config", f"slots {' '.join(names)}")

    def _verify_slots(self, slots: list[Rotor]) -> None:
        first_moving = self._num_rotors - self._pawls
        seen: set[str] = set()
        for i, rotor in enumerate(slots):
            if rotor.name in seen:
                raise SlotCompositionError(f"Rotor {rotor.name!r} inserted twice")
            seen.add(rotor.name)

            if i == 0:
                expected = RotorKind.REFLECTOR
            elif i < first_moving:
                expected = RotorKind.FIXED
            else:
                expected = RotorKind.MOVING
            if rotor.kind is not expected:
                raise SlotCompositionError(
                    f"Slot {i} needs a {expected.name.lower()} rotor, "
                    f"{rotor.name!r} is {rotor.kind.name.lower()}"
                )

    # ── settings ────────────────────────────────────────────────
    def _check_setting(self, setting: str) -> list[int]:
        self._require_slots()
        if len(setting) != self._num_rotors - 1:
            raise SettingLengthError(
                f"Setting {setting!r} must have {self._num_rotors - 1} symbols"
            )
        return [self._alphabet.to_index(ch) for ch in setting]

    def set_rotors(self, setting: str) -> None:
        """Set positions of slots 1..R-1 from the symbols of *setting*."""
        for rotor, posn in zip(self._slots[1:], self._check_setting(setting)):
            rotor.set(posn)

    def set_ring(self, setting: str) -> None:
        """Apply ring offsets to slots 1..R-1."""
        indices = self._check_setting(setting)
        for rotor, ch in zip(self._slots[1:], setting):
            rotor.set_ring(ch)
        if self.debug is not None:
            self.debug.log("config", f"rings {indices}")

    def set_plugboard(self, plugboard: Permutation) -> None:
        self._plugboard = plugboard

    # ── stepping logic ──────────────────────────────────────────
    def _advance_rotors(self) -> None:
        """Step the slots for one key-press, double-step included.

        Flags are decided from the notch readings before anything moves.
        """
        slots = self._slots
        can_advance = [False] * len(slots)
        can_advance[-1] = True
        for i in range(len(slots) - 2, -1, -1):
            if slots[i].rotates() and slots[i + 1].at_notch():
                can_advance[i] = True
                can_advance[i + 1] = True
            else:
                can_advance[i] = False

        for rotor, step in zip(slots, can_advance):
            if step:
                rotor.advance()

    # ── encipher one symbol ─────────────────────────────────────
    def convert(self, c: int) -> int:
        """Advance the machine, then run index *c* through it."""
        self._require_slots()
        self._advance_rotors()

        tracing = self.debug is not None and self.debug.active("convert")
        if self.debug is not None and self.debug.active("stepping"):
            self.debug.log("stepping", f"window {self.window()}")
        path = [c]

        c = self._plugboard.permute(c)
        path.append(c)

        for rotor in reversed(self._slots):
            c = rotor.forward(c)
            path.append(c)

        for rotor in self._slots[1:]:
            c = rotor.backward(c)
            path.append(c)

        c = self._plugboard.permute(c)
        path.append(c)

        if tracing:
            chain = " -> ".join(self._alphabet.to_char(i) for i in path)
            self.debug.log("convert", f"[{self.window()}] {chain}")
        return c

    def convert_message(self, msg: str) -> str:
        """Convert every non-whitespace symbol of *msg*, left to right."""
        return "".join(
            self._alphabet.to_char(self.convert(self._alphabet.to_index(ch)))
            for ch in msg
            if not ch.isspace()
        )

    def _require_slots(self) -> None:
        if not self._slots:
            raise SlotCompositionError("No rotors have been inserted")

    def __repr__(self) -> str:
        names = " ".join(r.name for r in self._slots) or "empty"
        return f"<Machine {names} window={self.window() or '-'}>"

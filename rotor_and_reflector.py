# rotor_and_reflector.py
from __future__ import annotations

from enum import Enum

from alphabet_and_permutation import Alphabet, Permutation
from errors import AlphabetError, RotorConstructionError


class RotorKind(Enum):
    REFLECTOR = "R"
    FIXED = "N"
    MOVING = "M"


class Rotor:
    """A wired wheel: a Permutation plus a position and a ring offset.

    One class covers every wheel; ``kind`` decides whether it steps,
    reflects or has notches.  Build wheels with :meth:`fixed`,
    :meth:`moving` or :meth:`reflector` rather than calling the
    constructor directly.
    """

    def __init__(
        self,
        name: str,
        perm: Permutation,
        kind: RotorKind,
        notches: str = "",
    ) -> None:
        alphabet = perm.alphabet
        match kind:
            case RotorKind.REFLECTOR:
                if not perm.is_derangement():
                    raise RotorConstructionError(
                        f"Reflector {name!r}: permutation must be a derangement"
                    )
                if notches:
                    raise RotorConstructionError(
                        f"Reflector {name!r} cannot carry notches"
                    )
            case RotorKind.FIXED:
                if notches:
                    raise RotorConstructionError(
                        f"Fixed rotor {name!r} cannot carry notches"
                    )
            case RotorKind.MOVING:
                bad = [ch for ch in notches if ch not in alphabet]
                if bad:
                    raise RotorConstructionError(
                        f"Rotor {name!r}: notch {bad[0]!r} not in alphabet"
                    )

        self._name = name
        self._permutation = perm
        self.kind = kind
        self._notches = frozenset(alphabet.to_index(ch) for ch in notches)
        self.position = 0
        self.ring_setting = 0

    # ── constructors per kind ─────────────────────────────────────
    @classmethod
    def fixed(cls, name: str, perm: Permutation) -> "Rotor":
        return cls(name, perm, RotorKind.FIXED)

    @classmethod
    def moving(cls, name: str, perm: Permutation, notches: str) -> "Rotor":
        return cls(name, perm, RotorKind.MOVING, notches)

    @classmethod
    def reflector(cls, name: str, perm: Permutation) -> "Rotor":
        return cls(name, perm, RotorKind.REFLECTOR)

    # ── identity ─────────────────────────────────────────────────
    @property
    def name(self) -> str:
        return self._name

    @property
    def alphabet(self) -> Alphabet:
        return self._permutation.alphabet

    @property
    def permutation(self) -> Permutation:
        return self._permutation

    @property
    def size(self) -> int:
        return self._permutation.size

    # ── capabilities ─────────────────────────────────────────────
    def rotates(self) -> bool:
        return self.kind is RotorKind.MOVING

    def reflecting(self) -> bool:
        return self.kind is RotorKind.REFLECTOR

    @property
    def notches(self) -> frozenset[int]:
        """Notch positions as alphabet indices (empty unless moving)."""
        return self._notches

    def notch_symbols(self) -> str:
        return "".join(self.alphabet.to_char(i) for i in sorted(self._notches))

    def at_notch(self) -> bool:
        match self.kind:
            case RotorKind.MOVING:
                return self.position in self._notches
            case RotorKind.FIXED | RotorKind.REFLECTOR:
                return False

    # ── position & ring ──────────────────────────────────────────
    def setting(self) -> int:
        return self.position

    def set(self, posn: int) -> None:
        if self.kind is RotorKind.REFLECTOR and posn != 0:
            raise RotorConstructionError(
                f"Reflector {self._name!r} has only one position"
            )
        if not (0 <= posn < self.size):
            raise AlphabetError(f"Position {posn} out of range 0–{self.size - 1}")
        self.position = posn

    def set_symbol(self, ch: str) -> None:
        self.set(self.alphabet.to_index(ch))

    def set_ring(self, ch: str) -> "Rotor":
        ring = self.alphabet.to_index(ch)
        if self.kind is RotorKind.REFLECTOR and ring != 0:
            raise RotorConstructionError(
                f"Reflector {self._name!r} has no ring setting"
            )
        self.ring_setting = ring
        return self

    # ── stepping ─────────────────────────────────────────────────
    def advance(self) -> None:
        match self.kind:
            case RotorKind.MOVING:
                self.position = (self.position + 1) % self.size
            case RotorKind.FIXED | RotorKind.REFLECTOR:
                pass

    # ── signal paths ─────────────────────────────────────────────
    def forward(self, p: int) -> int:
        perm = self._permutation
        shift = self.position - self.ring_setting
        return perm.wrap(perm.permute(p + shift) - shift)

    def backward(self, e: int) -> int:
        perm = self._permutation
        shift = self.position - self.ring_setting
        return perm.wrap(perm.invert(e + shift) - shift)

    def __repr__(self) -> str:
        return (
            f"<Rotor {self._name} {self.kind.name.lower()} "
            f"pos={self.position} ring={self.ring_setting}>"
        )

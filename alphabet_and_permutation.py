# alphabet_and_permutation.py
from __future__ import annotations

from collections.abc import Iterator

from errors import AlphabetError, PermutationError, SymbolError

RESERVED = frozenset("*()")
UPPER = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"


# ── Alphabet ──────────────────────────────────────────────────────
class Alphabet:
    """Ordered, duplicate-free symbol set; symbol ⇄ index lookups."""

    def __init__(self, chars: str = UPPER) -> None:
        if not chars:
            raise AlphabetError("Alphabet must contain at least one symbol")
        bad = RESERVED.intersection(chars)
        if bad:
            raise AlphabetError(
                f"Alphabet cannot contain reserved symbol {sorted(bad)[0]!r}"
            )
        if any(ch.isspace() for ch in chars):
            raise AlphabetError(f"Alphabet cannot contain whitespace: {chars!r}")

        self._chars: str = chars
        self._index: dict[str, int] = {}
        for i, ch in enumerate(chars):
            if ch in self._index:
                raise AlphabetError(f"Duplicate symbol {ch!r} in alphabet")
            self._index[ch] = i

    @property
    def chars(self) -> str:
        return self._chars

    @property
    def size(self) -> int:
        return len(self._chars)

    def __len__(self) -> int:
        return len(self._chars)

    def __contains__(self, ch: object) -> bool:
        return ch in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._chars)

    def contains(self, ch: str) -> bool:
        return ch in self._index

    # index → symbol
    def to_char(self, index: int) -> str:
        if not (0 <= index < len(self._chars)):
            hi = len(self._chars) - 1
            raise AlphabetError(f"Index {index} out of range 0–{hi}")
        return self._chars[index]

    # symbol → index
    def to_index(self, ch: str) -> int:
        try:
            return self._index[ch]
        except KeyError:
            raise AlphabetError(
                f"Invalid character {ch!r} for current alphabet."
            ) from None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Alphabet):
            return NotImplemented
        return self._chars == other._chars

    def __hash__(self) -> int:
        return hash(self._chars)

    def __repr__(self) -> str:
        return f"<Alphabet {self._chars!r}>"


# ── Permutation ───────────────────────────────────────────────────
class Permutation:
    """Bijection over ``range(len(alphabet))`` given in cycle notation.

    ``"(BCF) (AE)"`` sends B→C→F→B and A→E→A; every symbol not named in a
    cycle maps to itself and whitespace is ignored.  Index arguments are
    taken modulo the alphabet size, so callers may pass offsets that have
    drifted out of range.
    """

    def __init__(self, cycles: str, alphabet: Alphabet) -> None:
        self.alphabet = alphabet
        n = len(alphabet)

        # integer lookup tables
        self._fwd: list[int] = list(range(n))
        self._rev: list[int] = list(range(n))

        seen: set[str] = set()
        for cycle in self._split_cycles(cycles):
            for ch in cycle:
                if ch not in alphabet:
                    raise PermutationError(
                        f"Cycle symbol {ch!r} is not in the alphabet"
                    )
                if ch in seen:
                    raise PermutationError(
                        f"Symbol {ch!r} appears in more than one cycle position"
                    )
                seen.add(ch)
            self._add_cycle(cycle)

    @staticmethod
    def _split_cycles(cycles: str) -> list[str]:
        """Return the committed cycles of *cycles*, left to right."""
        found: list[str] = []
        current: list[str] | None = None
        for ch in cycles:
            if ch.isspace():
                continue
            if ch == "(":
                current = []
            elif ch == ")":
                if current is not None:
                    found.append("".join(current))
                current = None
            elif current is not None:
                current.append(ch)
        return found

    def _add_cycle(self, cycle: str) -> None:
        """Chain c0→c1→…→cm→c0 into the tables."""
        idx = [self.alphabet.to_index(ch) for ch in cycle]
        for a, b in zip(idx, idx[1:] + idx[:1]):
            self._fwd[a] = b
            self._rev[b] = a

    @classmethod
    def identity(cls, alphabet: Alphabet) -> "Permutation":
        return cls("", alphabet)

    # ── sizes & wrapping ─────────────────────────────────────────
    @property
    def size(self) -> int:
        return len(self._fwd)

    def __len__(self) -> int:
        return len(self._fwd)

    def wrap(self, p: int) -> int:
        # Python's % is already non-negative for a positive modulus
        return p % len(self._fwd)

    # ── index forms ──────────────────────────────────────────────
    def permute(self, p: int) -> int:
        return self._fwd[self.wrap(p)]

    def invert(self, c: int) -> int:
        return self._rev[self.wrap(c)]

    # ── symbol forms ─────────────────────────────────────────────
    def permute_char(self, ch: str) -> str:
        if ch not in self.alphabet:
            raise SymbolError(f"Symbol {ch!r} is not in the alphabet")
        return self.alphabet.to_char(self.permute(self.alphabet.to_index(ch)))

    def invert_char(self, ch: str) -> str:
        if ch not in self.alphabet:
            raise SymbolError(f"Symbol {ch!r} is not in the alphabet")
        return self.alphabet.to_char(self.invert(self.alphabet.to_index(ch)))

    def is_derangement(self) -> bool:
        """True iff no index maps to itself."""
        return all(i != j for i, j in enumerate(self._fwd))

    def cycles(self) -> list[str]:
        """Return the non-trivial cycles, each starting at its lowest index."""
        out: list[str] = []
        visited: set[int] = set()
        for start in range(len(self._fwd)):
            if start in visited or self._fwd[start] == start:
                continue
            chain = []
            i = start
            while i not in visited:
                visited.add(i)
                chain.append(self.alphabet.to_char(i))
                i = self._fwd[i]
            out.append("".join(chain))
        return out

    def __repr__(self) -> str:
        body = " ".join(f"({c})" for c in self.cycles())
        return f"<Permutation {body or 'identity'}>"

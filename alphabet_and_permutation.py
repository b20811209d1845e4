# alphabet_and_permutation.py
from __future__ import annotations

from typing import Dict, List

from errors import ConfigurationError

RESERVED = "()*"


# ── Alphabet ──────────────────────────────────────────────────────
class Alphabet:
    """An ordered set of encodable symbols; symbol K has index K."""

    def __init__(self, chars: str = "ABCDEFGHIJKLMNOPQRSTUVWXYZ") -> None:
        if not chars:
            raise ConfigurationError("Alphabet must not be empty")
        for ch in chars:
            if ch.isspace() or ch in RESERVED:
                raise ConfigurationError(f"Invalid alphabet symbol {ch!r}")
        if len(set(chars)) != len(chars):
            dup = next(ch for ch in chars if chars.count(ch) > 1)
            raise ConfigurationError(f"Duplicate alphabet symbol {dup!r}")

        self._chars: str = chars
        self._index: Dict[str, int] = {ch: i for i, ch in enumerate(chars)}

    def size(self) -> int:
        return len(self._chars)

    def contains(self, symbol: str) -> bool:
        return symbol in self._index

    # integer signal → symbol
    def to_char(self, index: int) -> str:
        if not (0 <= index < len(self._chars)):
            hi = len(self._chars) - 1
            raise IndexError(f"Index {index} out of range 0–{hi}")
        return self._chars[index]

    # symbol → integer signal, -1 when absent
    def to_int(self, symbol: str) -> int:
        return self._index.get(symbol, -1)

    def require(self, symbol: str) -> int:
        """Like `to_int` but a missing symbol is a configuration error."""
        try:
            return self._index[symbol]
        except KeyError:
            raise ConfigurationError(
                f"Invalid character {symbol!r} for current alphabet."
            ) from None

    @property
    def chars(self) -> str:
        return self._chars

    def __len__(self) -> int:
        return len(self._chars)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._index

    def __iter__(self):
        return iter(self._chars)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Alphabet) and other._chars == self._chars

    def __hash__(self) -> int:
        return hash(self._chars)

    def __repr__(self) -> str:
        return f"<Alphabet {self._chars}>"


# ── Permutation ───────────────────────────────────────────────────
def _parse_cycles(cycles: str, alphabet: Alphabet) -> List[List[int]]:
    """Split cycle notation "(ABC) (DE)" into lists of alphabet indices."""
    groups: List[List[int]] = []
    current: List[int] | None = None
    seen: set[str] = set()

    for ch in cycles:
        if ch.isspace():
            continue
        if ch == "(":
            if current is not None:
                raise ConfigurationError(f"Nested '(' in cycles {cycles!r}")
            current = []
        elif ch == ")":
            if current is None:
                raise ConfigurationError(f"Unbalanced ')' in cycles {cycles!r}")
            if not current:
                raise ConfigurationError(f"Empty cycle in {cycles!r}")
            groups.append(current)
            current = None
        else:
            if current is None:
                raise ConfigurationError(
                    f"Symbol {ch!r} outside of a cycle in {cycles!r}"
                )
            if ch in seen:
                raise ConfigurationError(f"Symbol {ch!r} used twice in cycles")
            current.append(alphabet.require(ch))
            seen.add(ch)

    if current is not None:
        raise ConfigurationError(f"Unclosed '(' in cycles {cycles!r}")
    return groups


class Permutation:
    """A bijection on an alphabet's indices, built from cycle notation.

    Symbols absent from every cycle map to themselves. Both directions are
    tabulated up front, so `permute` and `invert` are plain lookups.
    """

    def __init__(self, cycles: str, alphabet: Alphabet) -> None:
        self._alphabet = alphabet
        size = alphabet.size()
        self._fwd: List[int] = list(range(size))

        for group in _parse_cycles(cycles, alphabet):
            for here, there in zip(group, group[1:] + group[:1]):
                self._fwd[here] = there

        self._rev: List[int] = [0] * size
        for i, j in enumerate(self._fwd):
            self._rev[j] = i

    @classmethod
    def from_wiring(cls, wiring: str, alphabet: Alphabet) -> "Permutation":
        """Build from a wiring string: symbol K of the alphabet goes to wiring[K]."""
        if sorted(wiring) != sorted(alphabet.chars):
            raise ConfigurationError("wiring must be a permutation of alphabet")

        perm = cls("", alphabet)
        perm._fwd = [alphabet.to_int(c) for c in wiring]
        for i, j in enumerate(perm._fwd):
            perm._rev[j] = i
        return perm

    # ── modular helpers ──────────────────────────────────────────
    def wrap(self, p: int) -> int:
        """Return P modulo the size of this permutation, in [0, size)."""
        return p % self.size()

    def size(self) -> int:
        return self._alphabet.size()

    def alphabet(self) -> Alphabet:
        return self._alphabet

    # ── application ──────────────────────────────────────────────
    def permute(self, p: int | str) -> int | str:
        """Apply the forward mapping to an index (wrapped) or a symbol."""
        if isinstance(p, str):
            return self._alphabet.to_char(self._fwd[self._alphabet.require(p)])
        return self._fwd[self.wrap(p)]

    def invert(self, c: int | str) -> int | str:
        if isinstance(c, str):
            return self._alphabet.to_char(self._rev[self._alphabet.require(c)])
        return self._rev[self.wrap(c)]

    def derangement(self) -> bool:
        """True iff no index maps to itself."""
        return all(i != j for i, j in enumerate(self._fwd))

    # ── niceties ─────────────────────────────────────────────────
    def cycles(self) -> str:
        """Canonical cycle notation; fixed points are left out."""
        out: List[str] = []
        visited = [False] * self.size()
        for start in range(self.size()):
            if visited[start] or self._fwd[start] == start:
                continue
            group = []
            i = start
            while not visited[i]:
                visited[i] = True
                group.append(self._alphabet.to_char(i))
                i = self._fwd[i]
            out.append("(" + "".join(group) + ")")
        return " ".join(out)

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, Permutation)
            and other._alphabet == self._alphabet
            and other._fwd == self._fwd
        )

    def __hash__(self) -> int:
        return hash((self._alphabet, tuple(self._fwd)))

    def __repr__(self) -> str:
        return f"<Permutation {self.cycles() or '()'}>"

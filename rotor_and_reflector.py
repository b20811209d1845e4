# rotor_and_reflector.py
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, FrozenSet

from alphabet_and_permutation import Alphabet, Permutation
from errors import ConfigurationError

if TYPE_CHECKING:
    from debug import Debug


class RotorKind(Enum):
    MOVING = "M"
    FIXED = "N"
    REFLECTOR = "R"


class Rotor:
    """A wheel in the machine: wiring at the 'A' position plus dial state.

    One class covers every variant; the behaviour that differs between
    moving rotors, fixed rotors and reflectors is chosen by `kind`.
    """

    def __init__(
        self,
        name: str,
        perm: Permutation,
        kind: RotorKind = RotorKind.FIXED,
        notches: str = "",
    ) -> None:
        self._name = name
        self._permutation = perm
        self.kind = kind

        match kind:
            case RotorKind.MOVING:
                if not notches:
                    raise ConfigurationError(f"Moving rotor {name} needs a notch")
            case RotorKind.REFLECTOR:
                if not perm.derangement():
                    raise ConfigurationError(
                        f"Reflector {name} wiring must have no fixed points"
                    )
                notches = ""
            case RotorKind.FIXED:
                notches = ""

        bad = [ch for ch in notches if not perm.alphabet().contains(ch)]
        if bad:
            raise ConfigurationError(
                f"Notch characters must be in the alphabet: {''.join(bad)!r}"
            )

        self._notches: FrozenSet[str] = frozenset(notches)
        self._notch_text = notches
        self.raw_setting = 0
        self.ring_offset = 0

    # ── constructors per variant ─────────────────────────────────
    @classmethod
    def moving(cls, name: str, perm: Permutation, notches: str) -> "Rotor":
        return cls(name, perm, RotorKind.MOVING, notches)

    @classmethod
    def fixed(cls, name: str, perm: Permutation) -> "Rotor":
        return cls(name, perm, RotorKind.FIXED)

    @classmethod
    def reflector(cls, name: str, perm: Permutation) -> "Rotor":
        return cls(name, perm, RotorKind.REFLECTOR)

    # ── identity ──────────────────────────────────────────────────
    def name(self) -> str:
        return self._name

    def alphabet(self) -> Alphabet:
        return self._permutation.alphabet()

    def permutation(self) -> Permutation:
        return self._permutation

    def size(self) -> int:
        return self._permutation.size()

    def notches(self) -> str:
        """Notch positions as the ring letters at which they occur."""
        return self._notch_text

    # ── variant behaviour ─────────────────────────────────────────
    def rotates(self) -> bool:
        match self.kind:
            case RotorKind.MOVING:
                return True
            case RotorKind.FIXED | RotorKind.REFLECTOR:
                return False

    def reflecting(self) -> bool:
        match self.kind:
            case RotorKind.REFLECTOR:
                return True
            case RotorKind.MOVING | RotorKind.FIXED:
                return False

    def advance(self) -> None:
        """Advance one position if this variant has a ratchet."""
        match self.kind:
            case RotorKind.MOVING:
                self.raw_setting = self._permutation.wrap(self.raw_setting + 1)
            case RotorKind.FIXED | RotorKind.REFLECTOR:
                pass

    # ── ring & setting ───────────────────────────────────────────
    def setting(self) -> int:
        """Effective position in the contact frame."""
        return self._permutation.wrap(self.raw_setting - self.ring_offset)

    def set(self, position: int | str) -> None:
        if isinstance(position, str):
            position = self.alphabet().require(position)
        position = self._permutation.wrap(position)

        match self.kind:
            case RotorKind.MOVING:
                self.raw_setting = position
            case RotorKind.FIXED | RotorKind.REFLECTOR:
                if position != 0:
                    raise ConfigurationError(f"Rotor {self._name} cannot move")
                self.raw_setting = 0

    def ring_set(self, symbol: str) -> None:
        self.ring_offset = self.alphabet().require(symbol)

    def at_notch(self) -> bool:
        """True iff the raw dial position lets the rotor on my left advance."""
        return self.alphabet().to_char(self.raw_setting) in self._notches

    # ── signal paths ─────────────────────────────────────────────
    def convert_forward(self, p: int, trace: "Debug | None" = None) -> int:
        s = self.setting()
        result = self._permutation.permute(p + s)
        if trace is not None:
            trace.log("rotor", f"{self._name} > {self.alphabet().to_char(result)}")
        return self._permutation.wrap(result - s)

    def convert_backward(self, e: int, trace: "Debug | None" = None) -> int:
        s = self.setting()
        result = self._permutation.invert(e + s)
        if trace is not None:
            trace.log("rotor", f"{self._name} < {self.alphabet().to_char(result)}")
        return self._permutation.wrap(result - s)

    # ── niceties --------------------------------------------------
    def __repr__(self) -> str:
        return (
            f"<Rotor {self._name} {self.kind.name.lower()} "
            f"pos={self.raw_setting} ring={self.ring_offset}>"
        )

# machine.py  ─────────────────────────────────────────────────────────
from __future__ import annotations

from typing import Iterable, List, Sequence

from alphabet_and_permutation import Alphabet, Permutation
from debug import Debug
from errors import ConfigurationError
from rotor_and_reflector import Rotor


class Machine:
    """A complete rotor machine.

    Slot 0 of the stack holds the reflector and slot ``num_rotors() - 1`` the
    fast rotor. The roster owns every rotor object; the stack only records
    roster indices, so a rotor taken out and put back keeps its position.
    """

    def __init__(
        self,
        alphabet: Alphabet,
        num_rotors: int,
        num_pawls: int,
        all_rotors: Iterable[Rotor],
        trace: Debug | None = None,
    ) -> None:
        if num_rotors <= 1:
            raise ConfigurationError("Machine needs more than one rotor slot")
        if not (0 <= num_pawls < num_rotors):
            raise ConfigurationError(
                f"Pawl count {num_pawls} must be in 0–{num_rotors - 1}"
            )

        self._alphabet = alphabet
        self._num_rotors = num_rotors
        self._num_pawls = num_pawls
        self._all_rotors: List[Rotor] = list(all_rotors)
        self._slots: List[int] = []
        self._plugboard = Permutation("", alphabet)
        self.trace = trace

        for rotor in self._all_rotors:
            if rotor.alphabet() != alphabet:
                raise ConfigurationError(
                    f"Rotor {rotor.name()} uses a different alphabet"
                )

    # ── accessors ─────────────────────────────────────────────────
    def num_rotors(self) -> int:
        return self._num_rotors

    def num_pawls(self) -> int:
        return self._num_pawls

    def alphabet(self) -> Alphabet:
        return self._alphabet

    def all_rotors(self) -> List[Rotor]:
        return list(self._all_rotors)

    def rotors(self) -> List[Rotor]:
        """The rotors currently inserted, reflector first."""
        return [self._all_rotors[i] for i in self._slots]

    def get_rotor(self, k: int) -> Rotor:
        return self._all_rotors[self._slots[k]]

    def plugboard(self) -> Permutation:
        return self._plugboard

    def set_plugboard(self, plugboard: Permutation) -> None:
        if plugboard.alphabet() != self._alphabet:
            raise ConfigurationError("Plugboard uses a different alphabet")
        self._plugboard = plugboard

    # ── stack assembly ───────────────────────────────────────────
    def _find(self, name: str) -> int:
        for i, rotor in enumerate(self._all_rotors):
            if rotor.name() == name:
                return i
        raise ConfigurationError(f"Unknown rotor {name!r}")

    def insert_rotors(self, names: Sequence[str]) -> None:
        """Fill my slots with the named rotors; names[0] is the reflector.

        The stack is only replaced once every check has passed.
        """
        if len(names) != self._num_rotors:
            raise ConfigurationError(
                f"Wrong number of rotors: need {self._num_rotors}, got {len(names)}"
            )

        slots = [self._find(name) for name in names]
        chosen = [self._all_rotors[i] for i in slots]

        if not chosen[0].reflecting():
            raise ConfigurationError("First rotor isn't reflecting")
        if any(r.reflecting() for r in chosen[1:]):
            raise ConfigurationError("Only the first rotor may reflect")
        if len(set(slots)) != len(slots):
            raise ConfigurationError("Duplicate rotor names")
        if sum(r.rotates() for r in chosen) != self._num_pawls:
            raise ConfigurationError("Wrong number of moving rotors")

        self._slots = slots

    def set_rotors(self, setting: str) -> None:
        """Set slots 1.. from SETTING, leftmost rotor first."""
        if not self._slots:
            raise ConfigurationError("No rotors inserted")
        if len(setting) != self._num_rotors - 1:
            raise ConfigurationError(
                f"Setting {setting!r} must have {self._num_rotors - 1} symbols"
            )
        positions = [self._alphabet.require(ch) for ch in setting]
        for k, posn in enumerate(positions, start=1):
            rotor = self.get_rotor(k)
            if posn != 0 and not rotor.rotates():
                raise ConfigurationError(f"Rotor {rotor.name()} cannot move")

        for k, posn in enumerate(positions, start=1):
            self.get_rotor(k).set(posn)

    # ── stepping logic  ─────────────────────────────────────────
    def advance_rotors(self) -> None:
        """Advance the stack one key-press, double-step included."""
        stack = self.rotors()
        advance = {len(stack) - 1}

        for i in range(len(stack) - 1, 0, -1):
            if stack[i].at_notch() and stack[i - 1].rotates():
                advance.update((i - 1, i))

        for i in advance:
            stack[i].advance()

        if self.trace is not None:
            self.trace.log("stepping", f"stepped slots {sorted(advance)}")

    def _positions(self) -> str:
        return "".join(
            self._alphabet.to_char(r.setting()) for r in self.rotors()[1:]
        )

    # ── encipher one symbol  ────────────────────────────────────
    def convert_index(self, c: int) -> int:
        """Convert index C after first advancing the machine."""
        if not self._slots:
            raise ConfigurationError("No rotors inserted")

        self.advance_rotors()
        trace = self.trace
        stages = [self._alphabet.to_char(c)]

        c = self._plugboard.permute(c)
        stages.append(self._alphabet.to_char(c))
        if trace is not None:
            trace.log("plugboard", f"{stages[0]} -> {stages[1]}")

        stack = self.rotors()
        for rotor in reversed(stack):
            c = rotor.convert_forward(c, trace)
        for rotor in stack[1:]:
            c = rotor.convert_backward(c, trace)
        stages.append(self._alphabet.to_char(c))

        c = self._plugboard.permute(c)
        stages.append(self._alphabet.to_char(c))

        if trace is not None:
            trace.log("machine", f"[{self._positions()}] " + " -> ".join(stages))
        return c

    def convert_message(self, msg: str) -> str:
        """Convert MSG symbol by symbol; whitespace passes through unstepped."""
        out: List[str] = []
        for ch in msg:
            if ch.isspace():
                out.append(ch)
            else:
                c = self._alphabet.require(ch)
                out.append(self._alphabet.to_char(self.convert_index(c)))
        return "".join(out)

    def convert(self, value: int | str) -> int | str:
        """Index in, index out; text in, text out."""
        if isinstance(value, str):
            return self.convert_message(value)
        return self.convert_index(value)

    def __repr__(self) -> str:
        names = " ".join(r.name() for r in self.rotors())
        return f"<Machine [{names}] at {self._positions()} {self._plugboard!r}>"

# utilities.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Tuple

from alphabet_and_permutation import Alphabet, Permutation
from debug import Debug
from errors import ConfigurationError
from machine import Machine
from rotor_and_reflector import Rotor, RotorKind

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration file
# ────────────────────────────────────────────────────────────────────────
#
#  ABCDEFGHIJKLMNOPQRSTUVWXYZ
#  5 3
#  I MQ     (AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)
#  II ME    (FIXVYOMW) (CDKLHUP) (ESZ) (BJ) (GR) (NT) (A) (Q)
#  B R      (AY) (BR) (CU) (DH) (EQ) (FS) (GL) (IP) (JX) (KN)
#           (MO) (TZ) (VW)
#
#  A rotor's cycles may continue on following lines that start with '('.


def _rotor_entries(lines: List[str]) -> List[Tuple[str, str, str]]:
    entries: List[List[str]] = []
    for line in lines:
        stripped = line.strip()
        if not stripped:
            continue
        if stripped.startswith("("):
            if not entries:
                raise ConfigurationError("Cycles given before any rotor name")
            entries[-1][2] += " " + stripped
            continue

        parts = stripped.split(maxsplit=2)
        if len(parts) < 2:
            raise ConfigurationError(f"Bad rotor description: {stripped!r}")
        name, kind = parts[0], parts[1]
        cycles = parts[2] if len(parts) == 3 else ""
        entries.append([name, kind, cycles])
    return [(n, k, c) for n, k, c in entries]


def make_rotor(name: str, kind: str, cycles: str, alphabet: Alphabet) -> Rotor:
    """Build one rotor from its type code: M<notches>, N or R."""
    perm = Permutation(cycles, alphabet)
    match kind[:1]:
        case RotorKind.MOVING.value:
            return Rotor.moving(name, perm, kind[1:])
        case RotorKind.FIXED.value if len(kind) == 1:
            return Rotor.fixed(name, perm)
        case RotorKind.REFLECTOR.value if len(kind) == 1:
            return Rotor.reflector(name, perm)
        case _:
            raise ConfigurationError(f"Invalid rotor type {kind!r} for {name}")


def read_config(text: str, trace: Debug | None = None) -> Machine:
    """Return a Machine configured from configuration TEXT."""
    lines = text.splitlines()
    while lines and not lines[0].strip():
        lines.pop(0)
    if not lines:
        raise ConfigurationError("configuration file truncated")

    alphabet = Alphabet(lines.pop(0).strip())

    counts: List[str] = []
    while len(counts) < 2:
        if not lines:
            raise ConfigurationError("configuration file truncated")
        counts.extend(lines.pop(0).split())
    if len(counts) != 2:
        raise ConfigurationError(f"Expected 'slots pawls', got {' '.join(counts)!r}")
    try:
        num_rotors, num_pawls = int(counts[0]), int(counts[1])
    except ValueError:
        raise ConfigurationError(
            f"Rotor and pawl counts must be integers: {' '.join(counts)!r}"
        ) from None

    rotors: List[Rotor] = []
    seen: set[str] = set()
    for name, kind, cycles in _rotor_entries(lines):
        if name in seen:
            raise ConfigurationError(f"Duplicate rotor name {name!r} in configuration")
        seen.add(name)
        rotors.append(make_rotor(name, kind, cycles, alphabet))
        if trace is not None:
            trace.log("config", f"loaded {rotors[-1]!r}")

    return Machine(alphabet, num_rotors, num_pawls, rotors, trace)


def read_config_file(path: str | Path, trace: Debug | None = None) -> Machine:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError:
        raise ConfigurationError(f"could not open {path}") from None
    return read_config(text, trace)


# ────────────────────────────────────────────────────────────────────────
#  1. Settings lines
# ────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class Settings:
    """One parsed `* REFL ROTORS... POSITIONS [RINGS] (plug cycles)` line."""

    rotors: List[str]
    positions: str
    rings: str | None = None
    plugboard: str = ""

    def line(self) -> str:
        parts = ["*", *self.rotors, self.positions]
        if self.rings is not None:
            parts.append(self.rings)
        if self.plugboard:
            parts.append(self.plugboard)
        return " ".join(parts)


def is_settings_line(line: str) -> bool:
    return line.lstrip().startswith("*")


def parse_settings(machine: Machine, line: str) -> Settings:
    line = line.strip()
    if not line.startswith("*"):
        raise ConfigurationError("No settings line")

    body = line[1:]
    plugs = ""
    if "(" in body:
        cut = body.index("(")
        body, plugs = body[:cut], body[cut:].strip()

    tokens = body.split()
    n = machine.num_rotors()
    rings: str | None = None
    if len(tokens) == n + 2:
        rings = tokens[-1]
        tokens = tokens[:-1]
    elif len(tokens) != n + 1:
        raise ConfigurationError("Wrong number of rotors")

    positions = tokens[-1]
    if len(positions) != n - 1:
        raise ConfigurationError("Inconsistent number of rotors")
    if rings is not None and len(rings) != n - 1:
        raise ConfigurationError("Ring setting length doesn't match rotors")

    return Settings(tokens[:-1], positions, rings, plugs)


def apply_settings(machine: Machine, settings: Settings) -> None:
    """Insert, position and ring-set the rotors, then swap in the plugboard.

    Omitted ring settings reset every ring to the first alphabet symbol.
    """
    alphabet = machine.alphabet()
    plugboard = Permutation(settings.plugboard, alphabet)
    if any(plugboard.permute(plugboard.permute(i)) != i for i in range(alphabet.size())):
        raise ConfigurationError("Plugboard may only swap pairs of symbols")

    rings = settings.rings or alphabet.to_char(0) * (machine.num_rotors() - 1)
    for ch in rings:
        alphabet.require(ch)

    machine.insert_rotors(settings.rotors)
    machine.set_rotors(settings.positions)
    for k, ch in enumerate(rings, start=1):
        machine.get_rotor(k).ring_set(ch)
    machine.set_plugboard(plugboard)


def set_up(machine: Machine, line: str) -> None:
    """Configure MACHINE from one settings line."""
    apply_settings(machine, parse_settings(machine, line))


# ────────────────────────────────────────────────────────────────────────
#  2. Message formatting & driving
# ────────────────────────────────────────────────────────────────────────


def format_message_line(msg: str, block: int = 5) -> str:
    """Drop whitespace and regroup MSG in blocks (the last may be shorter)."""
    text = "".join(msg.split())
    return " ".join(text[i : i + block] for i in range(0, len(text), block))


def process(machine: Machine, lines: Iterable[str], *, block: int = 5) -> Iterator[str]:
    """Yield the output line for every input line.

    Settings lines produce no output; blank lines are echoed as blank lines.
    """
    configured = False
    for raw in lines:
        line = raw.rstrip("\r\n")
        if is_settings_line(line):
            set_up(machine, line)
            configured = True
        elif not line.strip():
            yield ""
        elif not configured:
            raise ConfigurationError("No settings line")
        else:
            yield format_message_line(machine.convert_message(line), block)


__all__ = [
    "Settings",
    "apply_settings",
    "format_message_line",
    "make_rotor",
    "parse_settings",
    "process",
    "read_config",
    "read_config_file",
    "set_up",
]

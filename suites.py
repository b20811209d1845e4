# suites.py
from __future__ import annotations

from typing import Dict, List, Tuple

from alphabet_and_permutation import Alphabet, Permutation
from debug import Debug
from errors import ConfigurationError
from machine import Machine
from rotor_and_reflector import Rotor

Alpha26 = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# name → (wiring, notches)
ROTORS: Dict[str, Tuple[str, str]] = {
    "I":    ("EKMFLGDQVZNTOWYHXUSPAIBRCJ", "Q"),
    "II":   ("AJDKSIRUXBLHWTMCQGZNPYFVOE", "E"),
    "III":  ("BDFHJLCPRTXVZNYEIWGAKMUSQO", "V"),
    "IV":   ("ESOVPZJAYQUIRHXLNFTGKDCMWB", "J"),
    "V":    ("VZBRGITYUPSDNHLXAWMJQOFECK", "Z"),
    "VI":   ("JPGVOUMFYQBENHZRDKASXLICTW", "ZM"),
    "VII":  ("NZJHGRCXMYSWBOUFAIVLPEKQDT", "ZM"),
    "VIII": ("FKQHTLXOCBJSPDZRAMEWNIUYGV", "ZM"),
}

# non-moving fourth wheels of the naval machine
FIXED: Dict[str, str] = {
    "Beta":  "LEYJVCNIXWPBQMDRTAKZGFUHOS",
    "Gamma": "FSOKANUERHMBTIYCWLQPZXVGJD",
}

REFLECTORS: Dict[str, str] = {
    "A":      "EJMZALYXVBWFCRQUONTSPIKHGD",
    "B":      "YRUHQSLDPXNGOKMIEBFZCWVJAT",
    "C":      "FVPJIAOYEDRZXWGCTKUQSBNMHL",
    "B-thin": "ENKQAUYWJICOPBLMDXZVFTHRGS",
    "C-thin": "RDOBJNTKVEHMLFCWZAXGYIPSUQ",
}

SUITES: Dict[str, Dict] = {
    "M3": {
        "alphabet": Alpha26,
        "slots": 4,
        "pawls": 3,
        "rotors": list(ROTORS),
        "fixed": [],
        "reflectors": ["A", "B", "C"],
    },
    "M4": {
        "alphabet": Alpha26,
        "slots": 5,
        "pawls": 3,
        "rotors": list(ROTORS),
        "fixed": list(FIXED),
        "reflectors": ["B-thin", "C-thin"],
    },
}


def build_roster(suite: Dict) -> Tuple[Alphabet, List[Rotor]]:
    """Fresh rotor objects for SUITE, so machines never share wheel state."""
    alphabet = Alphabet(suite["alphabet"])
    roster: List[Rotor] = []
    for name in suite["rotors"]:
        wiring, notches = ROTORS[name]
        roster.append(Rotor.moving(name, Permutation.from_wiring(wiring, alphabet), notches))
    for name in suite["fixed"]:
        roster.append(Rotor.fixed(name, Permutation.from_wiring(FIXED[name], alphabet)))
    for name in suite["reflectors"]:
        roster.append(Rotor.reflector(name, Permutation.from_wiring(REFLECTORS[name], alphabet)))
    return alphabet, roster


def build_machine(name: str, trace: Debug | None = None) -> Machine:
    try:
        suite = SUITES[name.upper()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown suite {name!r}. Expected one of {list(SUITES)}"
        ) from None

    alphabet, roster = build_roster(suite)
    return Machine(alphabet, suite["slots"], suite["pawls"], roster, trace)

# settings_generator.py
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from random import Random, SystemRandom
from typing import List

from errors import ConfigurationError
from machine import Machine
from suites import SUITES, build_machine
from utilities import Settings, read_config_file

# ── helpers ───────────────────────────────────────────────────────


def build_rng(seed: int | None) -> Random | SystemRandom:
    """Deterministic RNG when *seed* given; CSPRNG otherwise."""
    return Random(seed) if seed is not None else SystemRandom()


def choose_pairs(alpha: str, k: int, rng: Random | SystemRandom) -> List[str]:
    """Return *k* disjoint plug pairs."""
    max_possible = len(alpha) // 2
    k = min(k, max_possible)
    pool = list(alpha)
    rng.shuffle(pool)
    return [a + b for a, b in zip(pool[::2], pool[1::2])][:k]


def generate_settings(
    machine: Machine,
    rng: Random | SystemRandom,
    *,
    plug_pairs: int = 10,
    with_rings: bool = True,
) -> Settings:
    """Pick a random settings block that `apply_settings` will accept.

    Non-moving rotors fill the slots next to the reflector and stay at the
    first symbol; the moving rotors fill the remaining slots.
    """
    alpha = machine.alphabet().chars
    roster = machine.all_rotors()
    reflectors = [r.name() for r in roster if r.reflecting()]
    moving = [r.name() for r in roster if r.rotates()]
    fixed = [r.name() for r in roster if not r.rotates() and not r.reflecting()]

    n_moving = machine.num_pawls()
    n_fixed = machine.num_rotors() - 1 - n_moving
    if not reflectors or len(moving) < n_moving or len(fixed) < n_fixed:
        raise ConfigurationError("Roster too small for this machine")

    rotors = [rng.choice(reflectors)]
    rotors += rng.sample(fixed, n_fixed)
    rotors += rng.sample(moving, n_moving)

    positions = alpha[0] * n_fixed + "".join(rng.choices(alpha, k=n_moving))
    rings = "".join(rng.choices(alpha, k=n_fixed + n_moving)) if with_rings else None
    plugs = " ".join(f"({p})" for p in choose_pairs(alpha, plug_pairs, rng))

    return Settings(rotors, positions, rings, plugs)


def parse_cli(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Generate a random settings line")
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--suite", choices=sorted(SUITES), help="Built-in rotor suite")
    src.add_argument("--config", type=Path, help="Machine configuration file")
    p.add_argument("--seed", type=int, help="Deterministic seed (omit for random)")
    p.add_argument("--pairs", type=int, default=10, help="Plugboard pairs (default: 10)")
    p.add_argument("--no-rings", dest="rings", action="store_false",
                   help="Leave the ring settings out of the line")
    return p.parse_args(argv)


# ── main ─────────────────────────────────────────────────────────


def main(argv: List[str] | None = None) -> int:
    args = parse_cli(argv)
    try:
        machine = build_machine(args.suite) if args.suite else read_config_file(args.config)
        settings = generate_settings(
            machine, build_rng(args.seed), plug_pairs=args.pairs, with_rings=args.rings
        )
    except ConfigurationError as excp:
        print(f"Error: {excp}", file=sys.stderr)
        return 1

    print(settings.line())
    return 0


if __name__ == "__main__":
    sys.exit(main())

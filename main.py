# main.py
from __future__ import annotations

import argparse
import sys
from contextlib import ExitStack
from dataclasses import dataclass
from pathlib import Path
from typing import List, TextIO

from debug import Debug, configure_logging
from errors import ConfigurationError
from machine import Machine
from suites import SUITES, build_machine
from utilities import process, read_config_file

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration
# ────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class Options:
    """Runtime switches for one run of the simulator."""

    config: Path | None = None
    suite: str | None = None
    input: Path | None = None       # stdin when None
    output: Path | None = None      # stdout when None
    verbose: bool = False           # per-symbol trace on stderr
    block: int = 5                  # output group size


# ────────────────────────────────────────────────────────────────────────
#  1. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: List[str] | None = None) -> Options:
    p = argparse.ArgumentParser(
        prog="enigma-sim",
        description="Encrypt or decrypt messages with a rotor machine",
    )
    p.add_argument("--verbose", action="store_true",
                   help="Log rotor positions and every intermediate symbol.")
    p.add_argument("--suite", choices=sorted(SUITES),
                   help="Use a built-in rotor suite instead of a CONFIG file.")
    p.add_argument("--block", type=int, default=5,
                   help="Output group size. Default: 5")
    p.add_argument("paths", nargs="*", metavar="FILE",
                   help="CONFIG [INPUT [OUTPUT]]; CONFIG is omitted with --suite.")
    args = p.parse_args(argv)

    paths = [Path(x) for x in args.paths]
    if args.suite is None:
        if not 1 <= len(paths) <= 3:
            p.error("expected CONFIG [INPUT [OUTPUT]]")
        config, rest = paths[0], paths[1:]
    else:
        if len(paths) > 2:
            p.error("expected [INPUT [OUTPUT]] with --suite")
        config, rest = None, paths
    if args.block < 1:
        p.error("--block must be positive")

    return Options(
        config=config,
        suite=args.suite,
        input=rest[0] if rest else None,
        output=rest[1] if len(rest) > 1 else None,
        verbose=args.verbose,
        block=args.block,
    )


def build(opts: Options) -> Machine:
    trace = Debug.verbose() if opts.verbose else None
    if opts.suite is not None:
        return build_machine(opts.suite, trace)
    return read_config_file(opts.config, trace)


def _open(path: Path, mode: str, stack: ExitStack) -> TextIO:
    try:
        return stack.enter_context(open(path, mode, encoding="utf-8"))
    except OSError:
        raise ConfigurationError(f"could not open {path}") from None


def run(opts: Options, stdin: TextIO, stdout: TextIO) -> None:
    """Configure a machine and apply it to every message of the input."""
    machine = build(opts)
    with ExitStack() as stack:
        source = _open(opts.input, "r", stack) if opts.input else stdin
        sink = _open(opts.output, "w", stack) if opts.output else stdout
        for line in process(machine, source, block=opts.block):
            sink.write(line + "\n")


# ────────────────────────────────────────────────────────────────────────
#  2. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: List[str] | None = None) -> int:
    opts = parse_args(argv)
    if opts.verbose:
        configure_logging()

    try:
        run(opts, sys.stdin, sys.stdout)
    except ConfigurationError as excp:
        print(f"Error: {excp}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

# main.py
from __future__ import annotations

import argparse
import sys
from contextlib import ExitStack
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, TextIO

from debug import Debug
from errors import ConfigError, EnigmaError
from machine import Machine
from machine_config import apply_setting, is_setting_line, read_config
from utilities import group_blocks

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration & logging
# ────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class Config:
    """Runtime switches for the command-line driver."""

    block: int = 5                  # output group width
    verbose: bool = False           # trace every converted symbol
    log_to: str | None = None       # also write the trace to this file


def make_debug(cfg: Config) -> Debug | None:
    if not cfg.verbose:
        return None
    debug = Debug(log_to=cfg.log_to)
    debug.enable("config", "stepping", "convert")
    return debug


# ────────────────────────────────────────────────────────────────────────
#  1. Message stream
# ────────────────────────────────────────────────────────────────────────


def process(
    config_text: str,
    lines: Iterable[str],
    out: TextIO,
    cfg: Config,
) -> Machine:
    """Configure a machine from *config_text* and run *lines* through it.

    Setting lines (``* ...``) reconfigure the machine; every other line is
    converted and written to *out* in groups of ``cfg.block``.
    """
    debug = make_debug(cfg)
    try:
        machine = read_config(config_text, debug).build_machine(debug)

        seen_any = False
        for raw in lines:
            seen_any = True
            line = " ".join(raw.split())
            if is_setting_line(line):
                apply_setting(machine, line)
                continue
            if not machine.configured:
                raise ConfigError("Message line before any setting line")
            out.write(group_blocks(machine.convert_message(line), cfg.block) + "\n")

        if not seen_any:
            raise ConfigError("Input is empty")
        return machine
    finally:
        if debug is not None:
            debug.close()


# ────────────────────────────────────────────────────────────────────────
#  2. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Encrypt or decrypt with a rotor machine")
    p.add_argument("config", type=Path, help="Machine configuration file.")
    p.add_argument("input", nargs="?", type=Path, help="Messages to convert. Default: standard input.")
    p.add_argument("output", nargs="?", type=Path, help="Where to write results. Default: standard output.")
    p.add_argument("--verbose", action="store_true", help="Trace rotor windows and signal paths to stderr.")
    p.add_argument("--log-file", dest="log_file", metavar="FILE", help="Also write the verbose trace to FILE.")
    p.add_argument("--block", type=int, default=5, help="Output group width. Default: 5")
    return p.parse_args(argv)


# ────────────────────────────────────────────────────────────────────────
#  3. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    cfg = Config(block=args.block, verbose=args.verbose, log_to=args.log_file)

    try:
        if cfg.block < 1:
            raise ConfigError(f"--block must be positive, got {cfg.block}")
        config_text = args.config.read_text(encoding="utf-8")
        with ExitStack() as stack:
            source = (
                stack.enter_context(args.input.open(encoding="utf-8"))
                if args.input else sys.stdin
            )
            sink = (
                stack.enter_context(args.output.open("w", encoding="utf-8"))
                if args.output else sys.stdout
            )
            process(config_text, source, sink, cfg)
    except (EnigmaError, OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

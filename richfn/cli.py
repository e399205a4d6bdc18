import argparse
import logging
import sys
from collections.abc import Sequence
from typing import TextIO

from richfn.multiplicity import Multiplicity, can_widen, meet, meet_all, widening_targets


def _kind(text: str) -> Multiplicity:
    try:
        return Multiplicity.parse(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def print_meet_table(out: TextIO) -> None:
    """Print the 5x5 meet table, one row per kind."""
    kinds = list(Multiplicity)
    width = max(len(k.value) for k in kinds) + 2
    out.write("meet".ljust(width) + "".join(k.value.ljust(width) for k in kinds).rstrip() + "\n")
    for a in kinds:
        row = "".join(meet(a, b).value.ljust(width) for b in kinds)
        out.write(a.value.ljust(width) + row.rstrip() + "\n")


def handle_meet(kinds: Sequence[Multiplicity], out: TextIO) -> int:
    print(meet_all(kinds).value, file=out)
    return 0


def handle_widen(source: Multiplicity, target: Multiplicity, out: TextIO) -> int:
    """Report whether ``source`` widens to ``target``; exit status 1 if not."""
    if can_widen(source, target):
        print(f"{source.value} -> {target.value}: ok", file=out)
        return 0
    allowed = ", ".join(k.value for k in widening_targets(source))
    print(
        f"{source.value} -> {target.value}: no widening edge (allowed: {allowed})",
        file=out,
    )
    return 1


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="richfn",
        description="Inspect the multiplicity lattice behind richfn.",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging.",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("table", help="Print the meet table of all kinds.")

    meet_parser = subparsers.add_parser(
        "meet", help="Print the meet (greatest lower bound) of one or more kinds."
    )
    meet_parser.add_argument("kinds", nargs="+", type=_kind, metavar="KIND")

    widen_parser = subparsers.add_parser(
        "widen", help="Check whether a widening edge SOURCE -> TARGET exists."
    )
    widen_parser.add_argument("source", type=_kind, metavar="SOURCE")
    widen_parser.add_argument("target", type=_kind, metavar="TARGET")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    match args.command:
        case "table":
            print_meet_table(sys.stdout)
            return 0
        case "meet":
            return handle_meet(args.kinds, sys.stdout)
        case "widen":
            return handle_widen(args.source, args.target, sys.stdout)
        case None:
            parser.print_help()
            return 1
        case _:
            print(f"Unknown command: {args.command}", file=sys.stderr)
            parser.print_help()
            return 1


if __name__ == "__main__":
    sys.exit(main())

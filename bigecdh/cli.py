"""
Command-line demo: two parties agree on a shared point.

::

    $ python -m bigecdh --curve toy17 --seed 7
    sharedKey of Alice : (<x>, <y>)
    sharedKey of Bob : (<x>, <y>)

    $ python -m bigecdh --params 0 7 17 6 11 --order 18
    $ python -m bigecdh --curve toy17 --table
    $ python -m bigecdh --curve secp256k1 --verify
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from dataclasses import replace
from typing import List, Optional, TextIO

from .backend import verify_party
from .bigint import BigInt
from .config import load_settings, parse_log_level
from .curve import Curve, Point
from .curves import CURVES, curve_from_strings, get_curve
from .errors import BigECDHError
from .party import KeyExchangeParty, exchange

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_cli() -> argparse.ArgumentParser:
    """Set up command-line argument handling."""
    parser = argparse.ArgumentParser(
        prog="bigecdh",
        description="Elliptic-curve Diffie-Hellman over BigInt arithmetic",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--curve",
        help=f"named curve ({', '.join(sorted(CURVES))})",
    )
    source.add_argument(
        "--params",
        nargs=5,
        metavar=("A", "B", "P", "GX", "GY"),
        help="custom curve y^2 = x^3 + Ax + B over F_P, generator (GX, GY)",
    )
    parser.add_argument(
        "--order",
        help="order of the generator for --params (decimal)",
    )
    parser.add_argument(
        "--labels",
        nargs=2,
        default=["Alice", "Bob"],
        metavar=("FIRST", "SECOND"),
        help="party names",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="seed for reproducible private scalars",
    )
    parser.add_argument(
        "--bound",
        help="exclusive upper bound for private scalars (decimal)",
    )
    parser.add_argument(
        "--table",
        action="store_true",
        help="print the points and addition table of a small curve",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="cross-check public points with libsecp256k1 (secp256k1 only)",
    )
    parser.add_argument(
        "--log-level",
        help="logging level (default from BIGECDH_LOG_LEVEL)",
    )
    parser.add_argument(
        "--env-file",
        help="path to a .env file",
    )
    return parser


def _format_point(point: Point) -> str:
    if point.is_inf():
        return "∞"
    return f"{point.x},{point.y}"


def print_addition_table(curve: Curve, out: TextIO) -> None:
    """Point list followed by the full addition table, tab separated."""
    pts = curve.points()
    table = curve.addition_table(pts)
    out.write("\t" + "\t".join(_format_point(p) for p in pts) + "\n")
    for p, row in zip(pts, table):
        cells = "\t".join(_format_point(s) for s in row)
        out.write(f"{_format_point(p)}>>\t{cells}\n")


def _select_curve(args: argparse.Namespace, default: str) -> Curve:
    if args.params:
        a, b, p, gx, gy = args.params
        return curve_from_strings(a, b, p, gx, gy, n=args.order)
    return get_curve(args.curve or default)


def main(
    argv: Optional[List[str]] = None,
    out: Optional[TextIO] = None,
) -> int:
    args = configure_cli().parse_args(argv)
    if out is None:
        out = sys.stdout

    try:
        settings = load_settings(args.env_file)
        if args.log_level:
            settings = replace(
                settings, log_level=parse_log_level(args.log_level),
            )
        logging.basicConfig(
            level=settings.log_level_value, format=LOG_FORMAT,
        )

        curve = _select_curve(args, settings.curve)
        if args.table:
            print_addition_table(curve, out)
            return 0

        seed = args.seed if args.seed is not None else settings.seed
        rng = random.Random(seed) if seed is not None else None
        bound = (
            BigInt.from_string(args.bound) if args.bound
            else settings.scalar_bound
        )

        first, second = (
            KeyExchangeParty(curve, label, rng=rng, upper_bound=bound)
            for label in args.labels
        )
        exchange(first, second)

        if args.verify:
            verify_party(first)
            verify_party(second)
            logger.info("libsecp256k1 cross-check passed")

        out.write(first.format_shared_key() + "\n")
        out.write(second.format_shared_key() + "\n")
        return 0
    except (BigECDHError, KeyError, ValueError) as e:
        msg = e.args[0] if isinstance(e, KeyError) and e.args else e
        print(f"error: {msg}", file=sys.stderr)
        return 1

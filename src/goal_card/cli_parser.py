"""Parser construction for goal-card CLI."""

from __future__ import annotations

import argparse
from typing import Any


def _add_fixture_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--fixture", default="")
    parser.add_argument("--home", default="")
    parser.add_argument("--away", default="")
    parser.add_argument("--league-code", default="")
    parser.add_argument("--league-id", type=int, default=None)


def build_parser(*, handlers: Any) -> argparse.ArgumentParser:
    _cmd_bands = handlers._cmd_bands
    _cmd_card = handlers._cmd_card
    _cmd_providers = handlers._cmd_providers
    _cmd_scan = handlers._cmd_scan
    parser = argparse.ArgumentParser(prog="goal-card")
    parser.add_argument(
        "--config",
        default="",
        help="Path to runtime config TOML (default: config/runtime.toml).",
    )
    parser.add_argument(
        "--log-level",
        default="",
        help="Logging level for provider diagnostics (default: WARNING).",
    )
    subparsers = parser.add_subparsers(dest="command")

    card = subparsers.add_parser("card", help="Build a blended p_card for one fixture")
    card.set_defaults(func=_cmd_card)
    source = card.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--request",
        default="",
        help="JSON request body path (`-` reads stdin).",
    )
    source.add_argument(
        "--odds-file",
        default="",
        help="Pasted odds text with `Market | Odds | Opp` rows.",
    )
    _add_fixture_arguments(card)
    card.add_argument(
        "--offline",
        action="store_true",
        help="Skip every provider and blend the bookmaker anchor only.",
    )

    scan = subparsers.add_parser("scan", help="Evaluate quotes against odds bands")
    scan.set_defaults(func=_cmd_scan)
    scan.add_argument("--odds-file", required=True)
    scan.add_argument(
        "--with-card",
        action="store_true",
        help="Use blended p_card probabilities for recognized markets.",
    )
    _add_fixture_arguments(scan)
    scan.add_argument("--offline", action="store_true")
    scan.add_argument("--near-miss-limit", type=int, default=None)
    scan.add_argument("--out", default="", help="Write all decisions to .csv or .parquet.")
    scan.add_argument("--json", action="store_true", help="Print decisions as JSON.")

    bands = subparsers.add_parser("bands", help="Show odds bands and thresholds")
    bands.set_defaults(func=_cmd_bands)

    providers = subparsers.add_parser("providers", help="Show configured prior providers")
    providers.set_defaults(func=_cmd_providers)

    return parser

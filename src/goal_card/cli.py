"""CLI entrypoint for goal-card."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any

from goal_card.bands import ODDS_BANDS, OUTSIDE_BAND, CandidateDecision
from goal_card.card_builder import CardBuilder, CardRequest
from goal_card.cli_global_overrides import extract_global_overrides
from goal_card.cli_parser import build_parser
from goal_card.export import write_decisions
from goal_card.outcomes import to_pct
from goal_card.providers import RoutingHints, build_providers, provider_status
from goal_card.quotes import RequestValidationError, parse_quote_text
from goal_card.runtime_config import (
    RuntimeConfig,
    current_runtime_config,
    load_runtime_config,
    set_current_runtime_config,
)
from goal_card.scanner import scan_quotes
from goal_card.service import STATUS_OK, handle_card_request
from goal_card.settings import Settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


class CLIError(RuntimeError):
    """User-facing CLI error."""


def _configure_logging(level_name: str) -> None:
    raw = (level_name or "WARNING").strip().upper()
    level = logging.getLevelName(raw)
    if not isinstance(level, int):
        raise CLIError(f"invalid --log-level: {level_name}")
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def _read_text(path_value: str) -> str:
    if path_value == "-":
        return sys.stdin.read()
    path = Path(path_value).expanduser()
    if not path.exists():
        raise FileNotFoundError(f"input file not found: {path}")
    return path.read_text(encoding="utf-8")


def _make_builder(args: argparse.Namespace, runtime: RuntimeConfig) -> CardBuilder:
    providers = [] if args.offline else build_providers(runtime, Settings())
    return CardBuilder(
        providers,
        anchor_weight=runtime.anchor_weight,
        timeout_s=runtime.provider_timeout_s,
        max_workers=runtime.provider_max_workers,
    )


def _request_from_args(args: argparse.Namespace) -> dict[str, Any]:
    if args.request:
        payload = json.loads(_read_text(args.request))
        if not isinstance(payload, dict):
            raise CLIError("request body must be a JSON object")
        return payload
    quotes = parse_quote_text(_read_text(args.odds_file))
    payload: dict[str, Any] = {
        "markets": [
            {"label": quote.label, "odds": quote.price, "opp": quote.opposite_price}
            for quote in quotes
        ],
    }
    for name, value in (
        ("fixture", args.fixture),
        ("home", args.home),
        ("away", args.away),
        ("leagueCode", args.league_code),
        ("leagueId", args.league_id),
    ):
        if value:
            payload[name] = value
    return payload


def _cmd_card(args: argparse.Namespace) -> int:
    runtime = current_runtime_config()
    payload = _request_from_args(args)
    status, body = handle_card_request(payload, _make_builder(args, runtime))
    print(json.dumps(body, indent=2))
    return 0 if status == STATUS_OK else 2


def _format_decision(decision: CandidateDecision) -> str:
    band = decision.band
    parts = [
        f"label={decision.quote.label!r}",
        f"price={decision.quote.price:.2f}",
        f"p_blend={to_pct(decision.blended_probability)}",
        f"p_nv={to_pct(decision.no_vig_probability)}",
        f"edge={to_pct(decision.edge)}",
        f"band={band.band_id}",
    ]
    if decision.passes:
        parts.append("status=PASS")
    else:
        parts.extend(
            [
                f"need_p={to_pct(band.min_blended_probability)}",
                f"need_edge={to_pct(band.min_edge)}",
                f"short_by={to_pct(decision.shortfall)}",
            ]
        )
    return " ".join(parts)


def _cmd_scan(args: argparse.Namespace) -> int:
    runtime = current_runtime_config()
    quotes = parse_quote_text(_read_text(args.odds_file))
    if not quotes:
        raise CLIError(f"no valid quotes in {args.odds_file}")

    p_card: dict[str, float] | None = None
    if args.with_card:
        request = CardRequest(
            quotes=tuple(quotes),
            fixture=args.fixture,
            home=args.home,
            away=args.away,
            hints=RoutingHints(
                home=args.home,
                away=args.away,
                league_code=args.league_code,
                league_id=args.league_id,
                fixture_key=args.fixture,
            ),
        )
        p_card = _make_builder(args, runtime).build(request).blend.p_card()

    config = runtime.scanner
    if args.near_miss_limit is not None:
        config = replace(config, near_miss_limit=args.near_miss_limit)
    result = scan_quotes(quotes, p_card=p_card, config=config)

    if args.out:
        written = write_decisions(result.decisions, Path(args.out).expanduser())
        print(f"wrote={written}")

    if args.json:
        output = {
            "p_card": p_card,
            "shortlist": [row.to_row() for row in result.shortlist],
            "near_misses": [row.to_row() for row in result.near_misses],
        }
        print(json.dumps(output, indent=2))
        return 0

    print(f"shortlist count={len(result.shortlist)}")
    for decision in result.shortlist:
        print(_format_decision(decision))
    print(f"near_misses count={len(result.near_misses)}")
    for decision in result.near_misses:
        print(_format_decision(decision))
    return 0


def _cmd_bands(args: argparse.Namespace) -> int:
    for band in (*ODDS_BANDS, OUTSIDE_BAND):
        price_range = (
            f"{band.min_price:.2f}-{band.max_price:.2f}"
            if band.min_price is not None and band.max_price is not None
            else "otherwise"
        )
        print(
            f"band={band.band_id} prices={price_range} "
            f"min_p={band.min_blended_probability:.2f} min_edge={band.min_edge:.2f}"
        )
    return 0


def _cmd_providers(args: argparse.Namespace) -> int:
    rows = provider_status(current_runtime_config(), Settings())
    if not rows:
        print("no providers configured")
        return 0
    for row in rows:
        print(
            f"source={row['source']} enabled={str(row['enabled']).lower()} "
            f"weight={row['weight']} credential={row['credential']}"
        )
    return 0


def _build_parser() -> argparse.ArgumentParser:
    return build_parser(handlers=sys.modules[__name__])


def main(argv: list[str] | None = None) -> int:
    """Run the CLI."""
    raw_argv = list(argv) if isinstance(argv, list) else sys.argv[1:]
    try:
        parsed_argv, config_override, log_level = extract_global_overrides(raw_argv)
        _configure_logging(log_level)
        config_path = Path(config_override).expanduser() if config_override else None
        runtime_config = load_runtime_config(config_path)
    except RuntimeError as exc:
        print(str(exc), file=sys.stderr)
        return 2
    try:
        set_current_runtime_config(runtime_config)

        parser = _build_parser()
        args = parser.parse_args(parsed_argv)
        func = getattr(args, "func", None)
        if func is None:
            parser.print_help()
            return 0
        try:
            return int(func(args))
        except (
            CLIError,
            RequestValidationError,
            FileNotFoundError,
            ValueError,
        ) as exc:
            print(str(exc), file=sys.stderr)
            return 2
    finally:
        set_current_runtime_config(None)


if __name__ == "__main__":
    raise SystemExit(main())

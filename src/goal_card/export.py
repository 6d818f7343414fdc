"""Tabular export of scanner decisions."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

import polars as pl

from goal_card.bands import CandidateDecision

DECISION_SCHEMA: list[tuple[str, Any]] = [
    ("label", pl.Utf8),
    ("price", pl.Float64),
    ("opposite_price", pl.Float64),
    ("p_nv", pl.Float64),
    ("p_blend", pl.Float64),
    ("edge", pl.Float64),
    ("band", pl.Utf8),
    ("min_p", pl.Float64),
    ("min_edge", pl.Float64),
    ("passes", pl.Boolean),
    ("shortfall", pl.Float64),
    ("ev", pl.Float64),
]


def decisions_frame(decisions: Sequence[CandidateDecision]) -> pl.DataFrame:
    schema_map = {name: dtype for name, dtype in DECISION_SCHEMA}
    columns = [name for name, _ in DECISION_SCHEMA]
    rows = [decision.to_row() for decision in decisions]
    if not rows:
        return pl.DataFrame(schema=schema_map)
    frame = pl.DataFrame(rows)
    for name, dtype in DECISION_SCHEMA:
        frame = frame.with_columns(pl.col(name).cast(dtype, strict=False))
    return frame.select(columns)


def write_decisions(decisions: Sequence[CandidateDecision], path: Path) -> Path:
    """Write decisions as CSV or Parquet, chosen by file suffix."""
    frame = decisions_frame(decisions)
    path.parent.mkdir(parents=True, exist_ok=True)
    suffix = path.suffix.lower()
    if suffix == ".csv":
        frame.write_csv(path)
    elif suffix == ".parquet":
        frame.write_parquet(path, compression="zstd")
    else:
        raise ValueError(f"unsupported export format: {path.name} (use .csv or .parquet)")
    return path

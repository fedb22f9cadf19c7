"""Generalized group/reduce used by every dashboard panel."""

from __future__ import annotations

from enum import Enum
from typing import List, Sequence, Union

import polars as pl

from mediaplan.application.reporting.metrics import safe_ratio_expr
from mediaplan.domain.models import AggregateEntry

KEY_COLUMN = "__key"
COMPOSITE_KEY_SEPARATOR = " - "
TOTAL_KEY = "TOTAL"

KeySpec = Union[str, Sequence[str], None]


class ReductionMode(str, Enum):
    SUM = "sum"
    AVERAGE = "average"
    RATIO = "ratio"


def _text_expr(column_name: str) -> pl.Expr:
    return pl.col(column_name).cast(pl.Utf8, strict=False).fill_null("")


def _value_expr(column_name: str) -> pl.Expr:
    return pl.col(column_name).cast(pl.Float64, strict=False).fill_null(0.0)


def key_expr(key: KeySpec) -> pl.Expr:
    if key is None:
        return pl.lit(TOTAL_KEY).alias(KEY_COLUMN)
    if isinstance(key, str):
        return _text_expr(key).alias(KEY_COLUMN)
    columns = list(key)
    if not columns:
        raise ValueError("Composite key needs at least one column")
    if len(columns) == 1:
        return _text_expr(columns[0]).alias(KEY_COLUMN)
    return pl.concat_str([_text_expr(column) for column in columns], separator=COMPOSITE_KEY_SEPARATOR).alias(
        KEY_COLUMN
    )


def _reduce_exprs(value: str, mode: ReductionMode, denominator: str | None) -> list[pl.Expr]:
    amount = _value_expr(value)
    if mode is ReductionMode.SUM:
        return [amount.sum().alias("__total")]
    if mode is ReductionMode.AVERAGE:
        # Non-positive contributions stay out of both the total and the count.
        positive = amount > 0
        return [
            pl.when(positive).then(amount).otherwise(0.0).sum().alias("__total"),
            positive.cast(pl.Int64).sum().alias("__count"),
        ]
    if denominator is None:
        raise ValueError("Ratio reduction requires a denominator column")
    return [
        amount.sum().alias("__numerator"),
        _value_expr(denominator).sum().alias("__denominator"),
    ]


def _metric_expr(mode: ReductionMode, scale: float) -> pl.Expr:
    if mode is ReductionMode.SUM:
        return pl.col("__total").alias("metric")
    if mode is ReductionMode.AVERAGE:
        return (
            pl.when(pl.col("__count") > 0)
            .then(pl.col("__total") / pl.col("__count"))
            .otherwise(0.0)
            .alias("metric")
        )
    return (safe_ratio_expr(pl.col("__numerator"), pl.col("__denominator")) * scale).fill_null(0.0).alias("metric")


def _to_entries(frame: pl.DataFrame, mode: ReductionMode) -> List[AggregateEntry]:
    entries: List[AggregateEntry] = []
    for row in frame.iter_rows(named=True):
        key = str(row[KEY_COLUMN])
        metric = float(row["metric"] or 0.0)
        if mode is ReductionMode.AVERAGE:
            entries.append(AggregateEntry(key=key, metric=metric, count=int(row["__count"] or 0)))
        elif mode is ReductionMode.RATIO:
            entries.append(
                AggregateEntry(
                    key=key,
                    metric=metric,
                    numerator=float(row["__numerator"] or 0.0),
                    denominator=float(row["__denominator"] or 0.0),
                )
            )
        else:
            entries.append(AggregateEntry(key=key, metric=metric))
    return entries


def group_reduce(
    frame: pl.DataFrame,
    key: KeySpec,
    value: str,
    mode: ReductionMode = ReductionMode.SUM,
    *,
    denominator: str | None = None,
    scale: float = 1.0,
    positive_only: bool = False,
    sort: bool = False,
    top_n: int | None = None,
) -> List[AggregateEntry]:
    """Group ``frame`` by ``key`` and reduce ``value`` into one entry per group.

    Groups come back in first-seen order unless ``sort`` is set, in which case
    they are ordered by metric, highest first, with ties left in first-seen
    order. ``top_n`` truncates after sorting and filtering.
    """
    mode = ReductionMode(mode)
    if frame.is_empty():
        return []

    grouped = (
        frame.with_columns(key_expr(key))
        .group_by(KEY_COLUMN, maintain_order=True)
        .agg(_reduce_exprs(value, mode, denominator))
        .with_columns(_metric_expr(mode, scale))
    )
    if positive_only:
        grouped = grouped.filter(pl.col("metric") > 0)
    if sort:
        grouped = grouped.sort("metric", descending=True, maintain_order=True)
    if top_n is not None:
        grouped = grouped.head(max(0, top_n))
    return _to_entries(grouped, mode)


def total(frame: pl.DataFrame, value: str) -> float:
    entries = group_reduce(frame, None, value)
    return entries[0].metric if entries else 0.0

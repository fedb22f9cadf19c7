"""Selection helpers applied to aggregate entries after reduction."""

from __future__ import annotations

from typing import Callable, List, Sequence

from mediaplan.domain.models import AggregateEntry


def first_matching(
    entries: Sequence[AggregateEntry],
    predicate: Callable[[AggregateEntry], bool],
    limit: int,
) -> List[AggregateEntry]:
    selected: List[AggregateEntry] = []
    for entry in entries:
        if len(selected) >= limit:
            break
        if predicate(entry):
            selected.append(entry)
    return selected


def has_positive_pair(entry: AggregateEntry) -> bool:
    return (entry.numerator or 0.0) > 0 and (entry.denominator or 0.0) > 0

"""Domain models for media plan line items and aggregate entries."""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass, fields
from typing import Any, Dict, List, Mapping

from mediaplan.domain.currency import parse_count, parse_currency

CAMPAIGN = "CAMPANHA"
MARKET = "PRAÇA"
CHANNEL = "MEIO"
OUTLET = "VEÍCULO"
MONTH = "MÊS"
REQUIRED_FIELDS: tuple[str, ...] = (CAMPAIGN, MARKET, CHANNEL, OUTLET, MONTH)

DIMENSION_COLUMNS: Dict[str, str] = {
    "campaign": CAMPAIGN,
    "market": MARKET,
    "channel": CHANNEL,
    "outlet": OUTLET,
    "placement": "APROVEITAMENTO / PROGRAMAÇÃO",
    "format": "FORMATO",
    "month": MONTH,
    "media_status": "STATUS MIDIA",
    "material_status": "STATUS MATERIAL",
    "checking": "CHECKING",
}
COUNT_COLUMNS: Dict[str, str] = {
    "insertions": "INS",
    "impressions": "IMPACTOS                   ESTIMADOS",
    "clicks": "CLIQUES",
    "leads": "LEAD",
    "conversions": "CONVERSÃO",
}
CURRENCY_COLUMNS: Dict[str, str] = {
    "unit_table_price": "R$ TABELA UNITÁRIO",
    "discount": "DESC.",
    "unit_negotiated_price": "R$ NEGOCIADO UNITÁRIO",
    "net_investment": "R$ NEGOCIADO TOTAL \n(LÍQUIDO)",
    "gross_investment": "R$ NEGOCIADO  TOTAL\n(BRUTO 20%)",
    "grp": "GRP",
    "cpm": "CPM",
    "universe": "UNIVERSO",
    "ctr": "CTR",
    "cpc": "CPC",
    "cpl": "CPL",
    "cpa": "CPA",
    "revenue": "RECEITA (R$)",
}


def header_key(name: Any) -> str:
    """Comparable form of a column header: NFC, upper case, single spaces."""
    text = unicodedata.normalize("NFC", str(name))
    return " ".join(text.split()).upper()


def _dimension(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


@dataclass(frozen=True)
class MediaPlanRecord:
    """One media plan line item with every numeric cell already parsed."""

    campaign: str = ""
    market: str = ""
    channel: str = ""
    outlet: str = ""
    placement: str = ""
    format: str = ""
    month: str = ""
    media_status: str = ""
    material_status: str = ""
    checking: str = ""
    insertions: float = 0.0
    impressions: float = 0.0
    clicks: float = 0.0
    leads: float = 0.0
    conversions: float = 0.0
    unit_table_price: float = 0.0
    discount: float = 0.0
    unit_negotiated_price: float = 0.0
    net_investment: float = 0.0
    gross_investment: float = 0.0
    grp: float = 0.0
    cpm: float = 0.0
    universe: float = 0.0
    ctr: float = 0.0
    cpc: float = 0.0
    cpl: float = 0.0
    cpa: float = 0.0
    revenue: float = 0.0

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "MediaPlanRecord":
        by_header = {header_key(name): value for name, value in row.items()}

        def _cell(column: str) -> Any:
            return by_header.get(header_key(column))

        values: Dict[str, Any] = {}
        for attr, column in DIMENSION_COLUMNS.items():
            values[attr] = _dimension(_cell(column))
        for attr, column in COUNT_COLUMNS.items():
            values[attr] = parse_count(_cell(column))
        for attr, column in CURRENCY_COLUMNS.items():
            values[attr] = parse_currency(_cell(column))
        return cls(**values)

    @classmethod
    def dimension_names(cls) -> List[str]:
        return [f.name for f in fields(cls) if f.type in ("str", str)]

    @classmethod
    def metric_names(cls) -> List[str]:
        return [f.name for f in fields(cls) if f.type in ("float", float)]


@dataclass(frozen=True)
class AggregateEntry:
    key: str
    metric: float
    count: int | None = None
    numerator: float | None = None
    denominator: float | None = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"key": self.key, "metric": self.metric}
        if self.count is not None:
            payload["count"] = self.count
        if self.numerator is not None:
            payload["numerator"] = self.numerator
        if self.denominator is not None:
            payload["denominator"] = self.denominator
        return payload

"""Shared enumerations for all CyberLens domain objects."""

from enum import StrEnum


class RiskCategory(StrEnum):
    """Risk classification assigned by the upstream service."""

    LOW = "Low Risk"
    MEDIUM = "Medium Risk"
    HIGH = "High Risk"

    @classmethod
    def parse(cls, value: object) -> "RiskCategory | None":
        """Accept both wire ("High Risk") and short ("High") spellings."""
        if isinstance(value, RiskCategory):
            return value
        if not isinstance(value, str):
            return None
        text = value.strip().lower()
        if text.endswith(" risk"):
            text = text[: -len(" risk")]
        for member in cls:
            if member.value.lower() == f"{text} risk":
                return member
        return None


class Indicator(StrEnum):
    """Numeric dimensions carried by a metric record."""

    CEI = "cei"
    GCI = "gci"
    NCSI = "ncsi"
    DDL = "ddl"
    RISK_SCORE = "risk_score"

    @property
    def display_factor(self) -> float:
        """Multiplier from the stored scale to the 0-100 display scale."""
        if self in (Indicator.CEI, Indicator.RISK_SCORE):
            return 100.0
        return 1.0

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    Indicator.CEI: "Cybersecurity Exposure Index (%)",
    Indicator.GCI: "Global Cybersecurity Index",
    Indicator.NCSI: "National Cyber Security Index",
    Indicator.DDL: "Digital Development Level",
    Indicator.RISK_SCORE: "Risk Score (%)",
}


class MatchMethod(StrEnum):
    """Which reconciliation rule produced a polygon match."""

    EXACT = "exact"
    ALIAS = "alias"
    SUBSTRING = "substring"
    NONE = "none"


class GeometryStatus(StrEnum):
    """Presentation classification of an enriched polygon."""

    MATCHED = "matched"
    FILTERED_OUT = "filtered_out"
    NO_DATA = "no_data"


class SortDirection(StrEnum):
    """Ordering for table views."""

    ASC = "asc"
    DESC = "desc"


class TrendDirection(StrEnum):
    """How a group's mean sits relative to the global average."""

    UP = "up"
    DOWN = "down"
    STABLE = "stable"

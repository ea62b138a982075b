"""Metric record models — one immutable row per country."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from cyberlens.models.enums import Indicator, RiskCategory


class MetricRecord(BaseModel):
    """A country's cybersecurity indicators plus its upstream risk classification.

    Values are kept on their natural scale (CEI and risk score in 0-1).
    Conversion to the 0-100 display scale happens in the consumers via
    ``display_value``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(alias="Country")
    region: str = Field(alias="Region")
    cei: float = Field(0.0, alias="CEI", description="Exposure index, 0-1")
    gci: float = Field(0.0, alias="GCI", description="Global Cybersecurity Index, 0-100")
    ncsi: float = Field(0.0, alias="NCSI", description="National Cyber Security Index, 0-100")
    ddl: float = Field(0.0, alias="DDL", description="Digital Development Level, 0-10")
    risk_score: float = Field(0.0, alias="Risk_Score", description="Derived risk, 0-1")
    risk_category: RiskCategory = Field(alias="Risk_Category")

    def value(self, indicator: Indicator) -> float:
        """Stored value of an indicator."""
        return getattr(self, indicator.value)

    def display_value(self, indicator: Indicator) -> float:
        """Value of an indicator on the 0-100 display scale."""
        return self.value(indicator) * indicator.display_factor

    @property
    def key(self) -> str:
        """Identity key used for selections and de-duplication."""
        return self.name

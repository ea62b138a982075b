"""Filter state models — immutable values replaced wholesale on every edit."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from cyberlens.models.enums import Indicator, RiskCategory

logger = logging.getLogger(__name__)

DISPLAY_MIN = 0.0
DISPLAY_MAX = 100.0


class NumericRange(BaseModel):
    """Inclusive ``[low, high]`` bound on the 0-100 display scale.

    Inverted bounds are swapped once both are coerced to floats, so
    ``low <= high`` always holds once a range exists. Non-finite bounds
    are rejected.
    """

    model_config = ConfigDict(frozen=True)

    low: float = Field(DISPLAY_MIN, allow_inf_nan=False)
    high: float = Field(DISPLAY_MAX, allow_inf_nan=False)

    @model_validator(mode="before")
    @classmethod
    def _from_pair(cls, data: Any) -> Any:
        if isinstance(data, (list, tuple)):
            if len(data) != 2:
                raise ValueError(f"range needs exactly two bounds, got {len(data)}")
            return {"low": data[0], "high": data[1]}
        return data

    @model_validator(mode="after")
    def _order_bounds(self) -> NumericRange:
        if self.low > self.high:
            logger.debug("Swapping inverted range bounds (%s, %s)", self.low, self.high)
            low, high = self.high, self.low
            object.__setattr__(self, "low", low)
            object.__setattr__(self, "high", high)
        return self

    @classmethod
    def of(cls, low: float, high: float) -> NumericRange:
        return cls(low=low, high=high)

    def contains(self, value: float) -> bool:
        return self.low <= value <= self.high

    def as_tuple(self) -> tuple[float, float]:
        return (self.low, self.high)


class FilterState(BaseModel):
    """Composite filter: categorical selections plus one range per indicator.

    An empty selection set means "no restriction" on that dimension.
    """

    model_config = ConfigDict(frozen=True)

    regions: frozenset[str] = Field(default_factory=frozenset)
    risk_categories: frozenset[RiskCategory] = Field(default_factory=frozenset)
    cei: NumericRange = Field(default_factory=NumericRange)
    gci: NumericRange = Field(default_factory=NumericRange)
    ncsi: NumericRange = Field(default_factory=NumericRange)
    ddl: NumericRange = Field(default_factory=NumericRange)
    risk_score: NumericRange = Field(default_factory=NumericRange)

    @field_validator("risk_categories", mode="before")
    @classmethod
    def _parse_categories(cls, value: Any) -> Any:
        if value is None:
            return frozenset()
        if isinstance(value, (str, RiskCategory)):
            value = [value]
        parsed = []
        for item in value:
            category = RiskCategory.parse(item)
            if category is None:
                raise ValueError(f"unknown risk category: {item!r}")
            parsed.append(category)
        return frozenset(parsed)

    def range_for(self, indicator: Indicator) -> NumericRange:
        return getattr(self, indicator.value)

    def ranges(self) -> dict[Indicator, NumericRange]:
        return {indicator: self.range_for(indicator) for indicator in Indicator}

    def with_regions(self, regions: set[str] | frozenset[str] | list[str]) -> FilterState:
        return self.model_copy(update={"regions": frozenset(regions)})

    def with_categories(self, categories) -> FilterState:
        return self.model_validate(
            {**self.model_dump(), "risk_categories": list(categories)}
        )

    def with_range(self, indicator: Indicator, low: float, high: float) -> FilterState:
        """Replace one range; inverted bounds are normalized before storing."""
        return self.model_copy(update={indicator.value: NumericRange.of(low, high)})

    @property
    def is_categorically_unrestricted(self) -> bool:
        return not self.regions and not self.risk_categories

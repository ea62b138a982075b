"""Opaque analytics payloads passed through from the backend untouched."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class AnalyticsBundle(BaseModel):
    """Correlation matrix and feature importances as delivered by the backend."""

    correlation: dict[str, Any] = Field(default_factory=dict)
    feature_importance: list[dict[str, Any]] = Field(default_factory=list)

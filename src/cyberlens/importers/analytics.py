"""Pass-through import of correlation and feature-importance payloads."""

from __future__ import annotations

import logging
from typing import Any

from cyberlens.models.analytics import AnalyticsBundle

logger = logging.getLogger(__name__)


def load_analytics(correlation: Any = None, feature_importance: Any = None) -> AnalyticsBundle:
    """Wrap backend analytics payloads without interpreting them.

    ``feature_importance`` may be the bare list or the
    ``{"feature_importance": [...]}`` envelope.
    """
    if isinstance(feature_importance, dict):
        feature_importance = feature_importance.get("feature_importance", [])
    if correlation is not None and not isinstance(correlation, dict):
        logger.warning("Ignoring correlation payload of type %s", type(correlation).__name__)
        correlation = None
    if feature_importance is not None and not isinstance(feature_importance, list):
        logger.warning(
            "Ignoring feature importance payload of type %s", type(feature_importance).__name__
        )
        feature_importance = None
    return AnalyticsBundle(
        correlation=correlation or {},
        feature_importance=[f for f in feature_importance or [] if isinstance(f, dict)],
    )

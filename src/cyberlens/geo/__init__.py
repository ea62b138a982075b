"""Polygon name reconciliation and map presentation values."""

from cyberlens.geo.presentation import enrich_polygons, status_counts
from cyberlens.geo.reconciler import NameReconciler, load_aliases

__all__ = ["NameReconciler", "enrich_polygons", "load_aliases", "status_counts"]

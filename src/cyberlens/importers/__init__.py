"""Importers for backend and geography payloads."""

from cyberlens.importers.analytics import load_analytics
from cyberlens.importers.countries import CountryImporter, load_countries, load_countries_file
from cyberlens.importers.geojson import GeoJsonImporter, load_polygons, load_polygons_file

__all__ = [
    "CountryImporter",
    "GeoJsonImporter",
    "load_analytics",
    "load_countries",
    "load_countries_file",
    "load_polygons",
    "load_polygons_file",
]

from daily_guesser.catalog import BoundingBox, Catalog, CountryRecord, load_catalog
from daily_guesser.daily import DailySelection, daily_selection, todays_selection
from daily_guesser.errors import CatalogError, GuesserError, InvalidSampleSize, UnknownCountry
from daily_guesser.geodesic import bearing_deg, distance_km
from daily_guesser.metadata import CountryMetadata, DistanceEntry, build_metadata
from daily_guesser.sampler import sample

__all__ = [
    "BoundingBox",
    "Catalog",
    "CatalogError",
    "CountryMetadata",
    "CountryRecord",
    "DailySelection",
    "DistanceEntry",
    "GuesserError",
    "InvalidSampleSize",
    "UnknownCountry",
    "bearing_deg",
    "build_metadata",
    "daily_selection",
    "distance_km",
    "load_catalog",
    "sample",
    "todays_selection",
]

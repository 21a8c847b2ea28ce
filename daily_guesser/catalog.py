import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Tuple

import pandas as pd

from daily_guesser.errors import CatalogError, UnknownCountry

logger = logging.getLogger(__name__)

COUNTRIES_FILE = "countries.csv"
COUNTRY_LIST_FILE = "country_list.json"

CSV_COLUMNS = ["code", "name", "latitude", "longitude", "min_lat", "max_lat", "min_lon", "max_lon"]


@dataclass(frozen=True)
class BoundingBox:
    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float


@dataclass(frozen=True)
class CountryRecord:
    code: str
    name: str
    latitude: float
    longitude: float
    bounding_box: BoundingBox

    @property
    def lat_lon(self):
        return (self.latitude, self.longitude)

    def to_dict(self) -> dict:
        box = self.bounding_box
        return {
            "code": self.code,
            "name": self.name,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "bounding_box": {
                "min_lat": box.min_lat,
                "max_lat": box.max_lat,
                "min_lon": box.min_lon,
                "max_lon": box.max_lon,
            },
        }


@dataclass(frozen=True)
class Catalog:
    """Every playable country plus the fixed order in which they become the daily target.

    Built once at startup and handed to the engine; nothing mutates it afterwards.
    """

    countries: Tuple[CountryRecord, ...]
    permutation: Tuple[str, ...]
    _by_code: Dict[str, CountryRecord] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        by_code = {}
        for country in self.countries:
            if country.code in by_code:
                raise CatalogError(f"Duplicate country code {country.code!r}")
            if not -90 <= country.latitude <= 90:
                raise CatalogError(f"Latitude out of range for {country.code}: {country.latitude}")
            if not -180 <= country.longitude <= 180:
                raise CatalogError(f"Longitude out of range for {country.code}: {country.longitude}")
            by_code[country.code] = country

        if not self.permutation:
            raise CatalogError("Daily country list is empty")
        missing = [code for code in self.permutation if code not in by_code]
        if missing:
            raise CatalogError(f"Daily country list references unknown codes: {', '.join(missing)}")

        object.__setattr__(self, "_by_code", by_code)

    def __len__(self):
        return len(self.countries)

    def __contains__(self, code):
        return code in self._by_code

    def get(self, code) -> CountryRecord:
        try:
            return self._by_code[code]
        except KeyError:
            raise UnknownCountry(code) from None

    def codes(self):
        return [c.code for c in self.countries]


def catalog_from_frame(df: pd.DataFrame, permutation) -> Catalog:
    """Build a catalog from a frame with the CSV_COLUMNS layout."""
    absent = [c for c in CSV_COLUMNS if c not in df.columns]
    if absent:
        raise CatalogError(f"Country data is missing columns: {', '.join(absent)}")

    if df[CSV_COLUMNS].isna().any().any():
        raise CatalogError("Country data contains empty cells")

    countries = tuple(
        CountryRecord(
            code=str(row.code).upper(),
            name=str(row.name),
            latitude=float(row.latitude),
            longitude=float(row.longitude),
            bounding_box=BoundingBox(
                min_lat=float(row.min_lat),
                max_lat=float(row.max_lat),
                min_lon=float(row.min_lon),
                max_lon=float(row.max_lon),
            ),
        )
        for row in df.itertuples(index=False)
    )
    return Catalog(countries=countries, permutation=tuple(str(c).upper() for c in permutation))


def load_catalog(data_dir) -> Catalog:
    """Read countries.csv and country_list.json from data_dir."""
    data_dir = Path(data_dir)
    countries_path = data_dir / COUNTRIES_FILE
    list_path = data_dir / COUNTRY_LIST_FILE

    # keep_default_na off, otherwise Namibia's "NA" code is read as missing
    df = pd.read_csv(countries_path, keep_default_na=False, na_values=[""], encoding="utf-8")
    with list_path.open("r", encoding="utf-8") as f:
        permutation = json.load(f)

    catalog = catalog_from_frame(df, permutation)
    logger.info(
        "Loaded %d countries and a daily list of %d from %s",
        len(catalog), len(catalog.permutation), data_dir,
    )
    return catalog

from datetime import datetime, timezone

import pytest

from daily_guesser.catalog import BoundingBox, Catalog, CountryRecord

EPOCH = datetime(2022, 3, 31, 16, 0, tzinfo=timezone.utc)


def make_country(code, name, lat, lon):
    return CountryRecord(
        code=code,
        name=name,
        latitude=lat,
        longitude=lon,
        bounding_box=BoundingBox(lat - 1, lat + 1, lon - 1, lon + 1),
    )


@pytest.fixture
def small_catalog():
    return Catalog(
        countries=(
            make_country("US", "United States", 38, -97),
            make_country("FR", "France", 46, 2),
            make_country("AU", "Australia", -25, 133),
        ),
        permutation=("FR", "US", "AU"),
    )


@pytest.fixture
def bonus_catalog():
    """Enough countries for a six-flag bonus round."""
    return Catalog(
        countries=(
            make_country("US", "United States", 38, -97),
            make_country("FR", "France", 46, 2),
            make_country("AU", "Australia", -25, 133),
            make_country("BR", "Brazil", -10, -55),
            make_country("JP", "Japan", 36, 138),
            make_country("ZA", "South Africa", -29, 24),
            make_country("CI", "Côte d'Ivoire", 8, -5),
            make_country("CA", "Canada", 60, -95),
        ),
        permutation=("JP", "FR", "CI"),
    )


@pytest.fixture
def epoch():
    return EPOCH

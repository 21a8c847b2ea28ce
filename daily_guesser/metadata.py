import logging
import math
import random
import unicodedata
from dataclasses import dataclass
from typing import Tuple

from daily_guesser.catalog import CountryRecord
from daily_guesser.errors import UnknownCountry
from daily_guesser.geodesic import bearing_deg, distance_km
from daily_guesser.sampler import sample

logger = logging.getLogger(__name__)

DEFAULT_BONUS_ROUND_SIZE = 6


@dataclass(frozen=True)
class DistanceEntry:
    country_code: str
    country_name: str
    distance_km: int
    bearing_deg: int


@dataclass(frozen=True)
class CountryMetadata:
    target: CountryRecord
    distances: Tuple[DistanceEntry, ...]
    bonus_candidates: Tuple[str, ...]

    def entry_for(self, code) -> DistanceEntry:
        for entry in self.distances:
            if entry.country_code == code:
                return entry
        raise UnknownCountry(code)

    def to_dict(self) -> dict:
        return {
            "target": self.target.to_dict(),
            "distances": [
                {
                    "country_code": e.country_code,
                    "country_name": e.country_name,
                    "distance_km": e.distance_km,
                    "bearing_deg": e.bearing_deg,
                }
                for e in self.distances
            ],
            "bonus_candidates": list(self.bonus_candidates),
        }


def _round_half_up(value):
    return int(math.floor(value + 0.5))


def name_sort_key(name):
    """Collation key that orders accented names next to their plain spelling."""
    decomposed = unicodedata.normalize("NFKD", name)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (stripped.casefold(), name)


def distance_entry(country: CountryRecord, target: CountryRecord) -> DistanceEntry:
    """Distance and heading from ``country`` towards ``target``."""
    return DistanceEntry(
        country_code=country.code,
        country_name=country.name,
        distance_km=_round_half_up(distance_km(country.lat_lon, target.lat_lon)),
        bearing_deg=_round_half_up(bearing_deg(country.lat_lon, target.lat_lon)) % 360,
    )


def build_metadata(catalog, target_code, seed, bonus_round_size=DEFAULT_BONUS_ROUND_SIZE, shuffle_rng=None):
    """Assemble everything a client needs to play one puzzle.

    ``seed`` keys the bonus-round sample, so every player sees the same flags
    for a given puzzle. The order those flags are shown in comes from a final
    shuffle that is *not* seeded (pass ``shuffle_rng`` to pin it down).
    """
    target = catalog.get(target_code)

    # sorted() is stable, so equal keys keep catalog order
    distances = tuple(
        sorted(
            (distance_entry(country, target) for country in catalog.countries),
            key=lambda e: name_sort_key(e.country_name),
        )
    )

    others = [code for code in catalog.codes() if code != target.code]
    candidates = sample(others, bonus_round_size - 1, seed)
    candidates.append(target.code)
    (shuffle_rng or random).shuffle(candidates)

    logger.debug(
        "Built metadata for %s (seed=%s): %d distances, bonus round %s",
        target.code, seed, len(distances), candidates,
    )
    return CountryMetadata(
        target=target,
        distances=distances,
        bonus_candidates=tuple(candidates),
    )

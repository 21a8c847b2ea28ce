import random

import pytest

from daily_guesser.catalog import Catalog
from daily_guesser.errors import InvalidSampleSize, UnknownCountry
from daily_guesser.metadata import build_metadata, name_sort_key
from tests.conftest import make_country


def test_france_scenario(small_catalog):
    metadata = build_metadata(small_catalog, "FR", 1, bonus_round_size=3)
    by_code = {e.country_code: e for e in metadata.distances}

    us = by_code["US"]
    assert 7610 <= us.distance_km <= 7710
    # Bearings point from each country towards the target: US -> FR is north-east
    assert 40 <= us.bearing_deg <= 55

    assert by_code["FR"].distance_km == 0
    assert by_code["FR"].bearing_deg == 0

    assert by_code["AU"].distance_km == max(e.distance_km for e in metadata.distances)


def test_distances_cover_catalog_sorted_by_name(bonus_catalog):
    metadata = build_metadata(bonus_catalog, "JP", 7)
    assert len(metadata.distances) == len(bonus_catalog)
    assert {e.country_code for e in metadata.distances} == set(bonus_catalog.codes())

    names = [e.country_name for e in metadata.distances]
    assert names == [
        "Australia",
        "Brazil",
        "Canada",
        "Côte d'Ivoire",
        "France",
        "Japan",
        "South Africa",
        "United States",
    ]


def test_exactly_one_zero_distance(bonus_catalog):
    metadata = build_metadata(bonus_catalog, "BR", 3)
    zeros = [e for e in metadata.distances if e.distance_km == 0]
    assert [e.country_code for e in zeros] == ["BR"]


def test_entries_are_rounded(bonus_catalog):
    metadata = build_metadata(bonus_catalog, "ZA", 3)
    for e in metadata.distances:
        assert isinstance(e.distance_km, int)
        assert isinstance(e.bearing_deg, int)
        assert e.distance_km >= 0
        assert 0 <= e.bearing_deg < 360


def test_target_record(small_catalog):
    metadata = build_metadata(small_catalog, "AU", 1, bonus_round_size=2)
    assert metadata.target is small_catalog.get("AU")


def test_unknown_country(small_catalog):
    with pytest.raises(UnknownCountry) as exc:
        build_metadata(small_catalog, "ZZ", 1, bonus_round_size=2)
    assert exc.value.code == "ZZ"


def test_bonus_candidates(bonus_catalog):
    metadata = build_metadata(bonus_catalog, "FR", 12)
    assert len(metadata.bonus_candidates) == 6
    assert len(set(metadata.bonus_candidates)) == 6
    assert metadata.bonus_candidates.count("FR") == 1
    assert set(metadata.bonus_candidates) <= set(bonus_catalog.codes())


def test_bonus_candidates_reproducible_as_a_set(bonus_catalog):
    first = build_metadata(bonus_catalog, "FR", 12)
    second = build_metadata(bonus_catalog, "FR", 12)
    assert set(first.bonus_candidates) == set(second.bonus_candidates)


def test_display_shuffle_can_be_pinned(bonus_catalog):
    first = build_metadata(bonus_catalog, "FR", 12, shuffle_rng=random.Random(0))
    second = build_metadata(bonus_catalog, "FR", 12, shuffle_rng=random.Random(0))
    assert first == second


def test_bonus_round_too_large(small_catalog):
    with pytest.raises(InvalidSampleSize):
        build_metadata(small_catalog, "FR", 1, bonus_round_size=6)


def test_to_dict(small_catalog):
    data = build_metadata(small_catalog, "FR", 1, bonus_round_size=3).to_dict()
    assert data["target"]["code"] == "FR"
    assert data["target"]["bounding_box"] == {"min_lat": 45, "max_lat": 47, "min_lon": 1, "max_lon": 3}
    assert len(data["distances"]) == 3
    assert sorted(data["bonus_candidates"]) == ["AU", "FR", "US"]


def test_entry_for(small_catalog):
    metadata = build_metadata(small_catalog, "FR", 1, bonus_round_size=3)
    assert metadata.entry_for("US").country_name == "United States"
    with pytest.raises(UnknownCountry):
        metadata.entry_for("ZZ")


def test_name_sort_key_ignores_accents_and_case():
    names = ["Zambia", "Åland Islands", "albania", "Curaçao", "Cuba", "Czechia"]
    assert sorted(names, key=name_sort_key) == ["Åland Islands", "albania", "Cuba", "Curaçao", "Czechia", "Zambia"]


def test_equal_names_keep_catalog_order():
    catalog = Catalog(
        countries=(
            make_country("CG", "Congo", -1, 15),
            make_country("AU", "Australia", -25, 133),
            make_country("CD", "Congo", 0, 25),
            make_country("BR", "Brazil", -10, -55),
        ),
        permutation=("CG",),
    )
    metadata = build_metadata(catalog, "BR", 1, bonus_round_size=2)
    assert [e.country_code for e in metadata.distances] == ["AU", "BR", "CG", "CD"]

    swapped = Catalog(countries=(catalog.countries[2], catalog.countries[0]), permutation=("CD",))
    metadata = build_metadata(swapped, "CD", 1, bonus_round_size=2)
    assert [e.country_code for e in metadata.distances] == ["CD", "CG"]

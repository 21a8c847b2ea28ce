"""Rebuild daily_guesser/data from the Natural Earth admin-0 shapefile.

Run by hand when the country list needs refreshing. It also writes a new
shuffled daily list, which changes every future puzzle, so commit it with care.
"""

import argparse
import json
import logging
import random
from pathlib import Path

import geopandas as gpd
import pandas as pd
import requests

from daily_guesser.catalog import COUNTRIES_FILE, COUNTRY_LIST_FILE, CSV_COLUMNS, catalog_from_frame
from daily_guesser.logging_config import setup_logging

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent
OUTPUT_DIR = BASE_DIR / "daily_guesser" / "data"
CACHE_DIR = BASE_DIR / "data"
NATURAL_EARTH_URL = "https://naciscdn.org/naturalearth/110m/cultural/ne_110m_admin_0_countries.zip"


def download_shapefile(url=NATURAL_EARTH_URL, cache_dir=CACHE_DIR):
    """Fetch the zipped shapefile once and reuse the local copy afterwards."""
    target = Path(cache_dir) / url.rsplit("/", 1)[-1]
    if target.exists():
        return target

    logger.info("Downloading %s", url)
    r = requests.get(url, timeout=60)
    r.raise_for_status()
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(r.content)
    return target


def load_world_geodata(shapefile_path):
    gdf = gpd.read_file(shapefile_path)
    if gdf.crs and gdf.crs.to_epsg() != 4326:
        gdf = gdf.to_crs(epsg=4326)

    # Natural Earth uses -99 for places without an ISO code
    gdf = gdf[gdf["ISO_A2_EH"].str.len() == 2].copy()

    gdf_proj = gdf.to_crs(epsg=3857)
    gdf["centroid"] = gdf_proj.geometry.centroid.to_crs(epsg=4326)
    return gdf


def build_country_frame(gdf) -> pd.DataFrame:
    bounds = gdf.geometry.bounds
    df = pd.DataFrame({
        "code": gdf["ISO_A2_EH"].str.upper(),
        "name": gdf["NAME_EN"],
        "latitude": gdf["centroid"].y.round(2),
        "longitude": gdf["centroid"].x.round(2),
        "min_lat": bounds["miny"].round(2),
        "max_lat": bounds["maxy"].round(2),
        "min_lon": bounds["minx"].round(2),
        "max_lon": bounds["maxx"].round(2),
    })
    df = df.drop_duplicates(subset="code").sort_values("code")
    return df[CSV_COLUMNS].reset_index(drop=True)


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--shapefile", help="local shapefile or zip; downloaded when omitted")
    parser.add_argument("--output-dir", default=str(OUTPUT_DIR))
    parser.add_argument("--seed", help="seed for the daily list shuffle")
    args = parser.parse_args(argv)

    setup_logging()

    shapefile = args.shapefile or download_shapefile()
    gdf = load_world_geodata(shapefile)
    logger.info("Read %d countries from %s", len(gdf), shapefile)

    df = build_country_frame(gdf)
    permutation = df["code"].tolist()
    random.Random(args.seed).shuffle(permutation)

    # Fails loudly on duplicate codes or bad coordinates before anything is written
    catalog_from_frame(df, permutation)

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    df.to_csv(output_dir / COUNTRIES_FILE, index=False, encoding="utf-8")
    with (output_dir / COUNTRY_LIST_FILE).open("w", encoding="utf-8") as f:
        json.dump(permutation, f, indent=2)
        f.write("\n")

    logger.info("Wrote %d countries to %s", len(df), output_dir)


if __name__ == "__main__":
    main()

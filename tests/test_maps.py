import os

import geopandas as gpd
import pandas as pd
import pytest
from shapely.geometry import box

from maps import aggregate_by_region, join_regions, load_state_polygons, plot_choropleth


@pytest.fixture
def state_polygons():
    return gpd.GeoDataFrame(
        {"NAME": ["Montana", "Texas", "Georgia", "Ohio", "Alaska"]},
        geometry=[
            box(-116, 44, -104, 49),
            box(-106, 26, -94, 36),
            box(-85, 30, -81, 35),
            box(-85, 38, -80, 42),
            box(-168, 54, -141, 71),
        ],
        crs="EPSG:4326",
    )


@pytest.fixture
def states_file(tmp_path, state_polygons):
    path = tmp_path / "states.geojson"
    state_polygons.to_file(path, driver="GeoJSON")
    return str(path)


def test_load_state_polygons(states_file):
    states = load_state_polygons(states_file, exclude=["alaska"])

    assert set(states["region"]) == {"montana", "texas", "georgia", "ohio"}
    assert states.crs is not None


def test_aggregate_by_region(prepared_fires):
    stats = aggregate_by_region(prepared_fires)

    assert stats["fire_count"].sum() == prepared_fires["region"].notna().sum()
    montana = stats.set_index("region").loc["montana"]
    assert montana["top_cause"] == "Lightning"
    expected = prepared_fires.loc[prepared_fires["region"] == "montana", "FIRE_SIZE"]
    assert montana["total_acres"] == pytest.approx(expected.sum())
    assert montana["mean_fire_size"] == pytest.approx(expected.mean())


def test_join_regions_keeps_states_without_fires(prepared_fires, states_file):
    polygons = load_state_polygons(states_file, exclude=["alaska"])
    stats = aggregate_by_region(prepared_fires)

    joined = join_regions(polygons, stats).set_index("region")

    assert len(joined) == 4
    assert pd.isna(joined.loc["ohio", "fire_count"])
    assert pd.isna(joined.loc["ohio", "fires_per_1000_sq_km"])
    assert joined.loc["texas", "area_sq_km"] > joined.loc["georgia", "area_sq_km"]
    assert joined.loc["georgia", "fires_per_1000_sq_km"] == pytest.approx(
        joined.loc["georgia", "fire_count"] / joined.loc["georgia", "area_sq_km"] * 1000
    )


def test_plot_choropleth(prepared_fires, states_file, tmp_path):
    polygons = load_state_polygons(states_file, exclude=[])
    joined = join_regions(polygons, aggregate_by_region(prepared_fires))
    assert pd.isna(joined.set_index("region").loc["alaska", "fire_count"])

    path = plot_choropleth(
        joined, "fire_count", "Fires", "choropleth.png", plots_dir=str(tmp_path)
    )

    assert os.path.exists(path)
    assert os.path.getsize(path) > 0


def test_aggregate_by_region_with_no_known_causes(prepared_fires):
    df = prepared_fires.copy()
    df.loc[df["region"] == "georgia", "STAT_CAUSE_DESCR"] = None

    stats = aggregate_by_region(df).set_index("region")

    assert pd.isna(stats.loc["georgia", "top_cause"])
    assert stats.loc["georgia", "fire_count"] == (df["region"] == "georgia").sum()
    assert stats.loc["montana", "top_cause"] == "Lightning"

import geopandas as gpd
import matplotlib.pyplot as plt
from config import *
from data_preprocessing import load_fires, add_region, most_common
import os

CHOROPLETHS = [
    ("fire_count", "Number of Wildfires by State", "choropleth_fire_count.png"),
    ("total_acres", "Total Acres Burned by State", "choropleth_total_acres.png"),
    (
        "fires_per_1000_sq_km",
        "Wildfires per 1000 sq km by State",
        "choropleth_fire_density.png",
    ),
]


def load_state_polygons(
    path=STATES_SHAPEFILE, exclude=MAP_EXCLUDE_REGIONS, name_col="NAME"
):
    # State polygons keyed by lower-cased state name
    states = gpd.read_file(path)
    states["region"] = states[name_col].str.lower()
    states = states[~states["region"].isin(exclude)].reset_index(drop=True)

    print(f"Loaded {len(states)} state polygons")
    return states


def aggregate_by_region(df):
    # Per-state fire statistics, rows without a region are dropped
    stats = (
        df.dropna(subset=["region"])
        .groupby("region")
        .agg(
            fire_count=("FIRE_SIZE", "size"),
            total_acres=("FIRE_SIZE", "sum"),
            mean_fire_size=("FIRE_SIZE", "mean"),
            top_cause=(TARGET_COL, most_common),
        )
        .reset_index()
    )
    return stats


def join_regions(polygons, stats, equal_area_crs=EQUAL_AREA_CRS):
    """
    Attach per-region statistics to the state polygons

    Parameters:
    -----------
    polygons : gpd.GeoDataFrame
        State polygons with a 'region' column and a CRS set
    stats : pd.DataFrame
        Output of aggregate_by_region
    equal_area_crs : str
        Projection used to measure polygon areas

    Returns:
    --------
    gpd.GeoDataFrame : every polygon, NaN statistics where a state had no fires
    """
    merged = polygons.merge(stats, on="region", how="left")

    area_sq_km = merged.to_crs(equal_area_crs).geometry.area / 1e6
    merged["area_sq_km"] = area_sq_km.values
    merged["fires_per_1000_sq_km"] = merged["fire_count"] / merged["area_sq_km"] * 1000

    return merged


def plot_choropleth(gdf, column, title, filename, plots_dir=PLOTS_DIR):
    # Render one choropleth, states without data drawn in grey
    os.makedirs(plots_dir, exist_ok=True)

    fig, ax = plt.subplots(figsize=(15, 9))
    gdf.plot(
        column=column,
        ax=ax,
        legend=True,
        cmap="YlOrRd",
        edgecolor="black",
        linewidth=0.3,
        missing_kwds={"color": "lightgrey"},
    )
    ax.set_title(title)
    ax.set_axis_off()
    plt.tight_layout()

    path = os.path.join(plots_dir, filename)
    plt.savefig(path)
    plt.close(fig)
    return path


def main():
    print("Starting Choropleth Maps...")
    print("=" * 50)

    df = load_fires()
    df = add_region(df)

    polygons = load_state_polygons()
    stats = aggregate_by_region(df)
    state_map = join_regions(polygons, stats)

    for column, title, filename in CHOROPLETHS:
        plot_choropleth(state_map, column, title, filename)

    print("\nTop 10 states by fire density:")
    print(
        state_map.sort_values("fires_per_1000_sq_km", ascending=False)[
            ["region", "fire_count", "fires_per_1000_sq_km", "top_cause"]
        ].head(10)
    )

    print(f"\nMaps saved to {PLOTS_DIR}")


if __name__ == "__main__":
    main()

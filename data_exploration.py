import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np
from config import PLOTS_DIR, TARGET_COL
from data_preprocessing import load_fires, add_date_fields, add_region, most_common
import os

WEEKDAYS = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
]


def save_figure(fig, plots_dir, filename):
    fig.tight_layout()
    path = os.path.join(plots_dir, filename)
    fig.savefig(path)
    plt.close(fig)
    return path


def plot_counts(counts, filename, title, xlabel, ylabel, plots_dir, kind="bar"):
    # one series of counts as a bar, horizontal bar or line chart
    fig, ax = plt.subplots(figsize=(12, 6))
    positions = range(len(counts))

    if kind == "barh":
        ax.barh(positions, counts.values)
        ax.set_yticks(positions)
        ax.set_yticklabels(counts.index)
        ax.invert_yaxis()
    elif kind == "line":
        ax.plot(counts.index, counts.values, marker="o", markersize=3)
        ax.grid(True, alpha=0.3)
    else:
        ax.bar(positions, counts.values)
        ax.set_xticks(positions)
        ax.set_xticklabels(counts.index, rotation=45)

    ax.set_xlabel(xlabel)
    ax.set_ylabel(ylabel)
    ax.set_title(title)
    return save_figure(fig, plots_dir, filename)


def summarize_dataset(df):
    # Basic info about the loaded table
    print("\nDataset Info:")
    print(f"Records: {len(df)}")
    print(f"Years: {df['FIRE_YEAR'].min()} - {df['FIRE_YEAR'].max()}")
    print(f"Causes: {df[TARGET_COL].nunique()}")

    summary = df.describe()
    print("\nBasic Statistics:")
    print(summary)

    print("\nMissing values:")
    print(df.isna().sum())

    return summary


def explore_temporal_patterns(df, plots_dir=PLOTS_DIR):
    # Yearly, seasonal and weekly rhythm of discoveries
    os.makedirs(plots_dir, exist_ok=True)

    fires_per_year = df.groupby("FIRE_YEAR").size()
    fires_per_doy = df.groupby("DISCOVERY_DOY").size()
    fires_per_month = (
        df["discovery_month"].value_counts().reindex(range(1, 13), fill_value=0)
    )
    fires_per_weekday = (
        df["discovery_weekday"].value_counts().reindex(WEEKDAYS, fill_value=0)
    )
    acres_per_year = df.groupby("FIRE_YEAR")["FIRE_SIZE"].sum()

    plot_counts(
        fires_per_year, "fires_by_year.png", "Wildfires Discovered per Year",
        "Year", "Fires", plots_dir,
    )
    plot_counts(
        fires_per_doy, "fires_seasonality.png", "Wildfires by Day of Year",
        "Discovery Day of Year", "Fires", plots_dir, kind="line",
    )
    plot_counts(
        fires_per_month, "fires_by_month.png", "Wildfires by Discovery Month",
        "Month", "Fires", plots_dir,
    )
    plot_counts(
        fires_per_weekday, "fires_by_weekday.png", "Wildfires by Discovery Weekday",
        "Weekday", "Fires", plots_dir,
    )
    plot_counts(
        acres_per_year, "acres_by_year.png", "Total Acres Burned per Year",
        "Year", "Acres", plots_dir, kind="line",
    )

    print("\nTemporal Stats:")
    print(f"Busiest year: {fires_per_year.idxmax()} ({fires_per_year.max()} fires)")
    print(f"Busiest month: {fires_per_month.idxmax()}")
    print(f"Busiest weekday: {fires_per_weekday.idxmax()}")

    return fires_per_year


def explore_spatial_patterns(df, plots_dir=PLOTS_DIR):
    # Where fires are discovered, by state and by coordinates
    os.makedirs(plots_dir, exist_ok=True)

    fires_per_state = df["STATE"].value_counts()
    plot_counts(
        fires_per_state.head(15), "fires_by_state.png", "States with the Most Wildfires",
        "Fires", "State", plots_dir, kind="barh",
    )

    fig, ax = plt.subplots(figsize=(14, 8))
    density = ax.hexbin(
        df["LONGITUDE"], df["LATITUDE"], gridsize=100, cmap="YlOrRd", mincnt=1, bins="log"
    )
    fig.colorbar(density, ax=ax, label="Fires (log scale)")
    ax.set_xlabel("Longitude")
    ax.set_ylabel("Latitude")
    ax.set_title("Wildfire Discovery Locations")
    save_figure(fig, plots_dir, "spatial_density.png")

    top_cause_by_state = df.groupby("STATE")[TARGET_COL].agg(most_common)

    print("\nSpatial Stats:")
    print(f"States with fires: {df['STATE'].nunique()}")
    print(f"Top 5 states:\n{fires_per_state.head()}")
    print(f"\nMost common cause by state:\n{top_cause_by_state}")

    return fires_per_state


def explore_fire_causes(df, plots_dir=PLOTS_DIR):
    # Analyze fire causes
    os.makedirs(plots_dir, exist_ok=True)

    causes = df[TARGET_COL].value_counts()
    plot_counts(
        causes, "fire_causes.png", "Wildfire Causes", "Fires", "Cause", plots_dir,
        kind="barh",
    )

    # Share of each cause within a year
    cause_by_year = pd.crosstab(df[TARGET_COL], df["FIRE_YEAR"], normalize="columns")
    fig, ax = plt.subplots(figsize=(16, 8))
    sns.heatmap(cause_by_year, cmap="YlOrRd", cbar_kws={"label": "Share of Fires"}, ax=ax)
    ax.set_xlabel("Year")
    ax.set_ylabel("Cause")
    ax.set_title("Cause Share by Year")
    save_figure(fig, plots_dir, "cause_by_year.png")

    # Size class mix within each cause
    cause_by_size = pd.crosstab(
        df[TARGET_COL], df["FIRE_SIZE_CLASS"], normalize="index"
    )
    fig, ax = plt.subplots(figsize=(12, 8))
    sns.heatmap(cause_by_size, annot=True, fmt=".2f", cmap="Blues", ax=ax)
    ax.set_xlabel("Fire Size Class")
    ax.set_ylabel("Cause")
    ax.set_title("Fire Size Class Distribution by Cause")
    save_figure(fig, plots_dir, "cause_by_size_class.png")

    if "burn_time_days" in df.columns:
        burn_time = df.groupby(TARGET_COL)["burn_time_days"].mean().sort_values()
        plot_counts(
            burn_time, "burn_time_by_cause.png", "Burn Time by Cause",
            "Mean Days from Discovery to Containment", "Cause", plots_dir, kind="barh",
        )

    print("\nFire Causes:")
    print(causes)

    return causes


def explore_fire_sizes(df, plots_dir=PLOTS_DIR):
    # Burned area, on a log scale and by size class
    os.makedirs(plots_dir, exist_ok=True)

    fig, ax = plt.subplots(figsize=(12, 6))
    burned = df.loc[df["FIRE_SIZE"] > 0, "FIRE_SIZE"]
    ax.hist(np.log10(burned), bins=100, edgecolor="black")
    ax.set_xlabel("Log10(Fire Size in Acres)")
    ax.set_ylabel("Fires")
    ax.set_title("Fire Size Distribution")
    save_figure(fig, plots_dir, "fire_size_distribution.png")

    size_classes = df["FIRE_SIZE_CLASS"].value_counts().sort_index()
    plot_counts(
        size_classes, "fire_size_classes.png", "Fires per Size Class",
        "Fire Size Class", "Fires", plots_dir,
    )

    print("\nFire Size Statistics")
    print(f"Mean Size: {df['FIRE_SIZE'].mean():.2f} acres")
    print(f"Median size: {df['FIRE_SIZE'].median():.2f} acres")
    print(f"Max size: {df['FIRE_SIZE'].max():.2f} acres")
    print(f"\nSize class distribution:\n{size_classes}")

    return size_classes


def main():
    print("Starting Data Exploration...")
    print("=" * 50)

    # Load data
    df = load_fires()
    df = add_date_fields(df)
    df = add_region(df)

    summarize_dataset(df)

    # Explore different aspects
    explore_temporal_patterns(df)
    explore_spatial_patterns(df)
    explore_fire_causes(df)
    explore_fire_sizes(df)

    print(f"\nPlots saved to {PLOTS_DIR}")
    print("Exploration complete!")


if __name__ == "__main__":
    main()

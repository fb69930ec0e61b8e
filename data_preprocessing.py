import sqlite3
import pandas as pd
import numpy as np
from sklearn.model_selection import train_test_split
from config import *
from us_states import state_to_region
import joblib
import os


FIRE_COLUMNS = [
    "FIRE_YEAR",
    "DISCOVERY_DATE",
    "DISCOVERY_DOY",
    "CONT_DATE",
    "FIRE_SIZE",
    "FIRE_SIZE_CLASS",
    "STAT_CAUSE_DESCR",
    "STATE",
    "LATITUDE",
    "LONGITUDE",
]


def load_fires(db_path=DB_PATH, table_name=TABLE_NAME):
    # Load the fire table into memory, one connection opened and closed
    if not os.path.exists(db_path):
        raise FileNotFoundError(f"Fire database not found: {db_path}")

    conn = sqlite3.connect(db_path)

    query = f"""
    SELECT
        {", ".join(FIRE_COLUMNS)}
    FROM {table_name}
    """

    try:
        df = pd.read_sql_query(query, conn)
    finally:
        conn.close()

    print(f"No. of records loaded: {len(df)}")
    return df


def julian_to_datetime(series):
    # Julian day numbers -> calendar timestamps, NaN stays NaT
    days = pd.to_numeric(series, errors="coerce") - UNIX_EPOCH_JULIAN_DAY
    return pd.to_datetime(days, unit="D")


def add_date_fields(df):
    # Derive calendar dates and burn time from the Julian day columns
    print("Creating date fields...")

    df["discovery_date"] = julian_to_datetime(df["DISCOVERY_DATE"])
    df["cont_date"] = julian_to_datetime(df["CONT_DATE"])

    df["discovery_month"] = df["discovery_date"].dt.month
    df["discovery_weekday"] = df["discovery_date"].dt.day_name()

    df["burn_time_days"] = (df["cont_date"] - df["discovery_date"]) / pd.Timedelta(
        days=1
    )

    return df


def add_region(df):
    # Map state codes to the lower-cased names used by the map polygons
    df["region"] = df["STATE"].map(state_to_region)

    unmatched = df.loc[df["region"].isna(), "STATE"].unique()
    if len(unmatched) > 0:
        print(f"Warning: no region for state codes {sorted(map(str, unmatched))}")

    return df


def most_common(series):
    # mode of a group, NaN when every value is missing
    if series.notna().any():
        return series.mode().iloc[0]
    return np.nan


def assign_train_flag(df, test_size=TEST_SIZE, random_state=RANDOM_STATE):
    """
    Flag each record as train or test with a fixed-seed uniform split

    Parameters:
    -----------
    df : pd.DataFrame
        Fire records, index must be unique
    test_size : float
        Fraction of records held out for testing
    random_state : int
        Seed, the same seed always gives the same partition

    Returns:
    --------
    pd.DataFrame : df with a boolean 'is_train' column
    """
    train_idx, _ = train_test_split(
        df.index, test_size=test_size, random_state=random_state
    )
    df["is_train"] = df.index.isin(train_idx)

    print(f"Train rows: {df['is_train'].sum()}, Test rows: {(~df['is_train']).sum()}")
    return df


def prepare_features_and_target(df, feature_cols, target_col=TARGET_COL):
    # Select feature matrix and target, dropping rows with missing values
    subset = df.dropna(subset=list(feature_cols) + [target_col])

    X = subset[list(feature_cols)].copy()
    y = subset[target_col].copy()

    return X, y


def split_by_flag(df, feature_cols, target_col=TARGET_COL):
    # Split into train/test using the stored partition flag
    if "is_train" not in df.columns:
        raise KeyError("'is_train' column missing, run assign_train_flag first")

    X, y = prepare_features_and_target(df, feature_cols, target_col)
    is_train = df.loc[X.index, "is_train"].to_numpy(dtype=bool)

    return X[is_train], X[~is_train], y[is_train], y[~is_train]


def load_processed_data(model_dir=MODEL_DIR):
    # load the prepared fire table saved by main()
    return joblib.load(os.path.join(model_dir, "processed_data.pkl"))


def save_processed_data(df, model_dir=MODEL_DIR):
    os.makedirs(model_dir, exist_ok=True)
    path = os.path.join(model_dir, "processed_data.pkl")
    joblib.dump(df, path)
    return path


def main():
    print("Starting Data Preprocessing...")
    print("=" * 50)

    df = load_fires()

    df = add_date_fields(df)
    df = add_region(df)
    df = assign_train_flag(df)

    print(f"\nCause distribution:\n{df[TARGET_COL].value_counts()}")
    print(f"Records without containment date: {df['cont_date'].isna().sum()}")

    path = save_processed_data(df)

    print(f"\nProcessed data saved to {path}")
    print("Preprocessing complete!")


if __name__ == "__main__":
    main()

import sqlite3

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest

from data_preprocessing import add_date_fields, add_region, assign_train_flag

# cause -> (states, longitude range, latitude range, day-of-year range, size range)
CAUSE_PROFILES = {
    "Debris Burning": (["TX", "AR"], (-97, -90), (30, 36), (60, 120), (0.1, 5)),
    "Lightning": (["MT", "ID"], (-116, -106), (42, 48), (170, 240), (5, 500)),
    "Arson": (["GA", "NC"], (-84, -77), (32, 36), (250, 340), (1, 50)),
}
CAUSE_COUNTS = {"Debris Burning": 120, "Lightning": 90, "Arson": 90}


def _size_class(size):
    bins = [0, 0.25, 10, 100, 300, 1000, 5000, np.inf]
    return pd.cut(size, bins=bins, labels=list("ABCDEFG"), right=False).astype(str)


def make_fires(seed=0):
    rng = np.random.default_rng(seed)
    frames = []
    for cause, n in CAUSE_COUNTS.items():
        states, lon, lat, doy, size = CAUSE_PROFILES[cause]
        frames.append(
            pd.DataFrame(
                {
                    "STAT_CAUSE_DESCR": cause,
                    "STATE": rng.choice(states, size=n),
                    "LONGITUDE": rng.uniform(*lon, size=n),
                    "LATITUDE": rng.uniform(*lat, size=n),
                    "DISCOVERY_DOY": rng.integers(doy[0], doy[1], size=n),
                    "FIRE_SIZE": rng.uniform(*size, size=n),
                    "FIRE_YEAR": rng.integers(2000, 2006, size=n),
                }
            )
        )
    df = pd.concat(frames, ignore_index=True)

    jan_first = pd.to_datetime(
        pd.DataFrame({"year": df["FIRE_YEAR"], "month": 1, "day": 1})
    )
    discovery = jan_first + pd.to_timedelta(df["DISCOVERY_DOY"] - 1, unit="D")
    df["DISCOVERY_DATE"] = (
        discovery - pd.Timestamp("1970-01-01")
    ) / pd.Timedelta(days=1) + 2440587.5

    burn_days = rng.integers(0, 6, size=len(df)).astype(float)
    burn_days[::10] = np.nan
    df["CONT_DATE"] = df["DISCOVERY_DATE"] + burn_days

    df["FIRE_SIZE_CLASS"] = _size_class(df["FIRE_SIZE"])

    # one record with a state code that has no map region
    df.loc[0, "STATE"] = "XX"
    return df


@pytest.fixture
def raw_fires():
    return make_fires()


@pytest.fixture
def fires_db(tmp_path, raw_fires):
    path = tmp_path / "fires.sqlite"
    conn = sqlite3.connect(path)
    raw_fires.to_sql("Fires", conn, index=False)
    conn.close()
    return str(path)


@pytest.fixture
def prepared_fires(raw_fires):
    df = add_date_fields(raw_fires.copy())
    df = add_region(df)
    return assign_train_flag(df)

# config settings for the project

# Database
DB_PATH = "FPA_FOD_20170508.sqlite"
TABLE_NAME = "Fires"

# Map polygons (Census cartographic boundary file, one polygon per state)
STATES_SHAPEFILE = "cb_2018_us_state_20m/cb_2018_us_state_20m.shp"
MAP_EXCLUDE_REGIONS = ["alaska", "hawaii", "puerto rico"]
EQUAL_AREA_CRS = "EPSG:5070"

# Data params
TEST_SIZE = 0.2
RANDOM_STATE = 42
TRAIN_SAMPLE_SIZE = None  # None = train on every row flagged as train

# Julian day number of 1970-01-01
UNIX_EPOCH_JULIAN_DAY = 2440587.5

# Model params
TARGET_COL = "STAT_CAUSE_DESCR"
BENCHMARK_CAUSE = "Debris Burning"

FEATURE_SETS = {
    "tree_size": ["FIRE_SIZE"],
    "tree_location": ["FIRE_SIZE", "LATITUDE", "LONGITUDE"],
    "tree_time": ["FIRE_SIZE", "LATITUDE", "LONGITUDE", "DISCOVERY_DOY", "FIRE_YEAR"],
}
FOREST_FEATURES = FEATURE_SETS["tree_time"]

CV_FOLDS = 5
TREE_DEPTHS = [5, 10, 15, 20]

FOREST_PARAMS = {
    "n_estimators": 50,
    "max_depth": 20,
    "min_samples_leaf": 5,
}

MODELS_TO_EVALUATE = ["benchmark"] + list(FEATURE_SETS) + ["random_forest"]

# Output paths
MODEL_DIR = "models/"
PLOTS_DIR = "plots/"
RESULTS_DIR = "results/"

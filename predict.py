import numpy as np
import pandas as pd
from model_training import load_model
from config import *


def validate_input(fire_size, latitude, longitude, discovery_doy, fire_year):
    """
    Validate input parameters for prediction

    Parameters:
    -----------
    fire_size : float
        Acres burned, must not be negative
    latitude : float
        Must be between -90 and 90
    longitude : float
        Must be between -180 and 180
    discovery_doy : int
        Day of year the fire was discovered, 1 to 366
    fire_year : int
        Year the fire was discovered

    Returns:
    --------
    bool : True if all inputs are valid

    Raises:
    -------
    ValueError : If any input is out of valid range
    """
    if fire_size < 0:
        raise ValueError(f"Fire size {fire_size} must not be negative")
    if not (-90 <= latitude <= 90):
        raise ValueError(f"Latitude {latitude} out of range [-90, 90]")
    if not (-180 <= longitude <= 180):
        raise ValueError(f"Longitude {longitude} out of range [-180, 180]")
    if not (1 <= discovery_doy <= 366):
        raise ValueError(f"Day of year {discovery_doy} out of range [1, 366]")
    if not isinstance(fire_year, (int, np.integer)) or fire_year < 1900 or fire_year > 2100:
        raise ValueError(f"Year {fire_year} out of valid range")

    return True


def predict_cause(
    fire_size,
    latitude,
    longitude,
    discovery_doy,
    fire_year,
    model_name="random_forest",
    model_dir=MODEL_DIR,
    top_n=3,
):
    """
    Predict the cause of a single fire

    Returns:
    --------
    dict : predicted cause and the top_n most likely causes with probabilities

    Raises:
    -------
    ValueError : If inputs are out of valid ranges
    """
    validate_input(fire_size, latitude, longitude, discovery_doy, fire_year)

    model, feature_cols = load_model(model_name, model_dir)

    features = {
        "FIRE_SIZE": fire_size,
        "LATITUDE": latitude,
        "LONGITUDE": longitude,
        "DISCOVERY_DOY": discovery_doy,
        "FIRE_YEAR": fire_year,
    }
    X = pd.DataFrame([features])[feature_cols]

    probabilities = model.predict_proba(X)[0]
    order = np.argsort(-probabilities, kind="stable")[:top_n]

    return {
        "model": model_name,
        "cause": str(model.predict(X)[0]),
        "top_causes": [
            {"cause": str(model.classes_[i]), "probability": float(probabilities[i])}
            for i in order
        ],
    }


def main():
    # example usage
    print("Wildfire Cause Prediction")
    print("=" * 50)

    try:
        result = predict_cause(
            fire_size=12.5,
            latitude=38.9,
            longitude=-120.4,
            discovery_doy=210,
            fire_year=2015,
        )

        print(f"Predicted cause: {result['cause']}")
        for entry in result["top_causes"]:
            print(f"  {entry['cause']}: {entry['probability']:.2%}")
    except FileNotFoundError:
        print("No trained model found. Run model_training.py first!")


if __name__ == "__main__":
    main()

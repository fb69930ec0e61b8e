import pandas as pd
from sklearn.dummy import DummyClassifier
from sklearn.tree import DecisionTreeClassifier
from sklearn.ensemble import RandomForestClassifier
from sklearn.model_selection import GridSearchCV
from data_preprocessing import load_processed_data, split_by_flag
import joblib
import os
from config import *


def sample_training_rows(X_train, y_train, n=TRAIN_SAMPLE_SIZE):
    # optional down-sampling of the training rows, None keeps everything
    if n is None or n >= len(X_train):
        return X_train, y_train

    X_sampled = X_train.sample(n=n, random_state=RANDOM_STATE)
    return X_sampled, y_train.loc[X_sampled.index]


def train_benchmark(X_train, y_train):
    """
    Train the majority-class benchmark

    Parameters:
    -----------
    X_train : array-like
        Training features (ignored by the predictor)
    y_train : array-like
        Training cause labels

    Returns:
    --------
    model : DummyClassifier always predicting the most frequent cause
    """
    print("\nTraining Benchmark (majority class)...")

    model = DummyClassifier(strategy="most_frequent")
    model.fit(X_train, y_train)

    majority = model.classes_[model.class_prior_.argmax()]
    print(f"Majority cause: {majority} ({model.class_prior_.max():.4f} of training rows)")

    return model


def train_decision_tree(X_train, y_train, depths=TREE_DEPTHS, cv=CV_FOLDS):
    """
    Train a decision tree, picking max_depth by cross validation

    Parameters:
    -----------
    X_train : pd.DataFrame
        Training features
    y_train : pd.Series
        Training cause labels
    depths : list of int
        Candidate max_depth values
    cv : int
        Number of cross validation folds

    Returns:
    --------
    model : DecisionTreeClassifier refit on all training rows with the best depth
    """
    print(f"\nTraining Decision Tree on {list(X_train.columns)}...")

    search = GridSearchCV(
        DecisionTreeClassifier(random_state=RANDOM_STATE),
        param_grid={"max_depth": depths},
        cv=cv,
        scoring="accuracy",
        n_jobs=-1,
    )
    search.fit(X_train, y_train)

    cv_results = pd.DataFrame(
        {
            "max_depth": search.cv_results_["param_max_depth"],
            "mean_accuracy": search.cv_results_["mean_test_score"],
            "std_accuracy": search.cv_results_["std_test_score"],
        }
    )
    print("Cross-validated accuracy:")
    print(cv_results.to_string(index=False))
    print(f"Best max_depth: {search.best_params_['max_depth']}")

    return search.best_estimator_


def train_random_forest(X_train, y_train, feature_cols, params=FOREST_PARAMS):
    """
    Train random forest model

    Parameters:
    -----------
    X_train : array-like
        Training features
    y_train : array-like
        Training cause labels
    feature_cols : list of str
        Names of the feature columns, used for the importance table
    params : dict
        RandomForestClassifier keyword arguments

    Returns:
    --------
    model : Trained RandomForestClassifier model
    """
    print("\nTraining Random Forest...")

    model = RandomForestClassifier(
        random_state=RANDOM_STATE,
        n_jobs=-1,
        **params,
    )
    model.fit(X_train, y_train)

    # important features
    print("\nFeature Importances:")
    feature_importance = pd.DataFrame(
        {
            "feature": feature_cols,
            "importance": model.feature_importances_,
        }
    ).sort_values("importance", ascending=False)
    print(feature_importance.to_string(index=False))

    return model


def save_model(model, name, feature_cols, model_dir=MODEL_DIR):
    # models are stored with the feature columns they were trained on
    os.makedirs(model_dir, exist_ok=True)
    path = os.path.join(model_dir, f"{name}_model.pkl")
    joblib.dump({"model": model, "feature_cols": list(feature_cols)}, path)
    print(f"Saved {name} model")
    return path


def load_model(name, model_dir=MODEL_DIR):
    bundle = joblib.load(os.path.join(model_dir, f"{name}_model.pkl"))
    return bundle["model"], bundle["feature_cols"]


def train_all_models(
    df,
    feature_sets=FEATURE_SETS,
    forest_features=FOREST_FEATURES,
    model_dir=MODEL_DIR,
    cv=CV_FOLDS,
    sample_size=TRAIN_SAMPLE_SIZE,
):
    # benchmark, one tree per feature set, one forest
    models = {}

    first_features = next(iter(feature_sets.values()))
    X_train, _, y_train, _ = split_by_flag(df, first_features)
    X_train, y_train = sample_training_rows(X_train, y_train, sample_size)
    models["benchmark"] = train_benchmark(X_train, y_train)
    save_model(models["benchmark"], "benchmark", first_features, model_dir)

    for name, feature_cols in feature_sets.items():
        X_train, _, y_train, _ = split_by_flag(df, feature_cols)
        X_train, y_train = sample_training_rows(X_train, y_train, sample_size)
        models[name] = train_decision_tree(X_train, y_train, cv=cv)
        save_model(models[name], name, feature_cols, model_dir)

    X_train, _, y_train, _ = split_by_flag(df, forest_features)
    X_train, y_train = sample_training_rows(X_train, y_train, sample_size)
    models["random_forest"] = train_random_forest(X_train, y_train, forest_features)
    save_model(models["random_forest"], "random_forest", forest_features, model_dir)

    return models


def main():
    print("Starting Model Training...")
    print("=" * 50)

    # load data
    df = load_processed_data()
    train_rows = int(df["is_train"].sum())

    print(f"\nDataset Information:")
    print(f"Target: {TARGET_COL}")
    print(f"Feature sets: {FEATURE_SETS}")
    print(f"Training set size: {train_rows}")
    print(f"Test set size: {len(df) - train_rows}")
    if TRAIN_SAMPLE_SIZE is not None:
        print(f"Sampling {TRAIN_SAMPLE_SIZE} training rows per model")

    train_all_models(df)

    print("\nAll models trained and saved!")


if __name__ == "__main__":
    main()

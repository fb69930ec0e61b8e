import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns
from sklearn.metrics import (
    accuracy_score,
    classification_report,
    confusion_matrix,
    f1_score,
)
from data_preprocessing import load_processed_data, split_by_flag
from model_training import load_model
import os
from config import *


def benchmark_accuracy(y_train, y_test):
    # share of test rows carrying the training majority cause, ties go to
    # the first cause in sorted order as with DummyClassifier
    majority = pd.Series(y_train).value_counts().sort_index().idxmax()
    return float((pd.Series(y_test) == majority).mean())


def evaluate_model(model, X_test, y_test, model_name):
    # accuracy, confusion matrix and per-cause report on the test rows
    print(f"\n{'=' * 50}")
    print(f"Evaluating {model_name.upper()}")
    print(f"{'=' * 50}")

    y_pred = model.predict(X_test)
    # predicted causes absent from the test rows still get a column
    labels = sorted(set(pd.unique(pd.Series(y_test))) | set(pd.unique(y_pred)))

    accuracy = accuracy_score(y_test, y_pred)
    print(f"\nAccuracy: {accuracy:.4f}")

    print("\nClassification Report:")
    print(classification_report(y_test, y_pred, labels=labels, zero_division=0))

    cm = confusion_matrix(y_test, y_pred, labels=labels)
    print("\nConfusion Matrix:")
    print(pd.DataFrame(cm, index=labels, columns=labels))

    return {
        "predictions": y_pred,
        "labels": labels,
        "confusion_matrix": cm,
        "accuracy": accuracy,
        "f1_macro": f1_score(
            y_test, y_pred, labels=labels, average="macro", zero_division=0
        ),
        "f1_weighted": f1_score(
            y_test, y_pred, labels=labels, average="weighted", zero_division=0
        ),
    }


def plot_confusion_matrix(cm, labels, model_name, plots_dir=PLOTS_DIR):
    # plot row-normalised confusion matrix
    os.makedirs(plots_dir, exist_ok=True)

    row_totals = cm.sum(axis=1, keepdims=True)
    cm_normalised = np.divide(
        cm, row_totals, out=np.zeros(cm.shape, dtype=float), where=row_totals > 0
    )

    plt.figure(figsize=(12, 10))
    sns.heatmap(
        cm_normalised,
        annot=True,
        fmt=".2f",
        cmap="Blues",
        xticklabels=labels,
        yticklabels=labels,
    )
    plt.ylabel("True Cause")
    plt.xlabel("Predicted Cause")
    plt.title(f"Confusion Matrix - {model_name}")
    plt.tight_layout()

    path = os.path.join(plots_dir, f"confusion_matrix_{model_name}.png")
    plt.savefig(path)
    plt.close()
    return path


def create_results_summary(results_dict, baseline="benchmark"):
    # create summary table for all models
    summary = pd.DataFrame(
        {
            model_name: {
                "accuracy": results["accuracy"],
                "f1_macro": results["f1_macro"],
                "f1_weighted": results["f1_weighted"],
            }
            for model_name, results in results_dict.items()
        }
    ).T

    if baseline in summary.index:
        summary["gain_over_benchmark"] = (
            summary["accuracy"] - summary.loc[baseline, "accuracy"]
        )

    return summary


def plot_accuracy_comparison(summary, plots_dir=PLOTS_DIR):
    # bar chart of test accuracy per model
    os.makedirs(plots_dir, exist_ok=True)

    plt.figure(figsize=(10, 6))
    plt.bar(summary.index, summary["accuracy"])
    plt.ylabel("Test Accuracy")
    plt.title("Cause Prediction Accuracy - Model Comparison")
    plt.xticks(rotation=30)
    plt.ylim(0, 1)
    plt.grid(True, axis="y", alpha=0.3)
    plt.tight_layout()

    path = os.path.join(plots_dir, "accuracy_comparison.png")
    plt.savefig(path)
    plt.close()
    return path


def evaluate_all_models(
    df,
    model_names=MODELS_TO_EVALUATE,
    model_dir=MODEL_DIR,
    plots_dir=PLOTS_DIR,
    results_dir=RESULTS_DIR,
):
    # evaluate every trained model found in model_dir
    results_dict = {}
    for model_name in model_names:
        try:
            model, feature_cols = load_model(model_name, model_dir)
        except FileNotFoundError:
            print(f"\nModel {model_name} not found. Skipping...")
            continue

        _, X_test, _, y_test = split_by_flag(df, feature_cols)
        results = evaluate_model(model, X_test, y_test, model_name)
        results_dict[model_name] = results

        plot_confusion_matrix(
            results["confusion_matrix"], results["labels"], model_name, plots_dir
        )

    if len(results_dict) == 0:
        return None

    summary = create_results_summary(results_dict)
    plot_accuracy_comparison(summary, plots_dir)

    os.makedirs(results_dir, exist_ok=True)
    summary.to_csv(os.path.join(results_dir, "model_comparison.csv"))

    return summary


def main():
    print("Starting Model Evaluation...")
    print("=" * 50)

    df = load_processed_data()

    _, _, y_train, y_test = split_by_flag(df, FEATURE_SETS["tree_size"])
    print(f"Test set size: {len(y_test)}")
    print(
        f"Share of test rows labelled '{BENCHMARK_CAUSE}': "
        f"{(y_test == BENCHMARK_CAUSE).mean():.4f}"
    )
    print(f"Expected benchmark accuracy: {benchmark_accuracy(y_train, y_test):.4f}")

    summary = evaluate_all_models(df)

    if summary is not None:
        print("\n" + "=" * 50)
        print("MODEL COMPARISON SUMMARY")
        print("=" * 50)
        print(summary.round(4))

        # identify best model
        best_model = summary["accuracy"].idxmax()
        print(f"\nBest model (by accuracy): {best_model}")
        print(f"Accuracy: {summary.loc[best_model, 'accuracy']:.4f}")

    print(f"\nEvaluation complete! Results saved to {RESULTS_DIR}")


if __name__ == "__main__":
    main()

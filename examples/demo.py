#!/usr/bin/env python3
"""
Demo script for Text Compression KNN Classifier.

This script builds a tiny in-memory topic dataset and demonstrates KNN
classification using compression similarity, then compares it with the
digit-proportion baseline.

Requirements:
- scikit-learn for the metrics report (pip install -e ".[demo]")
"""

import logging

from sklearn.metrics import accuracy_score, classification_report

from text_compression_knn import (
    CompressionKNNClassifier,
    DigitProportionSimilarity,
    get_training_set_info,
)


TRAINING_DATA = {
    'sports': [
        "The striker scored twice in the second half to win the match.",
        "The home team won the championship after a dramatic penalty shootout.",
        "The goalkeeper made a stunning save in the final minute of the match.",
        "Fans celebrated as the team lifted the trophy after the final whistle.",
        "The coach praised the defence after the team kept another clean sheet.",
    ],
    'finance': [
        "Shares fell sharply after the company reported lower quarterly earnings.",
        "The central bank raised interest rates by a quarter of a percentage point.",
        "Investors moved money into bonds as the stock market slid for a third day.",
        "The company reported record revenue and raised its full year guidance.",
        "Inflation data pushed bond yields higher and weighed on bank shares.",
    ],
    'cooking': [
        "Whisk the eggs with sugar, then fold in the flour and bake for twenty minutes.",
        "Simmer the tomato sauce with garlic and basil before adding the pasta.",
        "Roast the vegetables with olive oil, salt and pepper until golden.",
        "Knead the dough until smooth, then let it rise in a warm place for an hour.",
        "Season the chicken, sear it in a hot pan, then finish it in the oven.",
    ],
}

TEST_DATA = {
    'sports': [
        "The team scored a late goal to win the match in front of their fans.",
        "After the final whistle the coach praised the goalkeeper.",
    ],
    'finance': [
        "Bank shares rose after the central bank held interest rates steady.",
        "The company's earnings beat forecasts and its stock market value climbed.",
    ],
    'cooking': [
        "Bake the dough in a hot oven until golden, then season with salt.",
        "Fold the flour into the eggs and simmer the sauce with garlic.",
    ],
}


def flatten(data: dict) -> tuple[list[str], list[str]]:
    """Turn a {label: [texts]} mapping into parallel text and label lists."""
    texts = []
    labels = []
    for label, examples in data.items():
        for text in examples:
            texts.append(text)
            labels.append(label)
    return texts, labels


def evaluate(classifier: CompressionKNNClassifier, X_test: list[str], y_test: list[str]) -> None:
    """Predict the test set and print the results."""
    y_pred = classifier.predict(X_test)

    accuracy = accuracy_score(y_test, y_pred)
    print(f"Accuracy: {accuracy:.2%}")
    print()

    print("Detailed Results:")
    for i, (true_label, pred_label) in enumerate(zip(y_test, y_pred)):
        status = "✓" if true_label == pred_label else "✗"
        print(f"Sample {i+1}: True={true_label}, Predicted={pred_label} {status}")

    print()
    print("Classification Report:")
    print(classification_report(y_test, y_pred, zero_division=0))


def main():
    """Run the demo."""
    logging.basicConfig(level=logging.WARNING)

    print("Text Compression KNN Classifier Demo")
    print("=" * 40)

    X_train, y_train = flatten(TRAINING_DATA)
    X_test, y_test = flatten(TEST_DATA)

    info = get_training_set_info(X_train, y_train)
    print(f"Training set: {info['n_examples']} samples")
    print(f"Test set: {len(X_test)} samples")
    print(f"Classes: {info['classes']}")
    print()

    print("Compression similarity (gzip):")
    print("-" * 20)
    classifier = CompressionKNNClassifier(k_fraction=0.2, compressor='gzip')
    classifier.fit(X_train, y_train)
    evaluate(classifier, X_test, y_test)

    print("Digit-proportion baseline:")
    print("-" * 20)
    baseline = CompressionKNNClassifier(
        k_fraction=0.2,
        similarity_fn=DigitProportionSimilarity()
    )
    baseline.fit(X_train, y_train)
    evaluate(baseline, X_test, y_test)

    # Print classifier parameters
    print("Classifier Parameters:")
    params = classifier.get_params()
    for key, value in params.items():
        print(f"  {key}: {value}")


if __name__ == "__main__":
    main()

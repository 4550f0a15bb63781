"""Pytest configuration and fixtures."""

import numpy as np
import pandas as pd
import pytest

from m6a_prediction.core.feature_schema import DEFAULT_SCHEMA, make_feature_encoder
from m6a_prediction.inference.predictor import prepare_features

NUCLEOTIDES = list(DEFAULT_SCHEMA.nucleotide_spec.levels)
RNA_TYPES = list(DEFAULT_SCHEMA.get_categorical_spec('RNA_type').levels)
RNA_REGIONS = list(DEFAULT_SCHEMA.get_categorical_spec('RNA_region').levels)


def make_sites(n_rows: int, seed: int = 0) -> pd.DataFrame:
    """Synthetic sites; every other row carries the ?GAC? motif and is Positive."""
    rng = np.random.default_rng(seed)
    sequences, labels = [], []
    for i in range(n_rows):
        flank = rng.choice(NUCLEOTIDES, size=2)
        if i % 2 == 0:
            sequences.append(f"{flank[0]}GAC{flank[1]}")
            labels.append('Positive')
        else:
            core = rng.choice(NUCLEOTIDES, size=3)
            if ''.join(core) == 'GAC':
                core = np.array(['T', 'T', 'T'])
            sequences.append(f"{flank[0]}{''.join(core)}{flank[1]}")
            labels.append('Negative')

    return pd.DataFrame({
        'gc_content': rng.uniform(0, 1, n_rows),
        'RNA_type': rng.choice(RNA_TYPES, size=n_rows),
        'RNA_region': rng.choice(RNA_REGIONS, size=n_rows),
        'exon_length': rng.integers(1, 2000, n_rows),
        'distance_to_junction': rng.integers(0, 500, n_rows),
        'evolutionary_conservation': rng.uniform(0, 1, n_rows),
        'DNA_5mer': sequences,
        'label': labels,
    })


class FixedProbabilityClassifier:
    """Returns preset Positive probabilities, cycling over rows, and records inputs."""

    def __init__(self, probs, classes=('Negative', 'Positive')):
        self.probs = list(probs)
        self.classes_ = np.array(classes)
        self.calls = []

    def predict_proba(self, X):
        self.calls.append(X.copy())
        p = np.array([self.probs[i % len(self.probs)] for i in range(len(X))], dtype=float)
        pos = list(self.classes_).index('Positive') if 'Positive' in self.classes_ else 1
        out = np.zeros((len(X), len(self.classes_)))
        out[:, pos] = p
        out[:, 1 - pos] = 1 - p
        return out


class FailingClassifier:
    classes_ = np.array(['Negative', 'Positive'])

    def __init__(self):
        self.calls = 0

    def predict_proba(self, X):
        self.calls += 1
        raise ValueError("malformed numeric feature")


@pytest.fixture
def sample_sites():
    """Two valid sites, as in the package's usage examples."""
    return pd.DataFrame({
        'gc_content': [0.5, 0.3],
        'RNA_type': ['mRNA', 'lncRNA'],
        'RNA_region': ['CDS', "3'UTR"],
        'exon_length': [10, 250],
        'distance_to_junction': [8, 40],
        'evolutionary_conservation': [0.5, 0.1],
        'DNA_5mer': ['GGACC', 'TGACC'],
    })


@pytest.fixture(scope="session")
def training_sites():
    return make_sites(400, seed=0)


@pytest.fixture(scope="session")
def rf_classifier(training_sites):
    """Random forest pipeline standing in for the trained classifier artifact."""
    from sklearn.ensemble import RandomForestClassifier
    from sklearn.pipeline import Pipeline

    features = prepare_features(training_sites)
    X = features[DEFAULT_SCHEMA.get_model_feature_cols(5)]
    y = training_sites['label']

    model = Pipeline([
        ('features', make_feature_encoder(5)),
        ('rf', RandomForestClassifier(n_estimators=100, random_state=0)),
    ])
    return model.fit(X, y)


@pytest.fixture
def test_sites():
    return make_sites(60, seed=1).drop(columns=['label'])

"""
Shared fixtures for the m6A prediction tests.

StubClassifier stands in for a trained model: it returns deterministic
probabilities and records every frame it was asked to score.
"""

from typing import Callable, List, Optional, Sequence, Union

import numpy as np
import pandas as pd
import pytest


class StubClassifier:
    """Deterministic classifier exposing the scikit-learn probability interface."""

    def __init__(
        self,
        positive: Union[float, Sequence[float], Callable[[pd.DataFrame], Sequence[float]]] = 0.753,
        classes: Sequence[str] = ('Negative', 'Positive'),
        feature_names: Optional[Sequence[str]] = None,
        error: Optional[Exception] = None,
    ):
        self.positive = positive
        self.classes_ = np.array(classes)
        if feature_names is not None:
            self.feature_names_in_ = np.array(feature_names, dtype=object)
        self.error = error
        self.calls: List[pd.DataFrame] = []

    def predict_proba(self, X):
        self.calls.append(X.copy())
        if self.error is not None:
            raise self.error

        if callable(self.positive):
            p = np.asarray(self.positive(X), dtype=float)
        else:
            p = np.broadcast_to(np.asarray(self.positive, dtype=float), (len(X),))

        pos_idx = list(self.classes_).index('Positive') if 'Positive' in self.classes_ else 1
        proba = np.zeros((len(X), len(self.classes_)))
        proba[:, pos_idx] = p
        proba[:, 1 - pos_idx] = 1.0 - p
        return proba


@pytest.fixture
def stub():
    return StubClassifier()


@pytest.fixture
def example_record():
    return {
        'gc_content': 0.6,
        'rna_type': 'mRNA',
        'rna_region': 'CDS',
        'exon_length': 12,
        'distance_to_junction': 5,
        'evolutionary_conservation': 0.8,
        'dna_5mer': 'ATCGA',
    }


@pytest.fixture
def feature_df():
    return pd.DataFrame({
        'gc_content': [0.6, 0.35, 0.52, 0.71],
        'rna_type': ['mRNA', 'lincRNA', 'lncRNA', 'pseudogene'],
        'rna_region': ['CDS', 'intron', "3'UTR", "5'UTR"],
        'exon_length': [12, 250, 1040, 88],
        'distance_to_junction': [5, 120, 33, 0],
        'evolutionary_conservation': [0.8, 0.1, 0.45, 0.99],
        'dna_5mer': ['ATCGA', 'GGACT', 'AAACA', 'TGACC'],
    })


def make_training_frame(n: int = 60, seed: int = 0) -> pd.DataFrame:
    """Random but valid feature records."""
    rng = np.random.default_rng(seed)
    return pd.DataFrame({
        'gc_content': rng.uniform(0, 1, n),
        'rna_type': rng.choice(['mRNA', 'lincRNA', 'lncRNA', 'pseudogene'], n),
        'rna_region': rng.choice(['CDS', 'intron', "3'UTR", "5'UTR"], n),
        'exon_length': rng.integers(10, 5000, n).astype(float),
        'distance_to_junction': rng.integers(0, 500, n).astype(float),
        'evolutionary_conservation': rng.uniform(0, 1, n),
        'dna_5mer': [''.join(rng.choice(list('ATCG'), 5)) for _ in range(n)],
    })

"""
Model-side components for m6A prediction.

Encoders:
- sequence_encoder.py: DNA 5-mer -> per-position categorical columns

Classifier boundary:
- classifier.py: capability check and positive-class probability extraction
"""

from .sequence_encoder import (
    encode_sequences,
    validate_sequence,
    normalize_sequence,
    normalize_sequences,
)
from .classifier import (
    ProbabilisticClassifier,
    check_classifier,
    expected_feature_names,
    positive_class_index,
    positive_class_probabilities,
)

__all__ = [
    "encode_sequences",
    "validate_sequence",
    "normalize_sequence",
    "normalize_sequences",
    "ProbabilisticClassifier",
    "check_classifier",
    "expected_feature_names",
    "positive_class_index",
    "positive_class_probabilities",
]

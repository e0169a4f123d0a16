"""
m6A Prediction: Site-Level m6A Modification Inference
======================================================

This package scores candidate RNA positions for N6-methyladenosine (m6A)
modification with a pre-trained tabular classifier (e.g. a random forest).
It is responsible for:
1. Encoding raw features exactly as the classifier saw them at training time
   (same columns, same categorical level sets, same level order)
2. Obtaining the Positive-class probability from the classifier
3. Thresholding that probability into a Positive/Negative label

Training the classifier, loading it from disk and reading CSV input are left
to the caller.

Quick Start:
-----------
>>> import joblib, pandas as pd
>>> from m6a_prediction import predict_batch, predict_single
>>>
>>> model = joblib.load('rf_fit.joblib')
>>> predictions = predict_batch(model, pd.read_csv('m6A_input.csv'), threshold=0.6)
>>>
>>> result = predict_single(
...     model, gc_content=0.6, rna_type='mRNA', rna_region='CDS',
...     exon_length=12, distance_to_junction=5,
...     evolutionary_conservation=0.8, dna_5mer='ATCGA'
... )
>>> print(result.probability, result.status)
"""

__version__ = "0.1.0"

# Core configuration
from .core.config import PredictionConfig, load_config
from .core.feature_schema import FeatureSchema, DEFAULT_SCHEMA
from .core.exceptions import (
    ValidationError,
    MissingColumnsError,
    InvalidModelError,
    InvalidThresholdError,
    EmptyInputError,
    InvalidSequenceLengthError,
    InvalidSequenceAlphabetError,
    UnrecognizedCategoryError,
    FeatureMismatchError,
)

# Encoding
from .models.sequence_encoder import encode_sequences

# Inference
from .inference.predictor import M6APredictor, PredictionResult, predict_batch, predict_single

__all__ = [
    # Version
    "__version__",
    # Core
    "PredictionConfig",
    "load_config",
    "FeatureSchema",
    "DEFAULT_SCHEMA",
    # Errors
    "ValidationError",
    "MissingColumnsError",
    "InvalidModelError",
    "InvalidThresholdError",
    "EmptyInputError",
    "InvalidSequenceLengthError",
    "InvalidSequenceAlphabetError",
    "UnrecognizedCategoryError",
    "FeatureMismatchError",
    # Encoding
    "encode_sequences",
    # Inference
    "M6APredictor",
    "PredictionResult",
    "predict_batch",
    "predict_single",
]

"""
Core components for m6A prediction.

- feature_schema.py: Fixed feature layout and categorical level sets
- config.py: PredictionConfig and YAML/environment loading
- exceptions.py: Validation error taxonomy
"""

from .config import PredictionConfig, load_config
from .exceptions import (
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
from .feature_schema import (
    CategoricalFeatureSpec,
    FeatureSchema,
    DEFAULT_SCHEMA,
    CATEGORICAL_FEATURES,
    NUCLEOTIDE_LEVELS,
    RNA_TYPE_SPEC,
    RNA_REGION_SPEC,
    encode_categorical_features,
    validate_categorical_levels,
)

__all__ = [
    "PredictionConfig",
    "load_config",
    "ValidationError",
    "MissingColumnsError",
    "InvalidModelError",
    "InvalidThresholdError",
    "EmptyInputError",
    "InvalidSequenceLengthError",
    "InvalidSequenceAlphabetError",
    "UnrecognizedCategoryError",
    "FeatureMismatchError",
    "CategoricalFeatureSpec",
    "FeatureSchema",
    "DEFAULT_SCHEMA",
    "CATEGORICAL_FEATURES",
    "NUCLEOTIDE_LEVELS",
    "RNA_TYPE_SPEC",
    "RNA_REGION_SPEC",
    "encode_categorical_features",
    "validate_categorical_levels",
]

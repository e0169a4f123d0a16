"""
Feature schema and categorical encoding configuration.

This module provides a centralized specification for:
1. Which columns a feature record must supply
2. The fixed, ordered level sets of every categorical feature
3. How categorical columns are recast before they reach the classifier

The classifier was fit against exactly these column names and level sets.
Both the sequence encoder and the predictor read them from here so the two
can never disagree.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Literal, Optional, Tuple

import pandas as pd

from .exceptions import FeatureMismatchError, UnrecognizedCategoryError

logger = logging.getLogger(__name__)

HandleUnknown = Literal['error', 'passthrough']
HANDLE_UNKNOWN_OPTIONS: Tuple[str, ...] = ('error', 'passthrough')


# ==============================================================================
# Categorical Feature Specifications
# ==============================================================================

@dataclass(frozen=True)
class CategoricalFeatureSpec:
    """Specification for a categorical feature and its fixed level set.

    Parameters
    ----------
    name : str
        Feature column name
    levels : tuple of str
        Closed level set, in the order used at training time
    handle_unknown : str
        How to handle values outside ``levels``:
        'error' raises UnrecognizedCategoryError,
        'passthrough' leaves them as missing categories
    description : str, optional
        Human-readable description
    """
    name: str
    levels: Tuple[str, ...]
    handle_unknown: HandleUnknown = 'error'
    description: str = ""


# Nucleotide alphabet, shared by every positional column
NUCLEOTIDE_LEVELS: Tuple[str, ...] = ('A', 'T', 'C', 'G')

RNA_TYPE_SPEC = CategoricalFeatureSpec(
    name='rna_type',
    levels=('mRNA', 'lincRNA', 'lncRNA', 'pseudogene'),
    description="Transcript biotype of the candidate site"
)

RNA_REGION_SPEC = CategoricalFeatureSpec(
    name='rna_region',
    levels=('CDS', 'intron', "3'UTR", "5'UTR"),
    description="Transcript region containing the candidate site"
)


# Registry of all categorical (non-positional) features
CATEGORICAL_FEATURES: Dict[str, CategoricalFeatureSpec] = {
    'rna_type': RNA_TYPE_SPEC,
    'rna_region': RNA_REGION_SPEC,
}


@dataclass(frozen=True)
class FeatureSchema:
    """
    Column layout shared by the sequence encoder and the predictor.

    Attributes
    ----------
    NUMERIC_COLS : tuple of str
        Real-valued features, passed to the classifier unchanged.
    CATEGORICAL_COLS : tuple of str
        Features recast to their registered level sets.
    SEQUENCE_COL : str
        Column holding the DNA 5-mer centred on the candidate site.
    POSITION_PREFIX : str
        Prefix of the per-position nucleotide columns (1-based).
    SEQUENCE_LENGTH : int
        Required length of ``SEQUENCE_COL`` values.
    PROBABILITY_COL, STATUS_COL : str
        Columns appended to the caller's records.
    """
    NUMERIC_COLS: Tuple[str, ...] = (
        'gc_content',
        'exon_length',
        'distance_to_junction',
        'evolutionary_conservation',
    )
    CATEGORICAL_COLS: Tuple[str, ...] = ('rna_type', 'rna_region')
    SEQUENCE_COL: str = 'dna_5mer'
    POSITION_PREFIX: str = 'position_'
    SEQUENCE_LENGTH: int = 5
    NUCLEOTIDES: Tuple[str, ...] = NUCLEOTIDE_LEVELS
    PROBABILITY_COL: str = 'probability'
    STATUS_COL: str = 'status'

    # Order the classifier was fit with
    FEATURE_ORDER: Tuple[str, ...] = field(default=(
        'gc_content',
        'rna_type',
        'rna_region',
        'exon_length',
        'distance_to_junction',
        'evolutionary_conservation',
    ))

    @property
    def REQUIRED_COLS(self) -> Tuple[str, ...]:
        """All columns a feature record must supply."""
        return self.FEATURE_ORDER + (self.SEQUENCE_COL,)

    def get_position_cols(self) -> List[str]:
        """Names of the positional nucleotide columns, 1-based."""
        return [f"{self.POSITION_PREFIX}{i}" for i in range(1, self.SEQUENCE_LENGTH + 1)]

    def get_encoded_feature_cols(self) -> List[str]:
        """Columns of the encoded feature matrix, in classifier order."""
        return list(self.FEATURE_ORDER) + self.get_position_cols()

    def get_output_cols(self) -> List[str]:
        """Columns appended to the caller's records."""
        return [self.PROBABILITY_COL, self.STATUS_COL]

    def missing_required_cols(self, columns: Iterable[str]) -> List[str]:
        """Required columns not present in ``columns``, in schema order."""
        present = set(columns)
        return [col for col in self.REQUIRED_COLS if col not in present]

    def get_levels(self, col: str) -> Tuple[str, ...]:
        """Level set of a categorical or positional column."""
        if col in CATEGORICAL_FEATURES:
            return CATEGORICAL_FEATURES[col].levels
        if col in self.get_position_cols():
            return self.NUCLEOTIDES
        raise KeyError(f"'{col}' is not a categorical feature")


DEFAULT_SCHEMA = FeatureSchema()


# ==============================================================================
# Encoding Functions
# ==============================================================================

def to_categorical(
    values: pd.Series,
    name: str,
    levels: Tuple[str, ...],
    handle_unknown: HandleUnknown = 'error'
) -> pd.Series:
    """
    Recast a column to a categorical with a fixed, ordered level set.

    Under 'error', missing values and values outside ``levels`` both raise
    (missing values are reported as None). Under 'passthrough' they become
    missing categories.
    """
    if handle_unknown not in HANDLE_UNKNOWN_OPTIONS:
        raise ValueError(
            f"handle_unknown must be one of {HANDLE_UNKNOWN_OPTIONS}, got {handle_unknown!r}"
        )

    known = values.isin(levels)
    missing = values.isna()
    unknown = sorted(set(values[~known & ~missing].tolist()), key=str)

    if handle_unknown == 'error' and (unknown or missing.any()):
        raise UnrecognizedCategoryError(
            name, unknown + ([None] if missing.any() else []), levels
        )
    if unknown:
        logger.warning(
            f"'{name}' has {len(unknown)} unrecognized categories {unknown}; "
            f"encoding them as missing"
        )

    dtype = pd.CategoricalDtype(categories=list(levels), ordered=False)
    # Out-of-level values are masked before the cast
    return values.where(known).astype(object).astype(dtype).rename(name)


def encode_categorical_features(
    df: pd.DataFrame,
    features_to_encode: Optional[List[str]] = None,
    handle_unknown: Optional[HandleUnknown] = None
) -> pd.DataFrame:
    """
    Encode categorical features according to their registered specifications.

    Parameters
    ----------
    df : pd.DataFrame
        Input dataframe with categorical features as strings
    features_to_encode : list of str, optional
        Specific features to encode. If None, encode all registered categorical
        features present in ``df``.
    handle_unknown : str, optional
        Overrides each spec's own ``handle_unknown``.

    Returns
    -------
    pd.DataFrame
        Copy of ``df`` with categorical dtypes on the encoded columns

    Raises
    ------
    UnrecognizedCategoryError
        If a value is outside its level set and the policy is 'error'
    """
    result_df = df.copy()

    if features_to_encode is None:
        features_to_encode = list(CATEGORICAL_FEATURES.keys())

    for feature_name in features_to_encode:
        if feature_name not in result_df.columns:
            logger.debug(f"Feature '{feature_name}' not in dataframe, skipping")
            continue

        spec = CATEGORICAL_FEATURES.get(feature_name)
        if spec is None:
            raise KeyError(f"No encoding spec for '{feature_name}'")

        policy = handle_unknown or spec.handle_unknown
        result_df[feature_name] = to_categorical(
            result_df[feature_name], feature_name, spec.levels, policy
        )
        logger.debug(f"Encoded '{feature_name}' with levels {list(spec.levels)}")

    return result_df


def validate_categorical_levels(
    df: pd.DataFrame,
    schema: FeatureSchema = DEFAULT_SCHEMA
) -> None:
    """
    Check that every categorical column carries exactly its registered levels.

    Raises
    ------
    FeatureMismatchError
        If a column is not categorical or its levels differ in content or order
    """
    expected = {name: spec.levels for name, spec in CATEGORICAL_FEATURES.items()}
    expected.update({col: schema.NUCLEOTIDES for col in schema.get_position_cols()})

    for col, levels in expected.items():
        if col not in df.columns:
            continue
        dtype = df[col].dtype
        if not isinstance(dtype, pd.CategoricalDtype):
            raise FeatureMismatchError(f"Column '{col}' is {dtype}, expected categorical")
        if tuple(dtype.categories) != tuple(levels):
            raise FeatureMismatchError(
                f"Column '{col}' has levels {list(dtype.categories)}, "
                f"expected {list(levels)}"
            )


# ==============================================================================
# Convenience Functions
# ==============================================================================

def get_categorical_feature_names() -> List[str]:
    """Return list of all registered categorical feature names."""
    return list(CATEGORICAL_FEATURES.keys())


def is_categorical_feature(feature_name: str) -> bool:
    """Check if a feature is registered as categorical."""
    return feature_name in CATEGORICAL_FEATURES


def get_encoding_spec(feature_name: str) -> Optional[CategoricalFeatureSpec]:
    """Get the encoding specification for a categorical feature."""
    return CATEGORICAL_FEATURES.get(feature_name)

"""
Tests for the feature schema and categorical encoding.

These guard the column names and level sets the classifier was fit on.
"""

import pandas as pd
import pytest

from m6a_prediction.core.exceptions import FeatureMismatchError, UnrecognizedCategoryError
from m6a_prediction.core.feature_schema import (
    CATEGORICAL_FEATURES,
    DEFAULT_SCHEMA,
    NUCLEOTIDE_LEVELS,
    encode_categorical_features,
    get_categorical_feature_names,
    get_encoding_spec,
    is_categorical_feature,
    validate_categorical_levels,
)


def test_encoded_feature_columns_in_training_order():
    assert DEFAULT_SCHEMA.get_encoded_feature_cols() == [
        'gc_content',
        'rna_type',
        'rna_region',
        'exon_length',
        'distance_to_junction',
        'evolutionary_conservation',
        'position_1',
        'position_2',
        'position_3',
        'position_4',
        'position_5',
    ]


def test_required_columns():
    assert set(DEFAULT_SCHEMA.REQUIRED_COLS) == {
        'gc_content', 'rna_type', 'rna_region', 'exon_length',
        'distance_to_junction', 'evolutionary_conservation', 'dna_5mer',
    }


def test_missing_required_cols():
    missing = DEFAULT_SCHEMA.missing_required_cols(['rna_type', 'dna_5mer'])
    assert missing == [
        'gc_content', 'rna_region', 'exon_length',
        'distance_to_junction', 'evolutionary_conservation',
    ]
    assert DEFAULT_SCHEMA.missing_required_cols(DEFAULT_SCHEMA.REQUIRED_COLS) == []


def test_level_sets_and_order():
    assert CATEGORICAL_FEATURES['rna_type'].levels == ('mRNA', 'lincRNA', 'lncRNA', 'pseudogene')
    assert CATEGORICAL_FEATURES['rna_region'].levels == ('CDS', 'intron', "3'UTR", "5'UTR")
    assert NUCLEOTIDE_LEVELS == ('A', 'T', 'C', 'G')
    assert DEFAULT_SCHEMA.get_levels('position_3') == NUCLEOTIDE_LEVELS
    with pytest.raises(KeyError):
        DEFAULT_SCHEMA.get_levels('gc_content')


def test_registry_helpers():
    assert get_categorical_feature_names() == ['rna_type', 'rna_region']
    assert is_categorical_feature('rna_region')
    assert not is_categorical_feature('exon_length')
    assert get_encoding_spec('dna_5mer') is None


def test_encode_categorical_features():
    df = pd.DataFrame({'rna_type': ['lncRNA', 'mRNA'], 'rna_region': ['intron', 'CDS'], 'x': [1, 2]})
    encoded = encode_categorical_features(df)

    assert list(encoded['rna_type'].cat.categories) == ['mRNA', 'lincRNA', 'lncRNA', 'pseudogene']
    assert list(encoded['rna_region'].cat.categories) == ['CDS', 'intron', "3'UTR", "5'UTR"]
    assert encoded['rna_type'].tolist() == ['lncRNA', 'mRNA']
    # Input is left as plain strings
    assert not isinstance(df['rna_type'].dtype, pd.CategoricalDtype)


def test_encode_unknown_category_raises_by_default():
    df = pd.DataFrame({'rna_type': ['mRNA', 'snoRNA']})
    with pytest.raises(UnrecognizedCategoryError) as excinfo:
        encode_categorical_features(df)
    assert excinfo.value.column == 'rna_type'
    assert excinfo.value.values == ['snoRNA']


@pytest.mark.filterwarnings('error')
def test_encode_unknown_category_passthrough():
    df = pd.DataFrame({'rna_region': ['CDS', 'UTR']})
    encoded = encode_categorical_features(df, handle_unknown='passthrough')

    assert encoded['rna_region'].iloc[0] == 'CDS'
    assert pd.isna(encoded['rna_region'].iloc[1])
    assert list(encoded['rna_region'].cat.categories) == ['CDS', 'intron', "3'UTR", "5'UTR"]


def test_encode_missing_category_raises_by_default():
    df = pd.DataFrame({'rna_type': ['mRNA', None]})
    with pytest.raises(UnrecognizedCategoryError) as excinfo:
        encode_categorical_features(df)
    assert excinfo.value.column == 'rna_type'
    assert excinfo.value.values == [None]


def test_encode_missing_category_passthrough():
    df = pd.DataFrame({'rna_type': ['mRNA', None]})
    encoded = encode_categorical_features(df, handle_unknown='passthrough')

    assert encoded['rna_type'].iloc[0] == 'mRNA'
    assert pd.isna(encoded['rna_type'].iloc[1])


def test_encode_rejects_bad_policy():
    with pytest.raises(ValueError):
        encode_categorical_features(pd.DataFrame({'rna_type': ['mRNA']}), handle_unknown='guess')


def test_validate_levels_detects_reordering():
    df = pd.DataFrame({
        'rna_type': pd.Categorical(['mRNA'], categories=['lincRNA', 'mRNA', 'lncRNA', 'pseudogene']),
    })
    with pytest.raises(FeatureMismatchError):
        validate_categorical_levels(df)


def test_validate_levels_detects_plain_strings():
    df = pd.DataFrame({'position_1': ['A']})
    with pytest.raises(FeatureMismatchError):
        validate_categorical_levels(df)


def test_validate_levels_accepts_encoded_frame():
    df = encode_categorical_features(pd.DataFrame({'rna_type': ['mRNA'], 'rna_region': ['CDS']}))
    validate_categorical_levels(df)

"""
Inference pipeline for m6A site prediction.

Provides:
- Batch prediction over a table of feature records
- Single-record prediction with DNA 5-mer validation
- Thresholding of positive-class probabilities into Positive/Negative

A batch either returns results for every row or raises before the
classifier is called; there is no partial output.
"""

import logging
import numbers
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Union

import numpy as np
import pandas as pd
import polars as pl

from ..core.config import PredictionConfig, load_config
from ..core.exceptions import (
    EmptyInputError,
    FeatureMismatchError,
    InvalidThresholdError,
    MissingColumnsError,
)
from ..core.feature_schema import encode_categorical_features, validate_categorical_levels
from ..models.classifier import (
    check_classifier,
    expected_feature_names,
    positive_class_probabilities,
)
from ..models.sequence_encoder import encode_sequences, normalize_sequences, validate_sequence

logger = logging.getLogger(__name__)

FrameLike = Union[pd.DataFrame, pl.DataFrame]


@dataclass(frozen=True)
class PredictionResult:
    """Prediction for a single feature record."""
    probability: float
    status: str

    @property
    def is_positive(self) -> bool:
        return self.status == 'Positive'

    def to_dict(self) -> Dict[str, Any]:
        return {'probability': self.probability, 'status': self.status}

    def __iter__(self) -> Iterator:
        # Allows ``probability, status = result``
        return iter((self.probability, self.status))


class M6APredictor:
    """
    Predictor for m6A modification status using a trained tabular classifier.

    Examples
    --------
    >>> predictor = M6APredictor(rf_model)
    >>> predictions = predictor.predict_batch(feature_df, threshold=0.6)
    >>>
    >>> result = predictor.predict_single(
    ...     gc_content=0.6, rna_type='mRNA', rna_region='CDS',
    ...     exon_length=12, distance_to_junction=5,
    ...     evolutionary_conservation=0.8, dna_5mer='ATCGA'
    ... )
    >>> result.probability, result.status
    """

    def __init__(self, classifier: Any, config: Optional[PredictionConfig] = None):
        self.config = config if config is not None else PredictionConfig()
        self.schema = self.config.schema
        check_classifier(classifier, self.config.positive_label)
        self.classifier = classifier

    @classmethod
    def from_config(
        cls,
        classifier: Any,
        config_path: Optional[Union[str, Path]] = None
    ) -> 'M6APredictor':
        """Create a predictor with configuration loaded by ``load_config``."""
        return cls(classifier, load_config(config_path))

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def _check_threshold(self, threshold: Any) -> float:
        if (
            isinstance(threshold, bool)
            or not isinstance(threshold, numbers.Real)
            or np.isnan(threshold)
            or not 0.0 <= threshold <= 1.0
        ):
            raise InvalidThresholdError(
                f"threshold must be a number between 0 and 1, got {threshold!r}"
            )
        return float(threshold)

    def _check_feature_names(self, features: pd.DataFrame) -> None:
        if not self.config.check_feature_names:
            return
        expected = expected_feature_names(self.classifier)
        if expected is None:
            return
        actual = list(features.columns)
        if expected != actual:
            raise FeatureMismatchError(
                f"Classifier was fit on columns {expected}, encoded features are {actual}"
            )

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------

    def encode_features(self, records: pd.DataFrame) -> pd.DataFrame:
        """
        Build the encoded feature matrix the classifier was fit on.

        The DNA 5-mer is split into positional columns, categorical columns
        are recast to their fixed level sets, and the result is restricted
        to the schema's feature columns in training order.
        """
        schema = self.schema
        records = records.reset_index(drop=True)
        sequences = normalize_sequences(records[schema.SEQUENCE_COL])
        encoded_seq = encode_sequences(
            sequences,
            length=schema.SEQUENCE_LENGTH,
            prefix=schema.POSITION_PREFIX,
            levels=schema.NUCLEOTIDES,
            handle_unknown=self.config.handle_unknown,
        )

        pred_df = pd.concat([records.drop(columns=encoded_seq.columns, errors='ignore'), encoded_seq], axis=1)
        pred_df = encode_categorical_features(
            pred_df,
            features_to_encode=list(schema.CATEGORICAL_COLS),
            handle_unknown=self.config.handle_unknown,
        )

        features = pred_df[schema.get_encoded_feature_cols()]
        validate_categorical_levels(features, schema)
        return features

    # ------------------------------------------------------------------
    # Prediction
    # ------------------------------------------------------------------

    def predict_batch(self, records: FrameLike, threshold: Optional[float] = None) -> FrameLike:
        """
        Predict m6A probability and status for every record.

        Parameters
        ----------
        records : pd.DataFrame or pl.DataFrame
            Feature records with columns gc_content, rna_type, rna_region,
            exon_length, distance_to_junction, evolutionary_conservation
            and dna_5mer. Extra columns are carried through untouched.
        threshold : float, optional
            Sites whose rounded probability is strictly above this value are
            labelled Positive. Defaults to ``config.threshold``.

        Returns
        -------
        pd.DataFrame or pl.DataFrame
            The input records, same frame library as given, with
            ``probability`` and ``status`` columns appended.

        Raises
        ------
        MissingColumnsError, InvalidModelError, InvalidThresholdError, EmptyInputError
            Checked in that order, before the classifier is called.
        """
        if threshold is None:
            threshold = self.config.threshold

        is_polars = isinstance(records, pl.DataFrame)
        feature_df = records.to_pandas() if is_polars else records

        missing = self.schema.missing_required_cols(feature_df.columns)
        if missing:
            raise MissingColumnsError(missing)
        check_classifier(self.classifier, self.config.positive_label)
        threshold = self._check_threshold(threshold)
        if len(feature_df) == 0:
            raise EmptyInputError("No feature records to predict")

        features = self.encode_features(feature_df)
        self._check_feature_names(features)

        positive = positive_class_probabilities(
            self.classifier, features, self.config.positive_label
        )
        probs = np.round(positive, self.config.probability_decimals)
        status = np.where(probs > threshold, self.config.positive_label, self.config.negative_label)

        result_df = feature_df.copy()
        result_df[self.schema.PROBABILITY_COL] = probs
        result_df[self.schema.STATUS_COL] = status

        n_pos = int((status == self.config.positive_label).sum())
        logger.info(
            f"Predicted {len(result_df)} sites at threshold {threshold}: "
            f"{n_pos} {self.config.positive_label}, {len(result_df) - n_pos} {self.config.negative_label}"
        )

        if is_polars:
            return pl.from_pandas(result_df)
        return result_df

    def predict_records(
        self,
        records: Iterable[Mapping[str, Any]],
        threshold: Optional[float] = None
    ) -> List[PredictionResult]:
        """Predict a list of record mappings, one result per record."""
        result_df = self.predict_batch(pd.DataFrame(list(records)), threshold)
        return [
            PredictionResult(float(p), str(s))
            for p, s in zip(result_df[self.schema.PROBABILITY_COL], result_df[self.schema.STATUS_COL])
        ]

    def predict_single(
        self,
        gc_content: float,
        rna_type: str,
        rna_region: str,
        exon_length: float,
        distance_to_junction: float,
        evolutionary_conservation: float,
        dna_5mer: str,
        threshold: Optional[float] = None
    ) -> PredictionResult:
        """
        Predict m6A probability and status for one site.

        Raises
        ------
        InvalidSequenceLengthError
            If ``dna_5mer`` is not exactly 5 characters.
        InvalidSequenceAlphabetError
            If ``dna_5mer`` contains anything other than A, T, C, G (any case).
        """
        dna_5mer = validate_sequence(dna_5mer, self.schema.SEQUENCE_LENGTH)

        single_df = pd.DataFrame({
            'gc_content': [gc_content],
            'rna_type': [rna_type],
            'rna_region': [rna_region],
            'exon_length': [exon_length],
            'distance_to_junction': [distance_to_junction],
            'evolutionary_conservation': [evolutionary_conservation],
            'dna_5mer': [dna_5mer],
        })

        result_df = self.predict_batch(single_df, threshold)
        return PredictionResult(
            probability=float(result_df[self.schema.PROBABILITY_COL].iloc[0]),
            status=str(result_df[self.schema.STATUS_COL].iloc[0]),
        )


def predict_batch(
    classifier: Any,
    records: FrameLike,
    threshold: float = 0.5,
    config: Optional[PredictionConfig] = None
) -> FrameLike:
    """
    Multiple-sample prediction of m6A sites.

    See ``M6APredictor.predict_batch``. Validation errors are raised in the
    order missing columns, invalid model, invalid threshold, empty input.
    """
    predictor = _make_predictor(classifier, records, config)
    return predictor.predict_batch(records, threshold)


def predict_single(
    classifier: Any,
    gc_content: float,
    rna_type: str,
    rna_region: str,
    exon_length: float,
    distance_to_junction: float,
    evolutionary_conservation: float,
    dna_5mer: str,
    threshold: float = 0.5,
    config: Optional[PredictionConfig] = None
) -> PredictionResult:
    """
    Single-sample prediction of an m6A site.

    Examples
    --------
    >>> result = predict_single(
    ...     rf_model, gc_content=0.6, rna_type='mRNA', rna_region='CDS',
    ...     exon_length=12, distance_to_junction=5,
    ...     evolutionary_conservation=0.8, dna_5mer='ATCGA', threshold=0.5
    ... )
    >>> result.to_dict()
    {'probability': 0.753, 'status': 'Positive'}
    """
    predictor = M6APredictor(classifier, config)
    return predictor.predict_single(
        gc_content, rna_type, rna_region, exon_length,
        distance_to_junction, evolutionary_conservation, dna_5mer, threshold
    )


def _make_predictor(
    classifier: Any,
    records: FrameLike,
    config: Optional[PredictionConfig]
) -> M6APredictor:
    # Missing columns are reported before an invalid model
    config = config if config is not None else PredictionConfig()
    columns = records.columns
    missing = config.schema.missing_required_cols(columns)
    if missing:
        raise MissingColumnsError(missing)
    return M6APredictor(classifier, config)

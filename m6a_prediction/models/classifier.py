"""
Classifier boundary for m6A prediction.

The trained model is injected by the caller and treated as opaque. Any
object exposing the scikit-learn probability interface is accepted:

- predict_proba(X) -> array of shape (n_samples, n_classes)
- classes_ (optional) -> labels matching the predict_proba columns
- feature_names_in_ (optional) -> columns the model was fit on

Errors raised inside ``predict_proba`` propagate unmodified.
"""

import logging
from typing import Any, List, Optional, Protocol, runtime_checkable

import numpy as np
import pandas as pd
from sklearn.base import BaseEstimator
from sklearn.exceptions import NotFittedError
from sklearn.utils.validation import check_is_fitted

from ..core.exceptions import InvalidModelError

logger = logging.getLogger(__name__)

# predict_proba column read when the classifier does not expose classes_
DEFAULT_POSITIVE_INDEX = 1


@runtime_checkable
class ProbabilisticClassifier(Protocol):
    """Anything that maps a feature frame to per-class probabilities."""

    def predict_proba(self, X: pd.DataFrame) -> np.ndarray:
        ...


def check_classifier(classifier: Any, positive_label: str = 'Positive') -> None:
    """
    Verify that ``classifier`` can score feature frames.

    Raises
    ------
    InvalidModelError
        If the object has no callable ``predict_proba``, is an unfitted
        scikit-learn estimator, or its ``classes_`` lack ``positive_label``.
    """
    if classifier is None or not callable(getattr(classifier, 'predict_proba', None)):
        raise InvalidModelError(
            f"Classifier must expose predict_proba(X); got {type(classifier).__name__}"
        )

    if isinstance(classifier, BaseEstimator):
        try:
            check_is_fitted(classifier)
        except NotFittedError as e:
            raise InvalidModelError(f"Classifier is not fitted: {e}") from e

    classes = _get_classes(classifier)
    if classes is not None and positive_label not in classes:
        raise InvalidModelError(
            f"Positive label {positive_label!r} not among classifier classes {classes}"
        )


def _get_classes(classifier: Any) -> Optional[List]:
    classes = getattr(classifier, 'classes_', None)
    if classes is None:
        return None
    return list(np.asarray(classes).tolist())


def positive_class_index(classifier: Any, positive_label: str = 'Positive') -> int:
    """Column of ``positive_label`` in the classifier's predict_proba output."""
    classes = _get_classes(classifier)
    if classes is None:
        return DEFAULT_POSITIVE_INDEX
    return classes.index(positive_label)


def expected_feature_names(classifier: Any) -> Optional[List[str]]:
    """Columns the classifier was fit on, when it records them."""
    names = getattr(classifier, 'feature_names_in_', None)
    if names is None:
        return None
    return [str(n) for n in names]


def positive_class_probabilities(
    classifier: Any,
    X: pd.DataFrame,
    positive_label: str = 'Positive'
) -> np.ndarray:
    """
    Probability of ``positive_label`` for every row of ``X``.

    ``predict_proba`` is called exactly once.

    Returns
    -------
    np.ndarray
        1-D float array aligned with the rows of ``X``
    """
    proba = classifier.predict_proba(X)

    if isinstance(proba, pd.DataFrame):
        if positive_label not in proba.columns:
            raise InvalidModelError(
                f"predict_proba output has no {positive_label!r} column: {list(proba.columns)}"
            )
        positive = proba[positive_label].to_numpy(dtype=float)
    else:
        proba = np.asarray(proba, dtype=float)
        if proba.ndim != 2:
            raise InvalidModelError(
                f"predict_proba must return a 2-D array, got shape {proba.shape}"
            )
        idx = positive_class_index(classifier, positive_label)
        if idx >= proba.shape[1]:
            raise InvalidModelError(
                f"predict_proba returned {proba.shape[1]} columns; "
                f"positive class expected at column {idx}"
            )
        positive = proba[:, idx]

    if len(positive) != len(X):
        raise InvalidModelError(
            f"predict_proba returned {len(positive)} rows for {len(X)} inputs"
        )
    return positive

"""
Configuration for m6A site prediction.

Provides a single configuration object for:
- Decision threshold and output labels
- Probability rounding
- Handling of categorical values outside the training-time level sets

Configuration can be loaded from YAML with environment variable overrides.
The fixed feature layout itself lives in ``feature_schema.DEFAULT_SCHEMA``.
"""

import logging
import math
import numbers
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

import yaml

from .exceptions import InvalidThresholdError
from .feature_schema import DEFAULT_SCHEMA, HANDLE_UNKNOWN_OPTIONS, FeatureSchema

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "M6A_CONFIG"


@dataclass
class PredictionConfig:
    """
    Configuration for the prediction pipeline.

    Parameters
    ----------
    threshold : float
        Default decision threshold. A site is labelled ``positive_label``
        only when its rounded probability is strictly greater than this.
    positive_label, negative_label : str
        Class labels. ``positive_label`` must appear in the classifier's
        ``classes_`` when the classifier exposes them.
    probability_decimals : int
        Decimal places kept on reported probabilities.
    handle_unknown : str
        'error' rejects categorical values outside their level sets before
        the classifier is called; 'passthrough' encodes them as missing and
        lets the classifier decide.
    check_feature_names : bool
        Compare the encoded columns against ``feature_names_in_`` when the
        classifier exposes it.

    Examples
    --------
    >>> config = PredictionConfig(threshold=0.6, handle_unknown='passthrough')
    >>> config.to_yaml('configs/m6a_prediction.yaml')
    """

    threshold: float = 0.5
    positive_label: str = 'Positive'
    negative_label: str = 'Negative'
    probability_decimals: int = 4
    handle_unknown: str = 'error'
    check_feature_names: bool = True

    schema: FeatureSchema = field(default=DEFAULT_SCHEMA, repr=False)

    def __post_init__(self):
        """Validate option values after initialization."""
        self.handle_unknown = str(self.handle_unknown).lower()
        if self.handle_unknown not in HANDLE_UNKNOWN_OPTIONS:
            raise ValueError(
                f"handle_unknown must be one of {HANDLE_UNKNOWN_OPTIONS}, "
                f"got {self.handle_unknown!r}"
            )
        if int(self.probability_decimals) < 0:
            raise ValueError(
                f"probability_decimals must be non-negative, got {self.probability_decimals}"
            )
        self.probability_decimals = int(self.probability_decimals)
        if (
            isinstance(self.threshold, bool)
            or not isinstance(self.threshold, numbers.Real)
            or math.isnan(self.threshold)
            or not 0.0 <= self.threshold <= 1.0
        ):
            raise InvalidThresholdError(
                f"threshold must be a number between 0 and 1, got {self.threshold!r}"
            )
        self.threshold = float(self.threshold)

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> 'PredictionConfig':
        """Load configuration from YAML file."""
        yaml_path = Path(yaml_path)
        with open(yaml_path) as f:
            config_dict = yaml.safe_load(f) or {}
        return cls(**config_dict)

    def to_yaml(self, yaml_path: Union[str, Path]) -> None:
        """Save configuration to YAML file."""
        yaml_path = Path(yaml_path)
        yaml_path.parent.mkdir(parents=True, exist_ok=True)

        with open(yaml_path, 'w') as f:
            yaml.safe_dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def to_dict(self) -> dict:
        """Plain option values, excluding the feature schema."""
        return {
            'threshold': self.threshold,
            'positive_label': self.positive_label,
            'negative_label': self.negative_label,
            'probability_decimals': self.probability_decimals,
            'handle_unknown': self.handle_unknown,
            'check_feature_names': self.check_feature_names,
        }


def load_config(path: Optional[Union[str, Path]] = None) -> PredictionConfig:
    """Load configuration from YAML file with environment variable overrides.

    Parameters
    ----------
    path : str or Path, optional
        Path to YAML config file. If None, ``$M6A_CONFIG`` is used when set,
        otherwise the built-in defaults.

    Returns
    -------
    PredictionConfig

    Environment Variables
    ---------------------
    M6A_CONFIG : str
        Config file used when ``path`` is None
    M6A_THRESHOLD : str
        Override the decision threshold
    M6A_HANDLE_UNKNOWN : str
        Override the unknown-category policy ('error' or 'passthrough')
    """
    if path is None:
        path = os.getenv(CONFIG_ENV_VAR)

    options = {}
    if path is not None:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path) as f:
            options = yaml.safe_load(f) or {}
        logger.debug(f"Loaded prediction config from {path}")

    if os.getenv("M6A_THRESHOLD"):
        try:
            options['threshold'] = float(os.environ["M6A_THRESHOLD"])
        except ValueError as e:
            raise InvalidThresholdError(
                f"M6A_THRESHOLD must be a number between 0 and 1, got {os.environ['M6A_THRESHOLD']!r}"
            ) from e
    if os.getenv("M6A_HANDLE_UNKNOWN"):
        options['handle_unknown'] = os.environ["M6A_HANDLE_UNKNOWN"]

    return PredictionConfig(**options)

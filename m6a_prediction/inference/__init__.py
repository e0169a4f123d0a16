"""
Inference components for m6A prediction.

Modules:
- predictor.py: M6APredictor plus the predict_batch / predict_single entry points
"""

from .predictor import M6APredictor, PredictionResult, predict_batch, predict_single

__all__ = [
    "M6APredictor",
    "PredictionResult",
    "predict_batch",
    "predict_single",
]

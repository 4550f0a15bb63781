"""
Inference: batch and single-site prediction plus artifact/table I/O.
"""

from .predictor import (
    predict_batch,
    predict_single,
    prepare_features,
    apply_threshold,
    extract_positive_probability,
    SitePrediction,
    M6APredictor,
)
from .io_utils import load_classifier, read_feature_table, write_predictions

__all__ = [
    'predict_batch',
    'predict_single',
    'prepare_features',
    'apply_threshold',
    'extract_positive_probability',
    'SitePrediction',
    'M6APredictor',
    'load_classifier',
    'read_feature_table',
    'write_predictions',
]

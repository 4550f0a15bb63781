"""
m6A site prediction from sequence and genomic features.

Quick Start:
-----------
>>> from m6a_prediction import load_classifier, predict_batch, predict_single
>>> rf_model = load_classifier('rf_fit.joblib')
>>> predictions = predict_batch(rf_model, feature_df, positive_threshold=0.6)
>>> prob, status = predict_single(
...     rf_model, gc_content=0.5, RNA_type='mRNA', RNA_region='CDS',
...     exon_length=10, distance_to_junction=8, evolutionary_conservation=0.5,
...     DNA_5mer='GGACA'
... )
"""

__version__ = '0.1.0'

from .core.feature_schema import FeatureSchema, DEFAULT_SCHEMA
from .core.validators import (
    M6APredictionError,
    SchemaError,
    ShapeMismatchError,
    UnseenCategoryError,
    ClassifierOutputError,
    ThresholdRangeWarning,
)
from .features.sequence_encoding import encode_dna_sequences
from .inference.predictor import (
    predict_batch,
    predict_single,
    apply_threshold,
    SitePrediction,
    M6APredictor,
)
from .inference.io_utils import load_classifier, read_feature_table
from .system.config import PredictionConfig, load_config

__all__ = [
    '__version__',
    # Schema
    'FeatureSchema',
    'DEFAULT_SCHEMA',
    # Errors
    'M6APredictionError',
    'SchemaError',
    'ShapeMismatchError',
    'UnseenCategoryError',
    'ClassifierOutputError',
    'ThresholdRangeWarning',
    # Pipeline
    'encode_dna_sequences',
    'predict_batch',
    'predict_single',
    'apply_threshold',
    'SitePrediction',
    'M6APredictor',
    # I/O and config
    'load_classifier',
    'read_feature_table',
    'PredictionConfig',
    'load_config',
]

"""
Core components shared by the prediction pipeline.

- feature_schema.py: Column layout and closed categorical level sets
- validators.py: Input validation and error types
"""

from .feature_schema import (
    CategoricalFeatureSpec,
    FeatureSchema,
    DEFAULT_SCHEMA,
    apply_categorical_levels,
    make_feature_encoder,
)
from .validators import (
    M6APredictionError,
    SchemaError,
    ShapeMismatchError,
    UnseenCategoryError,
    ClassifierOutputError,
    ThresholdRangeWarning,
)

__all__ = [
    "CategoricalFeatureSpec",
    "FeatureSchema",
    "DEFAULT_SCHEMA",
    "apply_categorical_levels",
    "make_feature_encoder",
    "M6APredictionError",
    "SchemaError",
    "ShapeMismatchError",
    "UnseenCategoryError",
    "ClassifierOutputError",
    "ThresholdRangeWarning",
]

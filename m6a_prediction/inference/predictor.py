"""
Inference pipeline for m6A site prediction.

Provides:
- Batch prediction over a feature table
- Single-site prediction (a one-row batch)
- The probability threshold decision rule
- Extraction of the Positive-class probability from classifier output
"""

import logging
from typing import Any, NamedTuple, Optional, Union

import numpy as np
import pandas as pd
import polars as pl

from ..core.feature_schema import DEFAULT_SCHEMA, FeatureSchema, apply_categorical_levels
from ..core.validators import (
    ClassifierOutputError,
    SchemaError,
    check_threshold,
    validate_required_columns,
)
from ..features.sequence_encoding import encode_dna_sequences

logger = logging.getLogger(__name__)

FeatureTable = Union[pd.DataFrame, pl.DataFrame]


class SitePrediction(NamedTuple):
    """Prediction for a single candidate site."""
    predicted_m6A_prob: float
    predicted_m6A_status: str


# ==============================================================================
# Decision rule
# ==============================================================================

def apply_threshold(
    probs,
    positive_threshold: float = 0.5,
    schema: FeatureSchema = DEFAULT_SCHEMA,
) -> pd.Categorical:
    """
    Label each probability Positive iff it is strictly above the threshold.

    A probability exactly equal to ``positive_threshold`` is Negative.

    Parameters
    ----------
    probs : array-like of float
        Positive-class probabilities
    positive_threshold : float
        Decision threshold
    schema : FeatureSchema
        Supplies the status level set

    Returns
    -------
    pd.Categorical
        Status labels over the (Negative, Positive) level set
    """
    negative, positive = schema.STATUS_LEVELS
    probs = np.asarray(probs, dtype=float)
    labels = np.where(probs > positive_threshold, positive, negative)
    return pd.Categorical(labels, categories=list(schema.STATUS_LEVELS))


def extract_positive_probability(
    classifier: Any,
    proba,
    positive_label: str = 'Positive',
) -> np.ndarray:
    """
    Pull the Positive-class column out of ``predict_proba`` output.

    Parameters
    ----------
    classifier : Any
        The classifier that produced ``proba``; its ``classes_`` attribute
        locates the Positive column when ``proba`` is an array.
    proba : np.ndarray or pd.DataFrame
        Class-probability output, one row per site.
    positive_label : str
        Name of the positive class

    Returns
    -------
    np.ndarray
        1-D float array of Positive-class probabilities

    Raises
    ------
    ClassifierOutputError
        If no Positive class can be located in the output.
    """
    if isinstance(proba, pd.DataFrame):
        if positive_label not in proba.columns:
            raise ClassifierOutputError(
                f"Classifier probability table has no '{positive_label}' column; "
                f"columns: {list(proba.columns)}"
            )
        return proba[positive_label].to_numpy(dtype=float)

    classes = getattr(classifier, 'classes_', None)
    if classes is None:
        raise ClassifierOutputError(
            "Cannot locate the positive class: classifier exposes no 'classes_' "
            "and predict_proba did not return a labelled table"
        )
    classes = list(classes)
    if positive_label not in classes:
        raise ClassifierOutputError(
            f"Classifier has no '{positive_label}' class; classes: {classes}"
        )

    proba = np.asarray(proba, dtype=float)
    if proba.ndim != 2 or proba.shape[1] != len(classes):
        raise ClassifierOutputError(
            f"predict_proba returned shape {proba.shape}, expected (n_rows, {len(classes)})"
        )
    return proba[:, classes.index(positive_label)]


# ==============================================================================
# Prediction engine
# ==============================================================================

def prepare_features(
    feature_table: FeatureTable,
    schema: FeatureSchema = DEFAULT_SCHEMA,
) -> pd.DataFrame:
    """
    Validate a feature table and append the encoded nucleotide columns.

    Returns a new dataframe: the input columns (minus any stale ``nt_pos*``
    columns), with RNA_type and RNA_region re-levelled, followed by freshly
    encoded ``nt_pos1..nt_posN``.
    """
    if isinstance(feature_table, pl.DataFrame):
        feature_table = feature_table.to_pandas()
    if not isinstance(feature_table, pd.DataFrame):
        raise TypeError(
            f"feature_table must be a pandas or polars DataFrame, got {type(feature_table).__name__}"
        )

    validate_required_columns(feature_table.columns, schema.get_required_cols())
    if feature_table.shape[0] == 0:
        raise SchemaError("missing required feature columns: feature table has no rows")

    stale = [col for col in feature_table.columns if schema.is_nucleotide_column(col)]
    if stale:
        logger.debug(f"Replacing {len(stale)} caller-supplied nucleotide columns")
    feature_df = feature_table.drop(columns=stale)

    seq_df = encode_dna_sequences(feature_df[schema.SEQUENCE_COL], schema=schema)
    feature_df = pd.concat([feature_df, seq_df.set_axis(feature_df.index)], axis=1)

    return apply_categorical_levels(feature_df, columns=schema.CATEGORICAL_COLS, schema=schema)


def predict_batch(
    classifier: Any,
    feature_table: FeatureTable,
    positive_threshold: float = 0.5,
    schema: FeatureSchema = DEFAULT_SCHEMA,
) -> pd.DataFrame:
    """
    Predict m6A probability and status for every site in a feature table.

    Parameters
    ----------
    classifier : Any
        Trained classifier artifact exposing ``predict_proba``. It receives a
        dataframe with exactly ``schema.get_model_feature_cols(N)`` and is
        never modified.
    feature_table : pd.DataFrame or pl.DataFrame
        Must include ``gc_content``, ``RNA_type``, ``RNA_region``,
        ``exon_length``, ``distance_to_junction``,
        ``evolutionary_conservation`` and ``DNA_5mer``. Extra columns are
        carried through to the output. The input is not modified.
    positive_threshold : float
        Probability above which a site is called Positive. Values outside
        [0, 1] trigger a ``ThresholdRangeWarning``.
    schema : FeatureSchema
        Feature schema

    Returns
    -------
    pd.DataFrame
        The input table with ``nt_pos1..nt_posN``, ``predicted_m6A_prob``
        and ``predicted_m6A_status`` appended; same rows, order and index.

    Raises
    ------
    SchemaError
        Required columns missing or no rows (raised before any inference).
    ShapeMismatchError
        ``DNA_5mer`` values of unequal length.
    UnseenCategoryError
        A categorical value outside its declared level set.
    ClassifierOutputError
        The classifier output carries no Positive class.
    """
    feature_df = prepare_features(feature_table, schema=schema)
    positive_threshold = check_threshold(positive_threshold)

    n_positions = len(feature_df[schema.SEQUENCE_COL].iloc[0])
    model_cols = schema.get_model_feature_cols(n_positions)
    model_input = feature_df[model_cols]

    logger.debug(f"Invoking classifier on {model_input.shape[0]} rows x {model_input.shape[1]} features")
    proba = classifier.predict_proba(model_input)
    probs = extract_positive_probability(classifier, proba, schema.POSITIVE_LABEL)
    if probs.shape[0] != feature_df.shape[0]:
        raise ClassifierOutputError(
            f"Classifier returned {probs.shape[0]} probabilities for {feature_df.shape[0]} rows"
        )

    feature_df[schema.PROB_COL] = probs
    feature_df[schema.STATUS_COL] = apply_threshold(probs, positive_threshold, schema=schema)

    positive_status = schema.STATUS_LEVELS[1]
    n_positive = int((feature_df[schema.STATUS_COL] == positive_status).sum())
    logger.info(
        f"Predicted {feature_df.shape[0]} sites: {n_positive} {positive_status} "
        f"(threshold={positive_threshold})"
    )
    return feature_df


def predict_single(
    classifier: Any,
    gc_content: float,
    RNA_type: str,
    RNA_region: str,
    exon_length: float,
    distance_to_junction: float,
    evolutionary_conservation: float,
    DNA_5mer: str,
    positive_threshold: float = 0.5,
    schema: FeatureSchema = DEFAULT_SCHEMA,
) -> SitePrediction:
    """
    Predict m6A probability and status for one site.

    Builds a one-row feature table and delegates to :func:`predict_batch`,
    so single-site and batch predictions always agree.

    Returns
    -------
    SitePrediction
        ``(predicted_m6A_prob, predicted_m6A_status)`` with the status as a
        plain string label.
    """
    single_df = pd.DataFrame({
        'gc_content': [gc_content],
        'RNA_type': [RNA_type],
        'RNA_region': [RNA_region],
        'exon_length': [exon_length],
        'distance_to_junction': [distance_to_junction],
        'evolutionary_conservation': [evolutionary_conservation],
        schema.SEQUENCE_COL: [DNA_5mer],
    })
    single_df = apply_categorical_levels(single_df, columns=schema.CATEGORICAL_COLS, schema=schema)

    pred_df = predict_batch(classifier, single_df, positive_threshold, schema=schema)
    row = pred_df.iloc[0]
    return SitePrediction(
        predicted_m6A_prob=float(row[schema.PROB_COL]),
        predicted_m6A_status=str(row[schema.STATUS_COL]),
    )


class M6APredictor:
    """
    Predictor bound to one loaded classifier artifact.

    The artifact is held by reference and only read, so one predictor can
    serve concurrent callers as long as the classifier's ``predict_proba``
    is itself free of side effects.

    Examples
    --------
    >>> predictor = M6APredictor.from_config(load_config())
    >>> result = predictor.predict(read_feature_table('sites.csv'))
    >>> prob, status = predictor.predict_site(
    ...     gc_content=0.5, RNA_type='mRNA', RNA_region='CDS', exon_length=10,
    ...     distance_to_junction=8, evolutionary_conservation=0.5, DNA_5mer='GGACA'
    ... )
    """

    def __init__(
        self,
        classifier: Any,
        positive_threshold: float = 0.5,
        schema: Optional[FeatureSchema] = None,
    ):
        if not hasattr(classifier, 'predict_proba'):
            raise TypeError(
                f"Classifier {type(classifier).__name__} does not implement predict_proba"
            )
        self.classifier = classifier
        self.positive_threshold = positive_threshold
        self.schema = schema or DEFAULT_SCHEMA

    @classmethod
    def from_config(cls, config) -> 'M6APredictor':
        """Load the classifier artifact named by a PredictionConfig."""
        from .io_utils import load_classifier

        if config.model_path is None:
            raise ValueError("PredictionConfig.model_path is not set")
        classifier = load_classifier(config.model_path)
        schema = FeatureSchema(POSITIVE_LABEL=config.positive_label)
        return cls(classifier, positive_threshold=config.positive_threshold, schema=schema)

    def _threshold(self, positive_threshold: Optional[float]) -> float:
        return self.positive_threshold if positive_threshold is None else positive_threshold

    def predict(
        self,
        feature_table: FeatureTable,
        positive_threshold: Optional[float] = None,
    ) -> pd.DataFrame:
        return predict_batch(
            self.classifier,
            feature_table,
            self._threshold(positive_threshold),
            schema=self.schema,
        )

    def predict_site(self, positive_threshold: Optional[float] = None, **features) -> SitePrediction:
        return predict_single(
            self.classifier,
            positive_threshold=self._threshold(positive_threshold),
            schema=self.schema,
            **features,
        )

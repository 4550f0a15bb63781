"""Validators and error types for the m6A prediction pipeline.

Provides validation functions to catch malformed input early, before any
classifier work is done.

This module includes:
- Required column checks (batch feature tables)
- Nucleotide length uniformity checks (positional encoding)
- Closed categorical level checks (RNA type, RNA region, nucleotides)
- Threshold range checks
"""

import logging
import math
import warnings
from typing import Iterable, List, Sequence, Tuple

import pandas as pd

logger = logging.getLogger(__name__)


class M6APredictionError(Exception):
    """Base class for all prediction pipeline errors."""
    pass


class SchemaError(M6APredictionError, ValueError):
    """Raised when a feature table lacks required columns or rows."""

    def __init__(self, message: str, missing: Sequence[str] = ()):
        super().__init__(message)
        self.missing = list(missing)


class ShapeMismatchError(M6APredictionError, ValueError):
    """Raised when nucleotide strings in one call differ in length."""
    pass


class UnseenCategoryError(M6APredictionError, ValueError):
    """Raised when a categorical value falls outside its declared level set."""

    def __init__(self, column: str, values: Sequence, levels: Sequence[str]):
        self.column = column
        self.values = list(values)
        self.levels = list(levels)
        super().__init__(
            f"Unknown categories for '{column}': {self.values}\n"
            f"Known categories: {self.levels}"
        )


class ClassifierOutputError(M6APredictionError, RuntimeError):
    """Raised when classifier output cannot be mapped to a Positive probability."""
    pass


class ThresholdRangeWarning(UserWarning):
    """Issued when a probability threshold lies outside [0, 1]."""
    pass


def validate_required_columns(columns: Iterable[str], required: Sequence[str]) -> None:
    """Fail fast when any required feature column is absent.

    Parameters
    ----------
    columns : Iterable[str]
        Column names present in the feature table
    required : Sequence[str]
        Column names the pipeline needs, in canonical order

    Raises
    ------
    SchemaError
        If one or more required columns are missing
    """
    present = set(columns)
    missing = [col for col in required if col not in present]
    if missing:
        raise SchemaError(
            f"missing required feature columns: {missing}. "
            f"Expected all of: {list(required)}",
            missing=missing,
        )


def validate_sequence_lengths(sequences: Sequence[str]) -> int:
    """Check that all nucleotide strings share the length of the first one.

    Parameters
    ----------
    sequences : Sequence[str]
        Nucleotide strings in row order

    Returns
    -------
    int
        The common sequence length N

    Raises
    ------
    ShapeMismatchError
        If the collection is empty, holds non-string or empty values, or
        mixes lengths
    """
    if len(sequences) == 0:
        raise ShapeMismatchError("Cannot encode an empty collection of nucleotide sequences")

    not_strings = [i for i, seq in enumerate(sequences) if not isinstance(seq, str)]
    if not_strings:
        raise ShapeMismatchError(
            f"Nucleotide sequences must be strings; rows {not_strings[:10]} are not"
        )

    expected = len(sequences[0])
    if expected == 0:
        raise ShapeMismatchError("Nucleotide sequences must be non-empty")

    mismatched: List[Tuple[int, int]] = [
        (i, len(seq)) for i, seq in enumerate(sequences) if len(seq) != expected
    ]
    if mismatched:
        shown = ", ".join(f"row {i}: length {n}" for i, n in mismatched[:10])
        more = f" (and {len(mismatched) - 10} more)" if len(mismatched) > 10 else ""
        raise ShapeMismatchError(
            f"All nucleotide sequences must have length {expected} "
            f"(taken from the first row); found {shown}{more}"
        )
    return expected


def validate_categories(values: Iterable, spec) -> None:
    """Reject values that fall outside a categorical spec's level set.

    Missing values count as unknown.

    Parameters
    ----------
    values : Iterable
        Raw column values
    spec : CategoricalFeatureSpec
        Specification holding the closed level set

    Raises
    ------
    UnseenCategoryError
        If any value is not a declared level
    """
    unknown = spec.unknown_values(values)
    if unknown:
        raise UnseenCategoryError(spec.name, unknown, spec.levels)


def check_threshold(positive_threshold: float) -> float:
    """Warn (but continue) when the threshold is outside [0, 1]."""
    value = float(positive_threshold)
    if math.isnan(value) or not 0.0 <= value <= 1.0:
        message = (
            f"positive_threshold={positive_threshold!r} lies outside [0, 1]; "
            "thresholding will still be applied"
        )
        logger.warning(message)
        warnings.warn(message, ThresholdRangeWarning, stacklevel=3)
    return value


def is_missing(value) -> bool:
    return value is None or (not isinstance(value, str) and bool(pd.isna(value)))

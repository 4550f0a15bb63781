"""
Feature schema and categorical level configuration.

This module provides a centralized specification for:
1. Which input columns are numeric, categorical, or sequence features
2. The closed, ordered level set of every categorical feature
3. The exact feature layout handed to the classifier

Re-asserting the declared level sets on every call keeps the feature
representation identical to the one the classifier was trained on, no matter
which levels a particular batch happens to contain.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from .validators import is_missing, validate_categories


# ==============================================================================
# Categorical Feature Specifications
# ==============================================================================

@dataclass(frozen=True)
class CategoricalFeatureSpec:
    """Specification for a categorical feature and its closed level set.

    Parameters
    ----------
    name : str
        Feature column name
    levels : tuple of str
        Allowed values, in the order the classifier was trained with
    description : str, optional
        Human-readable description
    """
    name: str
    levels: Tuple[str, ...]
    description: str = ""

    def is_known(self, value) -> bool:
        if is_missing(value):
            return False
        return value in self.levels

    def unknown_values(self, values: Iterable) -> list:
        """Return the distinct values not in the level set, in first-seen order."""
        unknown = []
        seen_missing = False
        for value in values:
            if is_missing(value):
                if not seen_missing:
                    unknown.append(None)
                    seen_missing = True
            elif value not in self.levels and value not in unknown:
                unknown.append(value)
        return unknown

    def renamed(self, name: str) -> "CategoricalFeatureSpec":
        return CategoricalFeatureSpec(name=name, levels=self.levels, description=self.description)


# ==============================================================================
# Categorical Feature Registry
# ==============================================================================

RNA_TYPE_SPEC = CategoricalFeatureSpec(
    name='RNA_type',
    levels=('mRNA', 'lincRNA', 'lncRNA', 'pseudogene'),
    description="Transcript biotype of the candidate site"
)

RNA_REGION_SPEC = CategoricalFeatureSpec(
    name='RNA_region',
    levels=('CDS', 'intron', "3'UTR", "5'UTR"),
    description="Transcript region containing the candidate site"
)

# Shared by every positional nucleotide column (nt_pos1 ... nt_posN)
NUCLEOTIDE_SPEC = CategoricalFeatureSpec(
    name='nt_pos',
    levels=('A', 'T', 'C', 'G'),
    description="Nucleotide observed at one position of the sequence context"
)

CATEGORICAL_FEATURES: Dict[str, CategoricalFeatureSpec] = {
    'RNA_type': RNA_TYPE_SPEC,
    'RNA_region': RNA_REGION_SPEC,
}


# ==============================================================================
# Feature Schema
# ==============================================================================

@dataclass
class FeatureSchema:
    """
    Standardized feature schema for m6A site prediction.

    Attributes
    ----------
    NUMERIC_COLS : list of str
        Numeric genomic features, passed to the classifier as-is.
    CATEGORICAL_COLS : list of str
        Categorical features with closed level sets.
    SEQUENCE_COL : str
        Column holding the fixed-length nucleotide context.
    NUCLEOTIDE_PREFIX : str
        Prefix of the positional nucleotide columns derived from SEQUENCE_COL.
    PROB_COL, STATUS_COL : str
        Output columns appended by the prediction engine.
    STATUS_LEVELS : tuple of str
        Level set of STATUS_COL.
    POSITIVE_LABEL : str
        Classifier class whose probability is reported.
    """

    NUMERIC_COLS: List[str] = field(default_factory=lambda: [
        'gc_content',
        'exon_length',
        'distance_to_junction',
        'evolutionary_conservation',
    ])

    CATEGORICAL_COLS: List[str] = field(default_factory=lambda: [
        'RNA_type',
        'RNA_region',
    ])

    SEQUENCE_COL: str = 'DNA_5mer'
    NUCLEOTIDE_PREFIX: str = 'nt_pos'

    PROB_COL: str = 'predicted_m6A_prob'
    STATUS_COL: str = 'predicted_m6A_status'
    STATUS_LEVELS: Tuple[str, ...] = ('Negative', 'Positive')
    POSITIVE_LABEL: str = 'Positive'

    categorical_specs: Dict[str, CategoricalFeatureSpec] = field(
        default_factory=lambda: dict(CATEGORICAL_FEATURES)
    )
    nucleotide_spec: CategoricalFeatureSpec = NUCLEOTIDE_SPEC

    def get_required_cols(self) -> List[str]:
        """Input columns a batch feature table must carry, in canonical order."""
        return [
            'gc_content',
            'RNA_type',
            'RNA_region',
            'exon_length',
            'distance_to_junction',
            'evolutionary_conservation',
            self.SEQUENCE_COL,
        ]

    def get_nucleotide_cols(self, n_positions: int) -> List[str]:
        return [f"{self.NUCLEOTIDE_PREFIX}{i}" for i in range(1, n_positions + 1)]

    def get_model_feature_cols(self, n_positions: int) -> List[str]:
        """Columns handed to the classifier, in order."""
        return (
            list(self.NUMERIC_COLS) +
            list(self.CATEGORICAL_COLS) +
            self.get_nucleotide_cols(n_positions)
        )

    def get_output_cols(self) -> List[str]:
        return [self.PROB_COL, self.STATUS_COL]

    def is_nucleotide_column(self, col_name: str) -> bool:
        suffix = col_name[len(self.NUCLEOTIDE_PREFIX):]
        return col_name.startswith(self.NUCLEOTIDE_PREFIX) and suffix.isdigit()

    def get_categorical_spec(self, col_name: str) -> Optional[CategoricalFeatureSpec]:
        """Get the level specification for a categorical column, if any."""
        if col_name in self.categorical_specs:
            return self.categorical_specs[col_name]
        if self.is_nucleotide_column(col_name):
            return self.nucleotide_spec.renamed(col_name)
        return None

    def get_categorical_levels(self, n_positions: int) -> Dict[str, List[str]]:
        """Map every categorical model feature to its ordered level list."""
        cols = list(self.CATEGORICAL_COLS) + self.get_nucleotide_cols(n_positions)
        return {col: list(self.get_categorical_spec(col).levels) for col in cols}


# Default schema instance
DEFAULT_SCHEMA = FeatureSchema()


# ==============================================================================
# Encoding Functions
# ==============================================================================

def apply_categorical_levels(
    df: pd.DataFrame,
    columns: Optional[Sequence[str]] = None,
    schema: FeatureSchema = DEFAULT_SCHEMA,
) -> pd.DataFrame:
    """
    Re-assert the declared level set on categorical columns.

    Parameters
    ----------
    df : pd.DataFrame
        Input dataframe
    columns : sequence of str, optional
        Columns to re-level. If None, the schema's CATEGORICAL_COLS.
    schema : FeatureSchema
        Schema supplying the level sets

    Returns
    -------
    pd.DataFrame
        Copy of ``df`` where each column is a pandas Categorical over its
        full level set, even for levels absent from this dataframe.

    Raises
    ------
    UnseenCategoryError
        If a column holds a value (or missing value) outside its level set.
    KeyError
        If a column has no categorical specification in the schema.
    """
    result_df = df.copy()
    if columns is None:
        columns = schema.CATEGORICAL_COLS

    for col in columns:
        spec = schema.get_categorical_spec(col)
        if spec is None:
            raise KeyError(f"No categorical specification for column '{col}'")
        validate_categories(result_df[col], spec)
        result_df[col] = pd.Categorical(result_df[col], categories=list(spec.levels))

    return result_df


def make_feature_encoder(n_positions: int = 5, schema: FeatureSchema = DEFAULT_SCHEMA):
    """
    Build a scikit-learn transformer that one-hot encodes the model features.

    Every categorical column is expanded over its declared levels, so the
    design matrix has the same width whichever levels occur in a batch.
    Numeric columns pass through unchanged. Intended as the first step of a
    classifier pipeline whose ``predict_proba`` receives the assembled
    feature table.

    Parameters
    ----------
    n_positions : int
        Length of the nucleotide context (number of nt_pos columns)
    schema : FeatureSchema
        Schema supplying column names and level sets

    Returns
    -------
    sklearn.compose.ColumnTransformer
    """
    from sklearn.compose import ColumnTransformer
    from sklearn.preprocessing import OneHotEncoder

    levels = schema.get_categorical_levels(n_positions)
    cat_cols = list(levels.keys())
    cat_encoder = OneHotEncoder(
        categories=[levels[col] for col in cat_cols],
        handle_unknown='error',
        sparse_output=False,
    )
    return ColumnTransformer(
        transformers=[
            ('num', 'passthrough', list(schema.NUMERIC_COLS)),
            ('cat', cat_encoder, cat_cols),
        ],
        remainder='drop',
    )


def get_categorical_feature_names() -> List[str]:
    """Return list of all registered categorical feature names."""
    return list(CATEGORICAL_FEATURES.keys())

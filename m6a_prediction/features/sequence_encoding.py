"""
Positional encoding of nucleotide sequence contexts.

Each fixed-length nucleotide string (e.g. the ``DNA_5mer`` around a candidate
site) is split into one categorical column per position, ``nt_pos1`` for the
first character through ``nt_posN`` for the last, each valued over the
closed nucleotide alphabet.
"""

import logging
from typing import List, Sequence, Union

import numpy as np
import pandas as pd
import polars as pl

from ..core.feature_schema import DEFAULT_SCHEMA, FeatureSchema, apply_categorical_levels
from ..core.validators import validate_sequence_lengths

logger = logging.getLogger(__name__)

SequenceInput = Union[Sequence[str], pd.Series, pl.Series, np.ndarray]


def _as_list(sequences: SequenceInput) -> List:
    if isinstance(sequences, pd.Series):
        return sequences.tolist()
    if isinstance(sequences, pl.Series):
        return sequences.to_list()
    if isinstance(sequences, np.ndarray):
        return sequences.tolist()
    if isinstance(sequences, str):
        # A bare string is one sequence, not a collection of characters
        return [sequences]
    return list(sequences)


def sequence_length(sequences: SequenceInput) -> int:
    """Return the common length of a batch of nucleotide strings."""
    return validate_sequence_lengths(_as_list(sequences))


def encode_dna_sequences(
    sequences: SequenceInput,
    schema: FeatureSchema = DEFAULT_SCHEMA,
) -> pd.DataFrame:
    """
    Encode nucleotide strings into positional categorical columns.

    Parameters
    ----------
    sequences : sequence of str, pd.Series or pl.Series
        Nucleotide strings of a common length N, in row order.
    schema : FeatureSchema
        Schema supplying the column prefix and nucleotide alphabet.

    Returns
    -------
    pd.DataFrame
        One row per input string and N columns ``nt_pos1..nt_posN``, each a
        pandas Categorical over the full alphabet (A, T, C, G) regardless of
        which nucleotides are observed. A pandas Series input keeps its index
        so the result can be joined column-wise onto the source table.

    Raises
    ------
    ShapeMismatchError
        If the collection is empty or the strings differ in length.
    UnseenCategoryError
        If a character falls outside the nucleotide alphabet.

    Examples
    --------
    >>> encoded = encode_dna_sequences(["GGACC", "TGACC"])
    >>> encoded.loc[1].tolist()
    ['T', 'G', 'A', 'C', 'C']
    """
    values = _as_list(sequences)
    n_positions = validate_sequence_lengths(values)
    columns = schema.get_nucleotide_cols(n_positions)

    if isinstance(sequences, pd.Series):
        index = sequences.index
    else:
        index = pd.RangeIndex(len(values))

    seq_df = pd.DataFrame([list(seq) for seq in values], columns=columns, index=index)
    seq_df = apply_categorical_levels(seq_df, columns=columns, schema=schema)

    logger.debug(f"Encoded {len(values)} sequences into {n_positions} positional columns")
    return seq_df

"""
Feature encoding modules.
"""

from .sequence_encoding import encode_dna_sequences, sequence_length

__all__ = [
    'encode_dna_sequences',
    'sequence_length',
]

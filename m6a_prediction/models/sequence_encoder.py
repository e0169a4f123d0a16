"""
Positional encoder for short DNA sequences.

Each character position of a fixed-length sequence becomes its own
categorical column whose levels are always the full nucleotide alphabet,
so a batch that only contains some of the symbols at a position still
encodes compatibly with a classifier fit on all four.
"""

import logging
import re
from typing import Iterable, Optional, Tuple, Union

import pandas as pd

from ..core.exceptions import InvalidSequenceAlphabetError, InvalidSequenceLengthError
from ..core.feature_schema import DEFAULT_SCHEMA, NUCLEOTIDE_LEVELS, to_categorical

logger = logging.getLogger(__name__)

_DNA_PATTERN = re.compile(r'[ATCGatcg]+')


def encode_sequences(
    sequences: Union[pd.Series, Iterable[str]],
    length: Optional[int] = None,
    prefix: str = DEFAULT_SCHEMA.POSITION_PREFIX,
    levels: Tuple[str, ...] = NUCLEOTIDE_LEVELS,
    handle_unknown: str = 'passthrough'
) -> pd.DataFrame:
    """
    Encode DNA sequences into one categorical column per position.

    Parameters
    ----------
    sequences : pd.Series or iterable of str
        Sequences of equal length. A Series keeps its index on the output.
    length : int, optional
        Required sequence length. Defaults to the length of the first sequence.
    prefix : str
        Column name prefix; columns are ``{prefix}1`` .. ``{prefix}N``.
    levels : tuple of str
        Category levels of every positional column, in order.
    handle_unknown : str
        'error' raises on symbols outside ``levels``; 'passthrough' leaves
        them as missing categories.

    Returns
    -------
    pd.DataFrame
        One row per input sequence, in input order, and one column per position.

    Raises
    ------
    InvalidSequenceLengthError
        If any sequence differs from the expected length.

    Examples
    --------
    >>> encode_sequences(['ATCGA', 'GGTCA']).columns.tolist()
    ['position_1', 'position_2', 'position_3', 'position_4', 'position_5']
    """
    if isinstance(sequences, pd.Series):
        index = sequences.index
        seqs = sequences.tolist()
    else:
        seqs = list(sequences)
        index = pd.RangeIndex(len(seqs))

    if length is None:
        length = len(seqs[0]) if seqs else 0

    bad_rows = [i for i, s in enumerate(seqs) if not isinstance(s, str) or len(s) != length]
    if bad_rows:
        raise InvalidSequenceLengthError(
            f"Expected sequences of length {length}; "
            f"{len(bad_rows)} rows differ (first at row {bad_rows[0]}: {seqs[bad_rows[0]]!r})"
        )

    columns = [f"{prefix}{i}" for i in range(1, length + 1)]
    chars = pd.DataFrame([list(s) for s in seqs], columns=columns, dtype=object)
    chars.index = index

    encoded = pd.DataFrame(
        {col: to_categorical(chars[col], col, levels, handle_unknown) for col in columns},
        index=index,
    )
    logger.debug(f"Encoded {len(seqs)} sequences into {length} positional columns")
    return encoded


def validate_sequence(sequence: str, length: int = DEFAULT_SCHEMA.SEQUENCE_LENGTH) -> str:
    """
    Validate a single DNA sequence and return it upper-cased.

    The length is checked before the alphabet.

    Raises
    ------
    InvalidSequenceLengthError
        If the sequence is not exactly ``length`` characters.
    InvalidSequenceAlphabetError
        If the sequence is not a string of A, T, C, G (any case).
    """
    if not isinstance(sequence, str):
        raise InvalidSequenceAlphabetError(
            f"DNA sequence must be a string of A, T, C, G characters, got {type(sequence).__name__}"
        )
    if len(sequence) != length:
        raise InvalidSequenceLengthError(
            f"DNA sequence must be exactly {length} characters long, got {len(sequence)}: {sequence!r}"
        )
    if not _DNA_PATTERN.fullmatch(sequence):
        raise InvalidSequenceAlphabetError(
            f"DNA sequence must contain only A, T, C, G characters: {sequence!r}"
        )
    return normalize_sequence(sequence)


def normalize_sequence(sequence: str) -> str:
    return sequence.upper()


def normalize_sequences(sequences: pd.Series) -> pd.Series:
    """Upper-case a column of sequences, leaving non-string entries untouched."""
    return sequences.map(lambda s: s.upper() if isinstance(s, str) else s)

"""Tokenising, vocabulary building, one-hot encoding and reshaping of sequence data."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, Sequence

import numpy as np

END_TOKEN = "EOS"
PADDING_TOKEN = "PAD"
UNKNOWN_TOKEN = "UNK"


def tokenize(text: str, delimiter: str = " ") -> list[str]:
    """Split ``text`` on a single-character delimiter; a trailing empty piece is dropped."""
    if len(delimiter) != 1:
        raise ValueError("delimiter must be a single character")
    parts = text.split(delimiter)
    if parts and parts[-1] == "":
        parts.pop()
    return parts


def tokenize_dataset(dataset: Iterable[str], delimiter: str = " ") -> list[list[str]]:
    """Tokenise every text of ``dataset``."""
    return [tokenize(text, delimiter) for text in dataset]


def max_sequence_length(tokenized: Iterable[Sequence[str]]) -> int:
    """Return the length of the longest token sequence, or 0."""
    return max((len(tokens) for tokens in tokenized), default=0)


def build_vocabulary(
    tokenized: Iterable[Iterable[str]],
    end_token: str = END_TOKEN,
    padding_token: str = PADDING_TOKEN,
    unknown_token: str = UNKNOWN_TOKEN,
) -> list[str]:
    """Return the sorted set of all tokens plus the special tokens."""
    vocabulary = {token for tokens in tokenized for token in tokens}
    vocabulary.update((end_token, padding_token, unknown_token))
    return sorted(vocabulary)


def token_index(vocabulary: Iterable[str]) -> tuple[dict[str, int], dict[int, str]]:
    """Number tokens in order; return token-to-index and index-to-token maps."""
    string_idx: dict[str, int] = {}
    for token in vocabulary:
        string_idx.setdefault(token, len(string_idx))
    idx_string = {index: token for token, index in string_idx.items()}
    return string_idx, idx_string


def pad_sequences(
    tokenized: Iterable[Sequence[str]],
    max_len: int,
    end_token: str = END_TOKEN,
    padding_token: str = PADDING_TOKEN,
) -> list[list[str]]:
    """Append the end token, then padding, until each sequence holds ``max_len + 1`` tokens.

    Sequences already longer than ``max_len`` are left as they are.
    """
    padded = []
    for tokens in tokenized:
        sequence = list(tokens)
        length = len(sequence)
        for position in range(length, max_len + 1):
            sequence.append(end_token if position == length else padding_token)
        padded.append(sequence)
    return padded


def text_one_hot(
    samples: Iterable[str],
    string_idx: Mapping[str, int],
    vocabulary_size: int,
    unknown_token: str = UNKNOWN_TOKEN,
) -> np.ndarray:
    """One-hot encode tokens; unknown tokens map to ``unknown_token``.

    Returns an integer array of shape (tokens, vocabulary_size).
    """
    tokens = list(samples)
    encoded = np.zeros((len(tokens), vocabulary_size), dtype=int)
    for row, token in enumerate(tokens):
        index = string_idx[token] if token in string_idx else string_idx[unknown_token]
        encoded[row, index] = 1
    return encoded


def one_hot_dataset(
    tokenized: Iterable[Iterable[str]],
    string_idx: Mapping[str, int],
    vocabulary_size: int,
    unknown_token: str = UNKNOWN_TOKEN,
) -> list[np.ndarray]:
    """One-hot encode every sequence, giving one (steps, vocabulary_size) array each."""
    return [
        text_one_hot(tokens, string_idx, vocabulary_size, unknown_token)
        for tokens in tokenized
    ]


def reshape_one_hot(dataset: Iterable[np.ndarray]) -> list[np.ndarray]:
    """Turn each encoded vector into a column: (steps, vocab) becomes (steps, vocab, 1)."""
    return [np.asarray(sequence)[..., None] for sequence in dataset]


def batch_dataset(dataset: Sequence, batch_size: int) -> list[list]:
    """Group consecutive items into full batches; a final partial batch is dropped."""
    if batch_size < 1:
        raise ValueError("batch_size must be at least 1")
    n_batches = len(dataset) // batch_size
    return [
        list(dataset[i * batch_size:(i + 1) * batch_size]) for i in range(n_batches)
    ]


def transpose_batches(batches: Iterable[Sequence[Sequence]]) -> list[list[list]]:
    """Swap the item and step axes of every batch."""
    result = []
    for batch in batches:
        steps = len(batch[0]) if batch else 0
        result.append([[item[step] for item in batch] for step in range(steps)])
    return result


def split_shifted(dataset: Iterable[Sequence], shift: int = 1) -> tuple[list, list]:
    """Split each sequence into inputs and targets shifted ``shift`` steps ahead."""
    if shift < 0:
        raise ValueError("shift must not be negative")
    inputs, targets = [], []
    for sample in dataset:
        inputs.append(sample[:max(0, len(sample) - shift)])
        targets.append(sample[shift:])
    return inputs, targets


def decrease_shape(x) -> np.ndarray:
    """Drop the last axis, keeping its first entry."""
    values = np.asarray(x, dtype=float)
    if not 2 <= values.ndim <= 4:
        raise ValueError("expected an array of two to four dimensions")
    return values[..., 0]


def increase_shape(x) -> np.ndarray:
    """Append an axis of length one."""
    values = np.asarray(x, dtype=float)
    if not 1 <= values.ndim <= 3:
        raise ValueError("expected an array of one to three dimensions")
    return values[..., None]


def euclidean_distance(a, b) -> float:
    """Return the Euclidean distance between two arrays of the same shape."""
    left = np.asarray(a, dtype=float)
    right = np.asarray(b, dtype=float)
    if left.shape != right.shape:
        raise ValueError("arrays must have the same shape")
    return math.sqrt(float(np.sum((left - right) ** 2)))


def _column_argmax(vector) -> int:
    values = np.asarray(vector, dtype=float)
    if values.ndim >= 2:
        values = values.reshape(values.shape[0], -1)[:, 0]
    return int(np.argmax(values))


def decode_predictions(
    y_hat: Sequence[Sequence], y_true: Sequence[Sequence], idx_string: Mapping[int, str]
) -> list[tuple[list[str], list[str]]]:
    """Turn one-hot targets and predicted distributions back into tokens.

    Returns, per sample, the true tokens and the predicted tokens. Indices not in
    ``idx_string`` give empty strings.
    """
    decoded = []
    for index, truth in enumerate(y_true):
        true_words = [idx_string.get(_column_argmax(step), "") for step in truth]
        predicted = [idx_string.get(_column_argmax(step), "") for step in y_hat[index]]
        decoded.append((true_words, predicted))
    return decoded
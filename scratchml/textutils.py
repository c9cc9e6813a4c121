"""Small text helpers shared by the Markov chain and hidden Markov model code."""

from __future__ import annotations

import string
from collections.abc import MutableMapping, Mapping

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
_DIGITS = frozenset(string.digits)
_PUNCTUATION = frozenset(string.punctuation)

DEFAULT_FILE_DELIMITER = "+++$+++"


def _ascii_lower(text: str) -> str:
    return text.translate(_ASCII_LOWER)


def trim(text: str) -> str:
    """Strip leading and trailing spaces; a string of spaces only is returned unchanged."""
    stripped = text.strip(" ")
    return stripped if stripped else text


def remove_numbers(text: str) -> str:
    """Drop every ASCII digit."""
    return "".join(ch for ch in text if ch not in _DIGITS)


def remove_punctuations(text: str) -> str:
    """Drop every ASCII punctuation character."""
    return "".join(ch for ch in text if ch not in _PUNCTUATION)


def split(line: str, delimiter: str, remove_punctuations: bool = False) -> list[str]:
    """Split ``line`` on ``delimiter``, lower-casing and removing digits from each piece.

    After each cut the remainder is trimmed of spaces. Pieces before the last one are
    not trimmed themselves. With ``remove_punctuations`` the remaining text loses its
    punctuation before each cut, while the cut position is the one found beforehand.
    """
    if not delimiter:
        raise ValueError("delimiter must not be empty")
    strip_punct = remove_punctuations
    values: list[str] = []
    while (pos := line.find(delimiter)) != -1:
        if strip_punct:
            line = _strip_punctuation(line)
        token = remove_numbers(_ascii_lower(line[:pos]))
        values.append(token)
        line = trim(line[pos + len(delimiter):])
    values.append(_ascii_lower(remove_numbers(trim(line))))
    return values


def _strip_punctuation(text: str) -> str:
    return "".join(ch for ch in text if ch not in _PUNCTUATION)


def read_file(path, delimiter: str = DEFAULT_FILE_DELIMITER) -> list[str]:
    """Return the last delimited field of every line of a file.

    A file that does not exist yields an empty list.
    """
    try:
        with open(path, encoding="utf-8") as handle:
            return [split(raw.rstrip("\n"), delimiter)[-1] for raw in handle]
    except FileNotFoundError:
        return []


def symbol_to_index(symbol_index: MutableMapping[str, int], symbol: str) -> int:
    """Return the index of ``symbol``, giving it the next free index if it is new."""
    if symbol not in symbol_index:
        symbol_index[symbol] = len(symbol_index)
    return symbol_index[symbol]


def get_symbol_index(symbol_index: Mapping[str, int], symbol: str) -> int:
    """Return the index of ``symbol``, or 0 when it is unknown."""
    return symbol_index.get(symbol, 0)
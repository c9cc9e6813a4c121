"""Hidden Markov model description and observation data readers."""

from __future__ import annotations

import string
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import NamedTuple, TextIO, Union

import numpy as np

from scratchml.textutils import (
    get_symbol_index,
    remove_numbers,
    split,
    symbol_to_index,
    trim,
)

_PUNCTUATION = frozenset(string.punctuation)
_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)

Source = Union[str, TextIO]


@dataclass
class HiddenMarkovModel:
    """States, symbols and the probabilities that link them.

    State 0 is the starting state and the last state is the ending state.
    ``transition_prob[i, j]`` is the probability of moving from state ``i`` to
    ``j``; ``emission_prob[i, k]`` is the probability of state ``i`` emitting
    symbol ``k``.
    """

    state_names: list[str] = field(default_factory=list)
    state_index: dict[str, int] = field(default_factory=dict)
    alphabet_size: int = 0
    transition_prob: np.ndarray = field(default_factory=lambda: np.zeros((0, 0)))
    emission_prob: np.ndarray = field(default_factory=lambda: np.zeros((0, 0)))
    symbol_index: dict[str, int] = field(default_factory=dict)

    @property
    def n_states(self) -> int:
        return int(self.transition_prob.shape[0])


class Observation(NamedTuple):
    """One step of experiment data: its time, real state and emitted symbol."""

    time: int
    state: int
    symbol: int


@dataclass
class ObservationData:
    """A sequence of observations."""

    observations: list[Observation] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.observations)

    def __iter__(self) -> Iterator[Observation]:
        return iter(self.observations)


class _TokenReader:
    """Reads whitespace-separated tokens from text or a text stream."""

    def __init__(self, source: Source) -> None:
        text = source if isinstance(source, str) else source.read()
        self._tokens = iter(text.split())

    def word(self, what: str) -> str:
        try:
            return next(self._tokens)
        except StopIteration:
            raise ValueError(f"unexpected end of input while reading {what}") from None

    def integer(self, what: str) -> int:
        token = self.word(what)
        try:
            value = int(token)
        except ValueError:
            raise ValueError(f"expected a whole number for {what}, got {token!r}") from None
        if value < 0:
            raise ValueError(f"{what} must not be negative, got {value}")
        return value

    def number(self, what: str) -> float:
        token = self.word(what)
        try:
            return float(token)
        except ValueError:
            raise ValueError(f"expected a number for {what}, got {token!r}") from None


def read_model(source: Source) -> HiddenMarkovModel:
    """Read a model description from text or a readable text stream.

    The layout is: the number of states and their names, the alphabet size,
    the number of transitions followed by ``from to probability`` triples, and
    the number of emissions followed by ``state symbol probability`` triples.
    A state name that was not declared resolves to the starting state.
    """
    reader = _TokenReader(source)
    n_states = reader.integer("the number of states")
    if n_states < 2:
        raise ValueError("There must be at least two states: begin and end")

    model = HiddenMarkovModel()
    for index in range(n_states):
        name = reader.word("a state name")
        model.state_index[name] = index
        model.state_names.append(name)

    model.alphabet_size = reader.integer("the alphabet size")

    model.transition_prob = np.zeros((n_states, n_states))
    for _ in range(reader.integer("the number of transitions")):
        source_name = reader.word("a transition source")
        target_name = reader.word("a transition target")
        prob = reader.number("a transition probability")
        from_index = model.state_index.setdefault(source_name, 0)
        to_index = model.state_index.setdefault(target_name, 0)
        if from_index + 1 == n_states:
            raise ValueError("Transition from the ending state is forbidden")
        if to_index == 0:
            raise ValueError("Transition to the starting state is forbidden")
        model.transition_prob[from_index, to_index] = prob

    model.emission_prob = np.zeros((n_states, model.alphabet_size))
    for _ in range(reader.integer("the number of emissions")):
        state_name = reader.word("an emitting state")
        symbol = reader.word("an emitted symbol")
        prob = reader.number("an emission probability")
        state = model.state_index.setdefault(state_name, 0)
        symbol_id = symbol_to_index(model.symbol_index, symbol)
        if state == 0 or state + 1 == n_states:
            raise ValueError(
                "Symbol emission from the begining or the ending states is forbidden"
            )
        if symbol_id >= model.alphabet_size:
            raise ValueError(
                f"symbol {symbol!r} exceeds the alphabet size {model.alphabet_size}"
            )
        model.emission_prob[state, symbol_id] = prob

    return model


def _clean(token: str) -> str:
    return trim(remove_numbers(token.translate(_ASCII_LOWER)))


def _state_of(model: HiddenMarkovModel, name: str) -> int:
    try:
        return model.state_index[name]
    except KeyError:
        raise KeyError(f"unknown state {name!r}") from None


def _is_usable(state_name: str, symbol: str) -> bool:
    return bool(state_name) and bool(symbol) and state_name[0] not in _PUNCTUATION


def read_observations(model: HiddenMarkovModel, source: Source) -> ObservationData:
    """Read experiment data: a step count, then ``time state symbol`` triples.

    Names are lower-cased and stripped of digits. Steps with an empty name or a
    state starting with punctuation are skipped. Unknown symbols map to index 0;
    an unknown state raises ``KeyError``.
    """
    reader = _TokenReader(source)
    n_steps = reader.integer("the number of steps")
    if n_steps == 0:
        raise ValueError("Empty experiment data")

    data = ObservationData()
    for _ in range(n_steps):
        time = reader.integer("a step number")
        state_name = _clean(reader.word("a state name"))
        symbol = _clean(reader.word("a symbol"))
        if not _is_usable(state_name, symbol):
            continue
        data.observations.append(
            Observation(
                time,
                _state_of(model, state_name),
                get_symbol_index(model.symbol_index, symbol),
            )
        )
    return data


def read_observation_file(
    model: HiddenMarkovModel, path, delimiter: str = " "
) -> list[ObservationData]:
    """Read a tagged corpus of ``symbol<delimiter>state`` lines, one sentence per block.

    Sentences are separated by empty lines and numbered from step 0. A missing
    file gives an empty list.
    """
    sentences: list[ObservationData] = []
    try:
        handle = open(path, encoding="utf-8")
    except FileNotFoundError:
        return sentences

    current: list[Observation] = []
    with handle:
        for raw in handle:
            line = raw.rstrip("\n")
            if line == "":
                if current:
                    sentences.append(ObservationData(current))
                    current = []
                continue
            parts = split(line, delimiter)
            if len(parts) < 2:
                continue
            symbol, state_name = parts[0], parts[1]
            if not _is_usable(state_name, symbol):
                continue
            current.append(
                Observation(
                    len(current),
                    _state_of(model, state_name),
                    get_symbol_index(model.symbol_index, symbol),
                )
            )
    if current:
        sentences.append(ObservationData(current))
    return sentences
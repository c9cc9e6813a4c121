# scratchml

Small, readable implementations of classic machine-learning algorithms,
built on plain Python and NumPy.

## What is inside

- `scratchml.textutils` – text helpers: `trim`, `remove_numbers`,
  `remove_punctuations`, `split` (lower-cases and drops digits from each
  piece), `read_file` (last delimited field of every line), and
  `symbol_to_index` / `get_symbol_index` for symbol numbering.
- `scratchml.hmm_model` – `HiddenMarkovModel`, `Observation` and
  `ObservationData`; `read_model` reads a model description,
  `read_observations` reads experiment data, and `read_observation_file`
  reads a tagged corpus of `symbol state` lines split into sentences by
  blank lines.
- `scratchml.hmm_algorithms` – `viterbi` decoding and `forward_backward`
  probabilities.
- `scratchml.estimator` – `most_probable_states` from forward-backward
  pairs, `confusion_matrix`, `state_metrics` (true/false positives and
  negatives, precision, recall, F1 score as `EvaluationMetrics`) and
  `format_report`.
- `scratchml.csvdata` – `read_csv` (skips the header line), `split_line`,
  `slice_floats`, `remove_column`, `convert_samples` into `LabelledSample`
  objects with categorical encoding, and `write_predictions_csv`.
- `scratchml.knn` – `convert_csv_samples` and `classify_point`
  (k-nearest-neighbour vote, ties go to the lower class).
- `scratchml.kmeans` – `Point`, `read_points`, `k_means` and
  `write_clusters_csv`.
- `scratchml.gini` – `gini_impurity`, `split_targets`, `best_split`
  (returning a `BestSplit`) and a `Node` that stores its data and best split.
- `scratchml.regression` – `LinearRegression` and `LogisticRegression`,
  trained with `TrainingType.NORMAL_EQUATION` or
  `TrainingType.GRADIENT_DESCENT`, plus `min_max_scale`,
  `samples_to_arrays` and `accuracy`.
- `scratchml.optimizers` – `GradientDescent` and `Adam` (no bias
  correction), both updating dictionaries of NumPy arrays in place.
- `scratchml.activations` – `sigmoid`, `sigmoid_derivative`, `tanh`,
  `tanh_derivative` and column-wise `softmax`.
- `scratchml.sequences` – tokenising, vocabulary and index building,
  padding with `EOS`/`PAD`, one-hot encoding (unknown tokens map to `UNK`),
  batching, shifting sequences into inputs and targets, reshaping and
  `decode_predictions`.
- `scratchml.embedding` – `Embedding`, a skip-gram style layer trained on
  context windows of one-hot sequences.
- `scratchml.rnn` and `scratchml.lstm` – `RNN` and `LSTM` networks with a
  softmax output at every step. `train` returns the summed loss of every
  epoch and logs it every fifth epoch through the standard `logging`
  module at INFO level.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example: Viterbi decoding

A model description lists the number of states and their names (the first
is the starting state, the last the ending state), the alphabet size, the
transitions as `from to probability`, and the emissions as
`state symbol probability`. Observation data gives a step count followed by
`time state symbol` triples.

```python
from scratchml.hmm_model import read_model, read_observations
from scratchml.hmm_algorithms import viterbi
from scratchml.estimator import confusion_matrix, state_metrics, format_report

model = read_model("""
4
begin rain sun end
2
6
begin rain 0.5
begin sun 0.5
rain rain 0.7
rain sun 0.3
sun sun 0.6
sun rain 0.4
4
rain umbrella 0.9
rain none 0.1
sun umbrella 0.2
sun none 0.8
""")
data = read_observations(model, """
3
0 rain umbrella
1 rain umbrella
2 sun none
""")

predicted = viterbi(model, data)
matrix = confusion_matrix(data, predicted, model)
for name, metrics in zip(model.state_names, state_metrics(matrix)):
    print(format_report(name, metrics))
```

`read_model` and `read_observations` take either text or an open text
stream, and raise `ValueError` on malformed or forbidden input.

## Example: logistic regression

```python
import numpy as np
from scratchml.regression import LogisticRegression, TrainingType, min_max_scale, accuracy

x, mins, maxs = min_max_scale(np.array([[2, 2], [3, 3], [-1, 2], [-4, -4]], dtype=float))
y = np.array([1, 1, 0, 0], dtype=float)
model = LogisticRegression(x, y, 0.0, np.random.default_rng(0))
model.train(TrainingType.GRADIENT_DESCENT, 0.1, 1000)
print(accuracy(y, model.predict(x)))
```

Calling `predict` or `cost` on a model that has not been trained raises
`RuntimeError`.

## Example: k-nearest neighbours

```python
from scratchml.knn import convert_csv_samples, classify_point

rows = [
    ["1", "Male", "19", "15"],
    ["2", "Male", "21", "15"],
    ["3", "Female", "20", "16"],
    ["4", "Female", "23", "16"],
]
class_map = {}
samples = convert_csv_samples(rows, 1, class_map)
print(classify_point(samples, len(class_map), 3, [20.0, 15.0]))
```

## What the package does not do

- It has no command-line program; everything is used from Python.
- It has no word-level Markov chain for generating text and no tool that
  builds a hidden Markov model description from a tagged corpus. Model
  descriptions have to be written or produced by other means before
  `read_model` can read them.
- Trained models are kept in memory only; there is no saving or loading of
  learned weights.
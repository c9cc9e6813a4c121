"""Reading, converting and writing comma-separated sample data."""

from __future__ import annotations

from collections.abc import MutableMapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

CSV_DELIMITER = ","


@dataclass
class LabelledSample:
    """Numeric features with an integer class label (-1 when unlabelled)."""

    features: list[float] = field(default_factory=list)
    label: int = -1


def split_line(line: str, delimiter: str = CSV_DELIMITER) -> list[str]:
    """Split ``line`` on every occurrence of ``delimiter``."""
    if not delimiter:
        raise ValueError("delimiter must not be empty")
    return line.split(delimiter)


def read_csv(path) -> list[list[str]]:
    """Return the fields of every line after the header line.

    A file that does not exist yields an empty list.
    """
    try:
        with open(path, encoding="utf-8") as handle:
            next(handle, None)
            return [split_line(raw.rstrip("\n")) for raw in handle]
    except FileNotFoundError:
        return []


def slice_floats(values: Sequence[str], start: int, stop: int) -> list[float]:
    """Convert the fields ``values[start:stop]`` to floats."""
    if start < 0 or stop > len(values) or start > stop:
        raise IndexError(f"slice {start}:{stop} is outside a row of {len(values)} fields")
    return [float(value) for value in values[start:stop]]


def remove_column(rows: Sequence[Sequence[str]], index: int) -> list[list[str]]:
    """Return the rows without the field at ``index``."""
    result = []
    for row in rows:
        if not -len(row) <= index < len(row):
            raise IndexError(f"column {index} is outside a row of {len(row)} fields")
        kept = list(row)
        del kept[index]
        result.append(kept)
    return result


def convert_samples(
    rows: Sequence[Sequence[str]],
    categorical_cols: Sequence[int],
    y_index: int,
    class_map: MutableMapping[str, int],
) -> list[LabelledSample]:
    """Turn text rows into labelled samples.

    Every column but ``y_index`` becomes a feature. Categorical columns are
    encoded by order of first appearance, separately per column; the others are
    parsed as floats. Labels come from ``class_map``, which is extended with new
    class names in order of first appearance.
    """
    if not rows:
        return []
    categorical = set(categorical_cols)
    n_columns = len(rows[0])
    encodings: dict[int, dict[str, int]] = {}

    samples = []
    for row in rows:
        features: list[float] = []
        for column in range(n_columns):
            if column == y_index:
                continue
            value = row[column]
            if column in categorical:
                encoding = encodings.setdefault(column, {})
                encoding.setdefault(value, len(encoding))
                features.append(float(encoding[value]))
            else:
                features.append(float(value))
        samples.append(LabelledSample(features))

    for row in rows:
        class_map.setdefault(row[y_index], len(class_map))
    for sample, row in zip(samples, rows):
        sample.label = class_map[row[y_index]]
    return samples


def write_predictions_csv(
    rows: Sequence[Sequence[str]], predictions: Sequence[int], path
) -> None:
    """Write each row followed by its prediction, under a ``Feat_n,...,y_true,y_hat`` header.

    The last field of every row is taken to be the true label.
    """
    if not rows:
        raise ValueError("no rows to write")
    if len(predictions) < len(rows):
        raise ValueError("fewer predictions than rows")
    n_fields = len(rows[0])
    header = "".join(f"Feat_{k + 1}," for k in range(n_fields - 1)) + "y_true,y_hat"
    lines = [header]
    for row, prediction in zip(rows, predictions):
        lines.append("".join(f"{value}," for value in row[:n_fields]) + str(int(prediction)))
    Path(path).write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
"""Correlation-based feature selection (CFS).

Features are added greedily, one per step.  At each step the feature that
gives the subset the highest merit is chosen:

    merit = k * mean(|r_cf|) / sqrt(k + k * (k - 1) * mean(|r_ff|))

Here ``r_cf`` is the correlation of a feature with the labels and ``r_ff``
is the correlation between two features of the subset.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence, Union

import numpy as np

from cfselect.ds2 import Precision

DTypeLike = Union[Precision, "np.typing.DTypeLike"]


@dataclass(frozen=True)
class SelectionResult:
    """Selected feature indices, in order of selection, and the final merit."""

    features: list[int] = field(default_factory=list)
    score: float = -1.0


def _as_dtype(dtype) -> np.dtype:
    if isinstance(dtype, Precision):
        return dtype.dtype.newbyteorder("=")
    result = np.dtype(dtype)
    if result.kind != "f":
        raise ValueError(f"a floating-point dtype is required, got {result}")
    return result


def correlation(x: Sequence[float], y: Sequence[float]) -> float:
    """Pearson correlation of two equally long vectors.

    A vector with no variance has no defined correlation; 0.0 is returned.
    """
    xs = np.asarray(x, dtype=np.float64).ravel()
    ys = np.asarray(y, dtype=np.float64).ravel()
    if xs.shape != ys.shape:
        raise ValueError(
            f"vectors must have the same length, got {xs.size} and {ys.size}"
        )
    if xs.size == 0:
        raise ValueError("cannot correlate empty vectors")
    dx = xs - xs.mean()
    dy = ys - ys.mean()
    denominator = np.sqrt(np.dot(dx, dx) * np.dot(dy, dy))
    if denominator == 0.0:
        return 0.0
    return float(np.dot(dx, dy) / denominator)


def merit(k: int, cf_sum: float, ff_sum: float) -> float:
    """Merit of a subset of *k* features.

    *cf_sum* is the sum of the absolute feature-class correlations and
    *ff_sum* the sum of the absolute correlations over all feature pairs.
    """
    if k < 1:
        raise ValueError(f"a subset needs at least one feature, got k={k}")
    if k == 1:
        return float(abs(cf_sum))
    cf_mean = cf_sum / k
    ff_mean = ff_sum / (k * (k - 1) / 2)
    return float(k * cf_mean / np.sqrt(k + k * (k - 1) * ff_mean))


def select_features(
    dataset,
    labels,
    k: int,
    dtype: DTypeLike = np.float64,
) -> SelectionResult:
    """Greedily select *k* features of *dataset* (rows are samples).

    Computation is carried out in *dtype*, which may also be a
    :class:`~cfselect.ds2.Precision`.
    """
    kind = _as_dtype(dtype)
    scalar = kind.type

    data = np.asarray(dataset, dtype=kind)
    if data.ndim != 2:
        raise ValueError(f"the dataset must have two dimensions, got {data.ndim}")
    rows, cols = data.shape
    target = np.asarray(labels, dtype=kind)
    if target.ndim == 2 and target.shape[1] == 1:
        target = target[:, 0]
    if target.ndim != 1 or target.size != rows:
        raise ValueError(f"Invalid size of labels, should be {rows}x1!")
    if k <= 0:
        raise ValueError("Invalid value of k parameter!")
    if k > cols:
        raise ValueError(f"cannot select {k} features out of {cols}")

    columns = np.ascontiguousarray(data.T)
    cf = [scalar(abs(correlation(column, target))) for column in columns]
    # ff_cache[i][j] holds |r| between feature i and the j-th selected feature.
    ff_cache: list[list] = [[] for _ in range(cols)]

    selected: list[int] = []
    chosen: set[int] = set()
    cf_sum = scalar(0.0)
    ff_sum = scalar(0.0)
    score = -1.0

    for step in range(k):
        size = step + 1
        best_merit = -1.0
        best: tuple[int, object, object] | None = None
        for feature in range(cols):
            if feature in chosen:
                continue
            cache = ff_cache[feature]
            for other in selected[len(cache):]:
                cache.append(
                    scalar(abs(correlation(columns[feature], columns[other])))
                )
            cand_cf = scalar(cf_sum + cf[feature])
            cand_ff = ff_sum
            for value in cache:
                cand_ff = scalar(cand_ff + value)
            value = merit(size, cand_cf, cand_ff)
            if value > best_merit:
                best_merit = value
                best = (feature, cand_cf, cand_ff)
        if best is None:
            raise ValueError(f"no feature with a defined merit at step {size}")
        feature, cf_sum, ff_sum = best
        chosen.add(feature)
        selected.append(feature)
        score = float(scalar(best_merit))

    return SelectionResult(features=selected, score=score)
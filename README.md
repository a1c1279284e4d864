# cfselect

Correlation-based Feature Selection (CFS) for numeric datasets stored in the
binary `ds2` matrix format.

Starting from an empty set, CFS adds one feature at a time. At each step it
picks the feature that gives the subset the highest *merit*:

```
merit = k * mean(|r_cf|) / sqrt(k + k * (k - 1) * mean(|r_ff|))
```

`r_cf` is the Pearson correlation of a feature with the labels and `r_ff` the
correlation between two features of the subset. The merit rewards a strong
correlation with the labels and penalises correlation with the features
already chosen.

## Installation

```
pip install .
```

To run the tests, install the `test` extra (`pip install .[test]`) and run
`pytest`.

## Command line

```
cfselect -ds dataset.ds2 -labels labels.ds2 -k 5 [-p 32|64] [-s] [-d]
```

- `-ds`: file holding the dataset, with one row per sample and one column per feature
- `-labels`: file holding the labels, with one column and as many rows as the dataset
- `-k`: number of features to select; the leading integer of the value is used
- `-p`: precision of the ds2 files in bits, `32` (the default) or `64`
- `-s`: silent mode, which prints only the elapsed processor time
- `-d`: print the score and the selected feature indices

Run without arguments, `cfselect` prints its usage and exits with status 0.
Unrecognised arguments are reported with a warning and otherwise ignored.
A missing file name, unreadable file, labels of the wrong shape or a `k` that
is not positive prints a message and exits with status 1.

The result goes to `out32_<N>_<d>_<k>.ds2` in the current directory, where
`<N>` is the number of rows, `<d>` the number of columns and `<k>` the number
of selected features. At 64-bit precision the prefix is `out64`.

## ds2 format

All integers are little-endian 32-bit values.

- 4 bytes: number of columns
- 4 bytes: number of rows
- then the values in row-major order, as little-endian 32-bit or 64-bit floats
  depending on the precision

A result file holds a first header value of 1, then `k + 1`, then the score as
one float of the chosen precision, then the `k` selected feature indices as
32-bit integers.

## Library use

```python
import numpy as np
from cfselect.ds2 import Precision, load_matrix, save_result, load_result
from cfselect.selection import select_features

data = load_matrix("dataset.ds2", Precision.SINGLE)
labels = load_matrix("labels.ds2", Precision.SINGLE)
result = select_features(data, labels, 3, np.float32)
print(result.score, result.features)
save_result("result.ds2", result.score, result.features, Precision.SINGLE)
print(load_result("result.ds2", Precision.SINGLE))
```

### `cfselect.ds2`

- `Precision.SINGLE` / `Precision.DOUBLE`: on-disk float width; `.dtype` and
  `.bits` give the numpy dtype and the width in bits.
- `load_matrix(path, precision)`: returns an array of shape `(rows, cols)`.
- `save_matrix(path, matrix, precision)`: writes a 2-D matrix; `None` writes
  an empty 0x0 matrix.
- `save_result(path, score, features, precision)`: writes a result file;
  `None` for `features` creates an empty file.
- `load_result(path, precision)`: returns `(score, feature_indices)`.
- `DatasetError`: raised for missing, truncated or malformed files and for
  write failures.

### `cfselect.selection`

- `select_features(dataset, labels, k, dtype=np.float64)`: rows of `dataset`
  are samples; `labels` may be a vector or a single column. `dtype` is a float
  dtype or a `Precision`. Returns a `SelectionResult` with `features` (in
  order of selection) and `score` (the merit of the final subset). Raises
  `ValueError` for mismatched shapes, `k <= 0` or `k` larger than the number
  of features.
- `correlation(x, y)`: Pearson correlation of two vectors; 0.0 when either
  has no variance.
- `merit(k, cf_sum, ff_sum)`: CFS merit of a subset of `k` features, from the
  sum of absolute feature–label correlations and the sum of absolute
  correlations over all feature pairs.

### `cfselect.cli`

- `parse_args(argv)` builds an `Options`, raising `UsageError` on bad input.
- `run(options)` loads the files, selects features, prints the report, writes
  the result file and returns the `SelectionResult`.
- `output_filename(rows, cols, k, precision)` gives the result file name.
- `main(argv=None)` is the `cfselect` command and returns its exit status.

## Limits

Selection runs in a single process on data held in memory; there is no
parallel or out-of-core mode. Only the ds2 format is read and written.
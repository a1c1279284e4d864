"""Reading and writing of the binary ``.ds2`` matrix format.

A ``.ds2`` file starts with two little-endian 32-bit integers, the number
of columns followed by the number of rows.  The matrix values follow in
row-major order, as single or double precision floats depending on the
build precision of the data set.

Result files reuse the same header with one "column" and ``k + 1`` "rows".
The payload is the score, stored as one float of the chosen precision, and
then ``k`` 32-bit integers holding the selected feature indices.
"""

from __future__ import annotations

import enum
import struct
from os import PathLike
from pathlib import Path
from typing import Iterable, Sequence, Union

import numpy as np

PathType = Union[str, "PathLike[str]"]

_HEADER = struct.Struct("<ii")
_INDEX_DTYPE = np.dtype("<i4")


class DatasetError(Exception):
    """Raised when a ``.ds2`` file cannot be read or written."""


class Precision(enum.Enum):
    """Floating-point precision of the values stored in a file."""

    SINGLE = "<f4"
    DOUBLE = "<f8"

    @property
    def dtype(self) -> np.dtype:
        """Little-endian numpy dtype used on disk."""
        return np.dtype(self.value)

    @property
    def bits(self) -> int:
        """Width of one value in bits (32 or 64)."""
        return self.dtype.itemsize * 8


def _read_bytes(path: PathType) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise DatasetError(f"'{path}': bad data file name!") from exc


def _read_header(data: bytes, path: PathType) -> tuple[int, int]:
    if len(data) < _HEADER.size:
        raise DatasetError(f"'{path}': file too short for a ds2 header")
    cols, rows = _HEADER.unpack_from(data)
    if cols < 0 or rows < 0:
        raise DatasetError(f"'{path}': negative matrix size {rows}x{cols}")
    return cols, rows


def load_matrix(path: PathType, precision: Precision) -> np.ndarray:
    """Load a matrix from *path*, returned with shape ``(rows, cols)``."""
    data = _read_bytes(path)
    cols, rows = _read_header(data, path)
    dtype = precision.dtype
    count = rows * cols
    needed = _HEADER.size + count * dtype.itemsize
    if len(data) < needed:
        raise DatasetError(
            f"'{path}': expected {count} values for a {rows}x{cols} matrix, "
            f"file holds only {(len(data) - _HEADER.size) // dtype.itemsize}"
        )
    values = np.frombuffer(data, dtype=dtype, count=count, offset=_HEADER.size)
    return values.reshape(rows, cols).astype(dtype.newbyteorder("="))


def save_matrix(path: PathType, matrix, precision: Precision) -> None:
    """Write *matrix* to *path*; ``None`` writes an empty 0x0 matrix."""
    if matrix is None:
        payload = _HEADER.pack(0, 0)
    else:
        array = np.asarray(matrix, dtype=precision.dtype)
        if array.ndim != 2:
            raise DatasetError(
                f"a matrix must have two dimensions, got {array.ndim}"
            )
        rows, cols = array.shape
        payload = _HEADER.pack(cols, rows) + np.ascontiguousarray(array).tobytes()
    try:
        Path(path).write_bytes(payload)
    except OSError as exc:
        raise DatasetError(f"'{path}': cannot write file") from exc


def save_result(
    path: PathType,
    score: float,
    features: Iterable[int] | None,
    precision: Precision,
) -> None:
    """Write a selection score and its feature indices to *path*.

    With ``features`` set to ``None`` the file is created empty.
    """
    if features is None:
        payload = b""
    else:
        indices = np.asarray(list(features), dtype=_INDEX_DTYPE)
        payload = (
            _HEADER.pack(1, len(indices) + 1)
            + np.array([score], dtype=precision.dtype).tobytes()
            + indices.tobytes()
        )
    try:
        Path(path).write_bytes(payload)
    except OSError as exc:
        raise DatasetError(f"'{path}': cannot write file") from exc


def load_result(path: PathType, precision: Precision) -> tuple[float, list[int]]:
    """Read a result file, returning ``(score, feature_indices)``."""
    data = _read_bytes(path)
    first, count = _read_header(data, path)
    if first != 1 or count < 1:
        raise DatasetError(f"'{path}': not a result file (header {first}, {count})")
    dtype = precision.dtype
    k = count - 1
    needed = _HEADER.size + dtype.itemsize + k * _INDEX_DTYPE.itemsize
    if len(data) < needed:
        raise DatasetError(f"'{path}': result file is truncated")
    score = float(np.frombuffer(data, dtype=dtype, count=1, offset=_HEADER.size)[0])
    indices: Sequence[int] = np.frombuffer(
        data, dtype=_INDEX_DTYPE, count=k, offset=_HEADER.size + dtype.itemsize
    ).tolist()
    return score, list(indices)
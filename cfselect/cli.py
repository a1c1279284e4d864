"""Command-line front end for correlation-based feature selection."""

from __future__ import annotations

import re
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from cfselect.ds2 import DatasetError, Precision, load_matrix, save_result
from cfselect.selection import SelectionResult, select_features

_PROG = "cfselect"
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class UsageError(Exception):
    """Raised when the command line or its parameters are invalid."""


@dataclass
class Options:
    """Parameters collected from the command line."""

    dataset: str | None = None
    labels: str | None = None
    k: int = -1
    silent: bool = False
    display: bool = False
    precision: Precision = Precision.SINGLE
    warnings: list[str] = field(default_factory=list)


def _usage() -> str:
    return "\n".join(
        [
            f"{_PROG} -ds <DS> -labels <LABELS> -k <K> [-p <32|64>] [-s] [-d]",
            "",
            "Parameters:",
            "\tDS: the ds2 file holding the dataset",
            "\tLABELS: the ds2 file holding the labels",
            "\tk: number of features to extract",
            "",
            "Options:",
            "\t-p: precision of the ds2 files in bits, default 32",
            "\t-s: silent mode, no output, default 0 - false",
            "\t-d: print the results, default 0 - false",
        ]
    )


def _atoi(text: str) -> int:
    """Leading integer of *text*, or 0 when there is none."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _parse_precision(text: str) -> Precision:
    for precision in Precision:
        if str(precision.bits) == text:
            return precision
    raise UsageError(f"Invalid precision '{text}', should be 32 or 64!")


def parse_args(argv: Sequence[str]) -> Options:
    """Build :class:`Options` from *argv* (program name excluded)."""
    options = Options()
    args = iter(argv)
    for arg in args:
        if arg == "-s":
            options.silent = True
        elif arg == "-d":
            options.display = True
        elif arg == "-ds":
            options.dataset = next(args, None)
            if options.dataset is None:
                raise UsageError("Missing dataset file name!")
        elif arg == "-labels":
            options.labels = next(args, None)
            if options.labels is None:
                raise UsageError("Missing labels file name!")
        elif arg == "-k":
            value = next(args, None)
            if value is None:
                raise UsageError("Missing k value!")
            options.k = _atoi(value)
        elif arg == "-p":
            value = next(args, None)
            if value is None:
                raise UsageError("Missing precision value!")
            options.precision = _parse_precision(value)
        else:
            options.warnings.append(f"WARNING: unrecognized parameter '{arg}'!")

    if not options.dataset:
        raise UsageError("Missing ds file name!")
    if not options.labels:
        raise UsageError("Missing labels file name!")
    return options


def output_filename(rows: int, cols: int, k: int, precision: Precision) -> str:
    """Name of the result file written for a run."""
    return f"out{precision.bits}_{rows}_{cols}_{k}.ds2"


def run(options: Options) -> SelectionResult:
    """Load the data, select features, save and report the result."""
    if not options.dataset:
        raise UsageError("Missing ds file name!")
    if not options.labels:
        raise UsageError("Missing labels file name!")

    dataset = load_matrix(options.dataset, options.precision)
    rows, cols = dataset.shape
    labels = load_matrix(options.labels, options.precision)
    if labels.shape != (rows, 1):
        raise UsageError(f"Invalid size of labels file, should be {rows}x1!")
    if options.k <= 0:
        raise UsageError("Invalid value of k parameter!")

    if not options.silent:
        print(f"Dataset file name: '{options.dataset}'")
        print(f"Labels file name: '{options.labels}'")
        print(f"Dataset row number: {rows}")
        print(f"Dataset column number: {cols}")
        print(f"Number of features to extract: {options.k}")

    started = time.process_time()
    result = select_features(dataset, labels, options.k, options.precision)
    elapsed = time.process_time() - started

    if options.silent:
        print(f"{elapsed:.3f}")
    else:
        print(f"CFS time = {elapsed:.3f} secs")

    target = Path(output_filename(rows, cols, options.k, options.precision))
    save_result(target, result.score, result.features, options.precision)

    if options.display:
        listed = "".join(f"{index}," for index in result.features)
        print(f"sc: {result.score:f}, out: [{listed}]")

    if not options.silent:
        print("\nDone.")
    return result


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the command; returns the exit status."""
    if argv is None:
        argv = sys.argv[1:]
    if not argv:
        print(_usage())
        return 0
    try:
        options = parse_args(argv)
        for warning in options.warnings:
            print(warning)
        run(options)
    except (UsageError, DatasetError, ValueError) as exc:
        print(exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
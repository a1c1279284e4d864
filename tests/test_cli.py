import re

import numpy as np
import pytest

from cfselect.cli import Options, UsageError, main, output_filename, parse_args, run
from cfselect.ds2 import Precision, load_result, save_matrix

FEATURES = np.array(
    [
        [1, 3, 2],
        [2, 1, 7],
        [3, 4, 1],
        [4, 1, 8],
        [5, 5, 2],
        [7, 9, 8],
    ],
    dtype=np.float64,
)


@pytest.fixture
def files(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    ds = tmp_path / "ds.ds2"
    labels = tmp_path / "labels.ds2"
    save_matrix(ds, FEATURES, Precision.SINGLE)
    save_matrix(labels, FEATURES[:, :1], Precision.SINGLE)
    return tmp_path, str(ds), str(labels)


def test_parse_args_reads_all_parameters():
    options = parse_args(["-ds", "a.ds2", "-labels", "b.ds2", "-k", "3", "-s", "-d"])
    assert options.dataset == "a.ds2"
    assert options.labels == "b.ds2"
    assert options.k == 3
    assert options.silent and options.display
    assert options.precision is Precision.SINGLE
    assert options.warnings == []


def test_parse_args_precision_64():
    options = parse_args(["-ds", "a", "-labels", "b", "-p", "64"])
    assert options.precision is Precision.DOUBLE


def test_parse_args_bad_precision():
    with pytest.raises(UsageError):
        parse_args(["-ds", "a", "-labels", "b", "-p", "16"])


def test_parse_args_collects_warnings():
    options = parse_args(["-ds", "a", "-x", "-labels", "b"])
    assert options.warnings == ["WARNING: unrecognized parameter '-x'!"]


@pytest.mark.parametrize(
    "argv, message",
    [
        (["-ds"], "Missing dataset file name!"),
        (["-ds", "a", "-labels"], "Missing labels file name!"),
        (["-ds", "a", "-labels", "b", "-k"], "Missing k value!"),
        (["-labels", "b"], "Missing ds file name!"),
        (["-ds", "a"], "Missing labels file name!"),
    ],
)
def test_parse_args_errors(argv, message):
    with pytest.raises(UsageError, match=message):
        parse_args(argv)


@pytest.mark.parametrize("text, expected", [("abc", 0), ("3x", 3), ("-2", -2)])
def test_k_parsed_like_atoi(text, expected):
    assert parse_args(["-ds", "a", "-labels", "b", "-k", text]).k == expected


def test_output_filename():
    assert output_filename(10, 5, 2, Precision.SINGLE) == "out32_10_5_2.ds2"
    assert output_filename(10, 5, 2, Precision.DOUBLE) == "out64_10_5_2.ds2"


def test_run_writes_result(files, capsys):
    tmp_path, ds, labels = files
    result = run(Options(dataset=ds, labels=labels, k=2))
    assert result.features[0] == 0
    assert len(result.features) == 2
    score, features = load_result(tmp_path / "out32_6_3_2.ds2", Precision.SINGLE)
    assert features == result.features
    assert score == pytest.approx(result.score, rel=1e-6)
    out = capsys.readouterr().out
    assert "Dataset row number: 6" in out
    assert "Dataset column number: 3" in out
    assert out.endswith("\nDone.\n")


def test_run_rejects_wrong_label_size(files):
    _, ds, _ = files
    with pytest.raises(UsageError, match="should be 6x1"):
        run(Options(dataset=ds, labels=ds, k=1))


def test_run_rejects_nonpositive_k(files):
    _, ds, labels = files
    with pytest.raises(UsageError, match="Invalid value of k parameter!"):
        run(Options(dataset=ds, labels=labels, k=0))


def test_main_without_arguments_prints_usage(capsys):
    assert main([]) == 0
    assert "-ds <DS> -labels <LABELS> -k <K>" in capsys.readouterr().out


def test_main_silent_prints_only_time(files, capsys):
    _, ds, labels = files
    assert main(["-ds", ds, "-labels", labels, "-k", "1", "-s"]) == 0
    out = capsys.readouterr().out
    assert re.fullmatch(r"\d+\.\d{3}\n", out)


def test_main_display(files, capsys):
    tmp_path, ds, labels = files
    assert main(["-ds", ds, "-labels", labels, "-k", "1", "-s", "-d"]) == 0
    out = capsys.readouterr().out
    assert out.splitlines()[-1] == "sc: 1.000000, out: [0,]"
    assert (tmp_path / "out32_6_3_1.ds2").exists()


def test_main_missing_file(tmp_path, capsys):
    missing = str(tmp_path / "missing.ds2")
    assert main(["-ds", missing, "-labels", missing, "-k", "1"]) == 1
    assert "bad data file name!" in capsys.readouterr().out
import pytest

from tsconvert.cli import CliRunner, get_suffix, main

TS_DOC = """<?xml version="1.0" encoding="utf-8"?>
<!DOCTYPE TS>
<TS version="2.1" language="it_IT">
<context>
    <name>MenuBar</name>
    <message>
        <location filename="../src/app/qml/MenuBar.qml" line="28"/>
        <source>map</source>
        <translation type="unfinished"></translation>
    </message>
</context>
</TS>
"""


@pytest.fixture
def ts_file(tmp_path):
    path = tmp_path / "input.ts"
    path.write_text(TS_DOC, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "path, suffix",
    [("dir/file.ts", ".ts"), ("a.b/c.xlsx", ".xlsx"), ("noext", "noext")],
)
def test_get_suffix(path, suffix):
    assert get_suffix(path) == suffix


def test_run_needs_two_args(ts_file):
    assert CliRunner([str(ts_file)]).run() == 1


def test_run_converts(tmp_path, ts_file):
    out = tmp_path / "out.csv"
    assert CliRunner([str(ts_file), str(out)]).run() == 0
    assert "map" in out.read_text(encoding="utf-8")


def test_run_relative_output(tmp_path, ts_file, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert CliRunner([str(ts_file), "./rel.xlsx"]).run() == 0
    assert (tmp_path / "rel.xlsx").exists()


def test_run_unsupported_pair(tmp_path, ts_file):
    assert CliRunner([str(ts_file), str(tmp_path / "out.txt")]).run() == 1


def test_run_missing_input(tmp_path):
    assert CliRunner([str(tmp_path / "missing.ts"), str(tmp_path / "o.csv")]).run() == 1


def test_main_without_args():
    assert main([]) == 1


def test_main_converts(tmp_path, ts_file):
    out = tmp_path / "out.csv"
    assert main([str(ts_file), str(out), "--no-location"]) == 0
    assert out.exists()


def test_main_version(capsys):
    with pytest.raises(SystemExit) as info:
        main(["--version"])
    assert info.value.code == 0
    assert "4.5.0" in capsys.readouterr().out
import pytest

from tsconvert.converter import ConversionType
from tsconvert.session import ConversionModel, ConverterProxy

TS_DOC = """<?xml version="1.0" encoding="utf-8"?>
<!DOCTYPE TS>
<TS version="2.1" language="it_IT">
<context>
    <name>MenuBar</name>
    <message>
        <location filename="../src/app/qml/MenuBar.qml" line="17"/>
        <source>text</source>
        <translation type="unfinished"></translation>
    </message>
</context>
</TS>
"""


@pytest.fixture
def ts_file(tmp_path):
    path = tmp_path / "first.ts"
    path.write_text(TS_DOC, encoding="utf-8")
    return path


def test_single_conversion_succeeds(tmp_path, ts_file):
    calls = []
    proxy = ConverterProxy(on_completed=lambda: calls.append(1))
    out = tmp_path / "out.csv"
    result = proxy.convert(ConversionType.TS2CSV, [str(ts_file)], str(out), ";", '"', "2.1")
    assert result.failed is False
    assert proxy.message == "Conversion successfull!"
    assert out.exists()
    assert "MenuBar" in out.read_text(encoding="utf-8")
    assert calls == [1]


def test_file_urls_are_accepted(tmp_path, ts_file):
    proxy = ConverterProxy()
    out = tmp_path / "out.xlsx"
    proxy.convert(int(ConversionType.TS2XLSX), [ts_file.as_uri()], out.as_uri(), ";", '"', "2.1")
    assert proxy.failed is False
    assert out.exists()


def test_multiple_inputs_go_to_directory(tmp_path, ts_file):
    second = tmp_path / "second.ts"
    second.write_text(TS_DOC, encoding="utf-8")
    out_dir = tmp_path / "out"
    out_dir.mkdir()
    proxy = ConverterProxy()
    proxy.convert(
        ConversionType.TS2CSV, [str(ts_file), str(second)], str(out_dir), ";", '"', "2.1"
    )
    assert proxy.failed is False
    assert sorted(p.name for p in out_dir.iterdir()) == ["first.csv", "second.csv"]


def test_missing_source_reports_failure(tmp_path):
    proxy = ConverterProxy()
    proxy.convert(
        ConversionType.TS2CSV, [str(tmp_path / "nope.ts")], str(tmp_path / "o.csv"), ";", '"', "2.1"
    )
    assert proxy.failed is True
    assert proxy.message == "Failed to parse source!"
    assert proxy.detailed_message == "Failed to open source!"


def test_unsupported_type_raises(tmp_path, ts_file):
    with pytest.raises(ValueError):
        ConverterProxy().convert(
            ConversionType.DUMMY, [str(ts_file)], str(tmp_path / "o"), ";", '"', "2.1"
        )


def test_model_rows():
    model = ConversionModel()
    assert model.row_count() == 5
    assert model.data(0) == "TS => CSV"
    assert model.data(3) == "XLSX => TS"
    assert model.data(4) == "Error"
    assert model.data(5) is None


def test_add_input_messages():
    changes = []
    model = ConversionModel(on_source_msg_changed=lambda: changes.append(1))
    model.add_input("/a/one.ts")
    assert model.source_msg == "/a/one.ts"
    model.add_input("/a/two.ts")
    assert model.source_msg == "2 files selected"
    model.add_input("/a/three.csv")
    assert model.source_msg == "source files should have same extension"
    assert len(changes) == 3
    assert model.input == ["/a/one.ts", "/a/two.ts", "/a/three.csv"]


def test_clear_input():
    model = ConversionModel()
    model.add_input("/a/one.ts")
    model.clear_input()
    assert model.input == []


@pytest.mark.parametrize(
    "index, suffix",
    [
        (ConversionType.TS2CSV, ".csv"),
        (ConversionType.TS2XLSX, ".xlsx"),
        (ConversionType.CSV2TS, ".ts"),
        (ConversionType.XLSX2TS, ".ts"),
        (ConversionType.DUMMY, ""),
    ],
)
def test_set_output_adds_extension(index, suffix):
    model = ConversionModel()
    model.set_index(index)
    value = "file:///no/such/dir/result"
    model.set_output(value)
    assert model.output == value + suffix


def test_set_output_keeps_existing_extension():
    model = ConversionModel()
    model.set_index(ConversionType.TS2CSV)
    model.set_output("file:///no/such/dir/result.txt")
    assert model.output == "file:///no/such/dir/result.txt"


def test_set_output_directory(tmp_path):
    model = ConversionModel()
    model.set_index(ConversionType.TS2CSV)
    model.set_output("file://" + tmp_path.as_posix())
    assert model.output == tmp_path.as_posix()
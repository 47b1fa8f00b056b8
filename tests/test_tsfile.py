from tsconvert.model import InOutParameter, Result, RootAttr, TranslationContext, TranslationMessage
from tsconvert.tsfile import TsBuilder, TsParser

SAMPLE = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE TS>
<TS version="2.1" sourcelanguage="en" language="it_IT">
    <context>
        <name>MenuBar</name>
        <message id="menu.text">
            <location filename="../src/app/qml/MenuBar.qml" line="+20"/>
            <location filename="../src/app/qml/MenuBar.qml" line="-3"/>
            <source>text</source>
            <comment>a comment</comment>
            <extracomment>extra</extracomment>
            <translatorcomment>note</translatorcomment>
            <translation type="unfinished"></translation>
        </message>
        <message>
            <location filename="../src/app/qml/MenuBar.qml" line="28"/>
            <source>map</source>
            <translation>mappa</translation>
        </message>
    </context>
</TS>
"""


def _parse(path):
    return TsParser(InOutParameter(input_file=str(path))).parse()


def test_parse_reads_root_and_messages(tmp_path):
    src = tmp_path / "in.ts"
    src.write_text(SAMPLE, encoding="utf-8")
    result = _parse(src)
    assert not result.failed()
    assert result.root == RootAttr(ts_version="2.1", language="it_IT", sourcelanguage="en")
    [ctx] = result.translations
    assert ctx.name == "MenuBar"
    first, second = ctx.messages
    assert first.identifier == "menu.text"
    assert first.comment == "a comment"
    assert first.translationtype == "unfinished"
    assert first.locations == [
        ("../src/app/qml/MenuBar.qml", "+20"),
        ("../src/app/qml/MenuBar.qml", "-3"),
    ]
    assert second.translation == "mappa"
    assert second.translationtype == ""


def test_build_reproduces_sample(tmp_path):
    src = tmp_path / "in.ts"
    src.write_text(SAMPLE, encoding="utf-8")
    out = tmp_path / "out.ts"
    TsBuilder(InOutParameter(output_file=str(out))).build(_parse(src))
    assert out.read_text(encoding="utf-8") == SAMPLE


def test_missing_file_fails(tmp_path):
    result = _parse(tmp_path / "missing.ts")
    assert result.error == "Failed to open source!"


def test_invalid_xml_fails(tmp_path):
    src = tmp_path / "bad.ts"
    src.write_text("<TS><context>", encoding="utf-8")
    assert _parse(src).error == "Failed to open source!"


def test_suffix_is_appended(tmp_path):
    builder = TsBuilder(InOutParameter(output_file=str(tmp_path / "out")))
    builder.build(Result(root=RootAttr(ts_version="2.1")))
    assert (tmp_path / "out.ts").exists()


def test_special_characters_round_trip(tmp_path):
    msg = TranslationMessage(source='a < b & "c"\nnext', translation="x > y", locations=[("f&g.cpp", "1")])
    result = Result(translations=[TranslationContext("ctx", [msg])], root=RootAttr(ts_version="2.1"))
    out = tmp_path / "out.ts"
    TsBuilder(InOutParameter(output_file=str(out))).build(result)
    parsed = _parse(out)
    assert parsed.translations == result.translations
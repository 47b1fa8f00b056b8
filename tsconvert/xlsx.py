"""Reading and writing translations as XLSX workbooks."""

from __future__ import annotations

import posixpath
import re
import zipfile
import xml.etree.ElementTree as ET
from itertools import groupby
from typing import NamedTuple, Union
from xml.sax.saxutils import escape

from .base import Builder, Parser
from .csvfile import decode_location
from .model import (
    InOutParameter,
    Result,
    RootAttr,
    TitleHeader,
    TranslationContext,
    TranslationMessage,
)

CellValue = Union[str, int, float, bool]

_MAIN_NS = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"
_REL_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
_PKG_REL_NS = "http://schemas.openxmlformats.org/package/2006/relationships"
_M = f"{{{_MAIN_NS}}}"
_CELL_REF = re.compile(r"^([A-Za-z]+)(\d+)$")
_XML_HEAD = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'

_CONTENT_TYPES = (
    _XML_HEAD
    + '<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">'
    '<Default Extension="rels" '
    'ContentType="application/vnd.openxmlformats-package.relationships+xml"/>'
    '<Default Extension="xml" ContentType="application/xml"/>'
    '<Override PartName="/xl/workbook.xml" ContentType="application/'
    'vnd.openxmlformats-officedocument.spreadsheetml.sheet.main+xml"/>'
    '<Override PartName="/xl/worksheets/sheet1.xml" ContentType="application/'
    'vnd.openxmlformats-officedocument.spreadsheetml.worksheet+xml"/>'
    '<Override PartName="/xl/styles.xml" ContentType="application/'
    'vnd.openxmlformats-officedocument.spreadsheetml.styles+xml"/>'
    "</Types>"
)

_ROOT_RELS = (
    _XML_HEAD
    + f'<Relationships xmlns="{_PKG_REL_NS}">'
    f'<Relationship Id="rId1" Type="{_REL_NS}/officeDocument" Target="xl/workbook.xml"/>'
    "</Relationships>"
)

_WORKBOOK = (
    _XML_HEAD
    + f'<workbook xmlns="{_MAIN_NS}" xmlns:r="{_REL_NS}">'
    '<sheets><sheet name="Sheet1" sheetId="1" r:id="rId1"/></sheets>'
    "</workbook>"
)

_WORKBOOK_RELS = (
    _XML_HEAD
    + f'<Relationships xmlns="{_PKG_REL_NS}">'
    f'<Relationship Id="rId1" Type="{_REL_NS}/worksheet" Target="worksheets/sheet1.xml"/>'
    f'<Relationship Id="rId2" Type="{_REL_NS}/styles" Target="styles.xml"/>'
    "</Relationships>"
)

_STYLES = (
    _XML_HEAD
    + f'<styleSheet xmlns="{_MAIN_NS}">'
    '<fonts count="1"><font><sz val="11"/><name val="Calibri"/></font></fonts>'
    '<fills count="2"><fill><patternFill patternType="none"/></fill>'
    '<fill><patternFill patternType="gray125"/></fill></fills>'
    '<borders count="1"><border><left/><right/><top/><bottom/><diagonal/></border></borders>'
    '<cellStyleXfs count="1"><xf numFmtId="0" fontId="0" fillId="0" borderId="0"/></cellStyleXfs>'
    '<cellXfs count="1"><xf numFmtId="0" fontId="0" fillId="0" borderId="0" xfId="0"/></cellXfs>'
    "</styleSheet>"
)


class _CellRange(NamedTuple):
    first_row: int
    first_column: int
    last_row: int
    last_column: int

    @property
    def row_count(self) -> int:
        return self.last_row - self.first_row + 1 if self.last_row else 0

    @property
    def column_count(self) -> int:
        return self.last_column - self.first_column + 1 if self.last_column else 0


def _column_letters(column: int) -> str:
    letters = ""
    while column:
        column, rem = divmod(column - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return letters


def _parse_ref(ref: str) -> tuple[int, int]:
    match = _CELL_REF.match(ref)
    if match is None:
        raise ValueError(f"bad cell reference: {ref!r}")
    column = 0
    for char in match.group(1).upper():
        column = column * 26 + ord(char) - ord("A") + 1
    return int(match.group(2)), column


def _cell_xml(ref: str, value: CellValue) -> str:
    if isinstance(value, bool):
        return f'<c r="{ref}" t="b"><v>{int(value)}</v></c>'
    if isinstance(value, (int, float)):
        return f'<c r="{ref}"><v>{value!r}</v></c>'
    text = "" if value is None else str(value)
    if not text:
        return f'<c r="{ref}"/>'
    body = escape(text, {"\r": "&#13;"})
    return f'<c r="{ref}" t="inlineStr"><is><t xml:space="preserve">{body}</t></is></c>'


def _rich_text(element: ET.Element) -> str:
    parts = []
    for child in element:
        if child.tag == f"{_M}t":
            parts.append(child.text or "")
        elif child.tag == f"{_M}r":
            run = child.find(f"{_M}t")
            if run is not None:
                parts.append(run.text or "")
    return "".join(parts)


def _number(text: str) -> int | float:
    try:
        return int(text)
    except ValueError:
        return float(text)


def _cell_value(cell: ET.Element, shared: list[str]) -> CellValue:
    kind = cell.get("t", "n")
    if kind == "inlineStr":
        inline = cell.find(f"{_M}is")
        return _rich_text(inline) if inline is not None else ""
    node = cell.find(f"{_M}v")
    if node is None or node.text is None:
        return ""
    text = node.text
    if kind == "s":
        return shared[int(text)]
    if kind == "b":
        return text.strip() == "1"
    if kind in ("str", "e", "d"):
        return text
    return _number(text)


def _resolve(target: str) -> str:
    if target.startswith("/"):
        return target[1:]
    return posixpath.normpath(posixpath.join("xl", target))


def _relationships(archive: zipfile.ZipFile, path: str) -> dict[str, tuple[str, str]]:
    if path not in archive.namelist():
        return {}
    root = ET.fromstring(archive.read(path))
    return {
        rel.get("Id", ""): (rel.get("Type", ""), rel.get("Target", ""))
        for rel in root.iter(f"{{{_PKG_REL_NS}}}Relationship")
    }


def _read_cells(archive: zipfile.ZipFile) -> dict[tuple[int, int], CellValue]:
    workbook = ET.fromstring(archive.read("xl/workbook.xml"))
    rels = _relationships(archive, "xl/_rels/workbook.xml.rels")
    sheet = workbook.find(f"{_M}sheets/{_M}sheet")
    if sheet is None:
        raise ValueError("workbook has no sheets")
    _, target = rels[sheet.get(f"{{{_REL_NS}}}id", "")]
    sheet_path = _resolve(target)

    shared: list[str] = []
    strings_path = next(
        (_resolve(t) for kind, t in rels.values() if kind.endswith("/sharedStrings")),
        None,
    )
    if strings_path and strings_path in archive.namelist():
        strings = ET.fromstring(archive.read(strings_path))
        shared = [_rich_text(si) for si in strings.findall(f"{_M}si")]

    root = ET.fromstring(archive.read(sheet_path))
    cells: dict[tuple[int, int], CellValue] = {}
    row_number = 0
    for row in root.iter(f"{_M}row"):
        row_number = int(row.get("r", row_number + 1))
        column = 0
        for cell in row.findall(f"{_M}c"):
            ref = cell.get("r")
            if ref:
                row_of_cell, column = _parse_ref(ref)
            else:
                row_of_cell, column = row_number, column + 1
            cells[(row_of_cell, column)] = _cell_value(cell, shared)
    return cells


def _as_text(value: CellValue | None) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class Workbook:
    """A single-sheet spreadsheet addressed by 1-based row and column."""

    def __init__(self) -> None:
        self._cells: dict[tuple[int, int], CellValue] = {}

    def write(self, row: int, column: int, value: CellValue) -> None:
        """Store a value in a cell."""
        if row < 1 or column < 1:
            raise ValueError(f"cell ({row}, {column}) is out of range")
        self._cells[(row, column)] = value

    def read(self, row: int, column: int) -> CellValue | None:
        """Return the value of a cell, or None when the cell is absent."""
        return self._cells.get((row, column))

    def dimension(self) -> _CellRange:
        """Return the range spanned by all stored cells."""
        if not self._cells:
            return _CellRange(0, 0, 0, 0)
        rows = [row for row, _ in self._cells]
        columns = [column for _, column in self._cells]
        return _CellRange(min(rows), min(columns), max(rows), max(columns))

    def save(self, path: str) -> None:
        """Write the workbook as an .xlsx file."""
        with zipfile.ZipFile(path, "w", zipfile.ZIP_DEFLATED) as archive:
            archive.writestr("[Content_Types].xml", _CONTENT_TYPES)
            archive.writestr("_rels/.rels", _ROOT_RELS)
            archive.writestr("xl/workbook.xml", _WORKBOOK)
            archive.writestr("xl/_rels/workbook.xml.rels", _WORKBOOK_RELS)
            archive.writestr("xl/styles.xml", _STYLES)
            archive.writestr("xl/worksheets/sheet1.xml", self._sheet_xml())

    @classmethod
    def load(cls, path: str) -> Workbook:
        """Read the first sheet of an .xlsx file; ValueError if malformed."""
        try:
            with zipfile.ZipFile(path) as archive:
                cells = _read_cells(archive)
        except (zipfile.BadZipFile, KeyError, IndexError, ET.ParseError, ValueError) as exc:
            raise ValueError(f"not a valid XLSX workbook: {path}") from exc
        book = cls()
        book._cells = cells
        return book

    def _sheet_xml(self) -> str:
        parts = [_XML_HEAD, f'<worksheet xmlns="{_MAIN_NS}" xmlns:r="{_REL_NS}">']
        dim = self.dimension()
        if dim.row_count:
            first = f"{_column_letters(dim.first_column)}{dim.first_row}"
            last = f"{_column_letters(dim.last_column)}{dim.last_row}"
            parts.append(f'<dimension ref="{first}:{last}"/>')
        parts.append("<sheetData>")
        ordered = sorted(self._cells.items(), key=lambda item: item[0])
        for row, cells in groupby(ordered, key=lambda item: item[0][0]):
            parts.append(f'<row r="{row}">')
            for (_, column), value in cells:
                parts.append(_cell_xml(f"{_column_letters(column)}{row}", value))
            parts.append("</row>")
        parts.append("</sheetData></worksheet>")
        return "".join(parts)


_HEADERS = [
    TitleHeader.Context,
    TitleHeader.ID,
    TitleHeader.Source,
    TitleHeader.Translation,
    TitleHeader.TranslationType,
    TitleHeader.Comment,
    TitleHeader.ExtraComment,
    TitleHeader.TranslatorComment,
]
_FIRST_LOCATION_COLUMN = 9
_FIRST_MESSAGE_ROW = 4


class XlsxParser(Parser):
    """Parses an XLSX export back into translations."""

    def parse(self) -> Result:
        try:
            book = Workbook.load(self.params.input_file)
        except (OSError, ValueError):
            book = Workbook()

        def text(row: int, column: int) -> str:
            return _as_text(book.read(row, column))

        root = RootAttr(
            ts_version=text(2, 1),
            sourcelanguage=text(2, 2),
            language=text(2, 3),
        )
        header_row = 3
        expected = _HEADERS + [TitleHeader.Location]
        if any(
            book.read(header_row, column) != title
            for column, title in enumerate(expected, start=1)
        ):
            return Result(error="Invalid XLSX file, check the headers!")

        dim = book.dimension()
        contexts: dict[str, TranslationContext] = {}
        for row in range(_FIRST_MESSAGE_ROW, dim.last_row + 1):
            locations = []
            for column in range(_FIRST_LOCATION_COLUMN, dim.last_column + 1):
                cell = text(row, column)
                if not cell:
                    break
                locations.append(decode_location(cell))
            msg = TranslationMessage(
                identifier=text(row, 2),
                source=text(row, 3),
                translation=text(row, 4),
                translationtype=text(row, 5),
                comment=text(row, 6),
                extracomment=text(row, 7),
                translatorcomment=text(row, 8),
                locations=locations,
            )
            name = text(row, 1)
            contexts.setdefault(name, TranslationContext(name=name)).messages.append(msg)

        params = InOutParameter(ts_version=self.params.ts_version)
        return Result(translations=list(contexts.values()), params=params, root=root)


class XlsxBuilder(Builder):
    """Writes translations as an XLSX workbook."""

    def __init__(self, params: InOutParameter | None = None) -> None:
        super().__init__(params)
        if not self.params.output_file.endswith("xlsx"):
            self.params.output_file += ".xlsx"

    def build(self, result: Result) -> None:
        book = Workbook()
        row = 1
        if not self.params.no_version:
            row = self._add_ts_support(book, result)

        headers = list(_HEADERS)
        if not self.params.no_location:
            headers.append(TitleHeader.Location)
        for column, title in enumerate(headers, start=1):
            book.write(row, column, title)

        if row == 3:
            row += 1
        for context in result.translations:
            for msg in context.messages:
                values = [
                    context.name,
                    msg.identifier,
                    msg.source,
                    msg.translation,
                    msg.translationtype,
                    msg.comment,
                    msg.extracomment,
                    msg.translatorcomment,
                ]
                if not self.params.no_location:
                    values.extend(f"{name} - {line}" for name, line in msg.locations)
                for column, value in enumerate(values, start=1):
                    book.write(row, column, value)
                row += 1

        book.save(self.params.output_file)

    @staticmethod
    def _add_ts_support(book: Workbook, result: Result) -> int:
        book.write(1, 1, TitleHeader.TsVersion)
        book.write(2, 1, result.root.ts_version)
        book.write(1, 2, TitleHeader.SourceLanguage)
        book.write(2, 2, result.root.sourcelanguage)
        book.write(1, 3, TitleHeader.Language)
        book.write(2, 3, result.root.language)
        return 3
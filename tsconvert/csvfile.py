"""Reading and writing translations as CSV."""

from __future__ import annotations

import csv
import os
import re

from .base import Builder, Parser
from .model import (
    InOutParameter,
    Result,
    RootAttr,
    TitleHeader,
    TranslationContext,
    TranslationMessage,
)

_LOCATION_RE = re.compile(r"\.\./.+-.[0-9]+")
_ROW_COLUMNS = 9
_LOCATIONS_INDEX = 8


def decode_location(text: str) -> tuple[str, str]:
    """Split a "file - line" cell into its two parts."""
    parts = text.split(" - ")
    return parts[0], parts[-1]


def is_location(value: str) -> bool:
    """Return True when a cell looks like a location."""
    return "Location" in value or _LOCATION_RE.search(value) is not None


class CsvParser(Parser):
    """Parses a CSV export back into translations."""

    def parse(self) -> Result:
        prop = self.params.csv_property
        options = {"delimiter": prop.field_separator}
        if prop.string_separator:
            options["quotechar"] = prop.string_separator
        else:
            options["quoting"] = csv.QUOTE_NONE
        try:
            with open(os.path.abspath(self.params.input_file), encoding="utf-8", newline="") as f:
                rows = [row for row in csv.reader(f, **options) if row]
        except OSError:
            rows = []

        if not rows:
            return Result(error="Source file empty!")

        for row in rows:
            if row and row[0] == "":
                row.pop(0)
            if row and row[-1] == "":
                row.pop()

        root = RootAttr()
        rows.pop(0)
        if rows:
            values = rows.pop(0)
            root.ts_version, root.sourcelanguage, root.language = (values + ["", "", ""])[:3]
        if rows:
            rows.pop(0)

        contexts: dict[str, TranslationContext] = {}
        for raw in rows:
            row = [cell.replace('"', "") for cell in raw]
            row += [""] * (_ROW_COLUMNS - len(row))
            msg = TranslationMessage(
                identifier=row[1],
                source=row[2],
                translation=row[3],
                translationtype=row[4],
                comment=row[5],
                extracomment=row[6],
                translatorcomment=row[7],
                locations=[decode_location(cell) for cell in row[_LOCATIONS_INDEX:]],
            )
            contexts.setdefault(row[0], TranslationContext(name=row[0])).messages.append(msg)

        params = InOutParameter(ts_version=self.params.ts_version)
        return Result(translations=list(contexts.values()), params=params, root=root)


class CsvBuilder(Builder):
    """Writes translations as CSV."""

    def __init__(self, params: InOutParameter | None = None) -> None:
        super().__init__(params)
        if not self.params.output_file.endswith("csv"):
            self.params.output_file += ".csv"

    def build(self, result: Result) -> None:
        rows = [
            [TitleHeader.TsVersion, TitleHeader.SourceLanguage, TitleHeader.Language],
            [result.root.ts_version, result.root.sourcelanguage, result.root.language],
            [
                TitleHeader.Context,
                TitleHeader.ID,
                TitleHeader.Source,
                TitleHeader.Translation,
                TitleHeader.TranslationType,
                TitleHeader.Comment,
                TitleHeader.ExtraComment,
                TitleHeader.TranslatorComment,
                TitleHeader.Location,
            ],
        ]
        for context in result.translations:
            for msg in context.messages:
                rows.append(
                    [
                        context.name,
                        msg.identifier,
                        msg.source,
                        msg.translation,
                        msg.translationtype,
                        msg.comment,
                        msg.extracomment,
                        msg.translatorcomment,
                    ]
                    + [f"{name} - {line}" for name, line in msg.locations]
                )

        path = os.path.abspath(self.params.output_file)
        with open(path, "w", encoding="utf-8", newline="") as out:
            out.writelines(self._compose(row) for row in rows)

    def _compose(self, values: list[str]) -> str:
        sep = self.params.csv_property.field_separator
        quote = self.params.csv_property.string_separator
        cells = []
        for value in values:
            if quote:
                value = value.replace(quote, quote + quote)
            delim = quote
            if not delim and (sep in value or "\r" in value or "\n" in value):
                delim = '"'
            cells.append(f"{delim}{value}{delim}")
        return sep.join(cells) + "\n"
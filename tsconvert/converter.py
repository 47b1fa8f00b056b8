"""Conversion pipelines between .ts, CSV and XLSX files."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from .base import Builder, Parser
from .csvfile import CsvBuilder, CsvParser
from .model import CsvProperty, InOutParameter
from .tsfile import TsBuilder, TsParser
from .xlsx import XlsxBuilder, XlsxParser


class ConversionType(IntEnum):
    """Supported conversions; DUMMY stands for an unsupported pair."""

    TS2CSV = 0
    CSV2TS = 1
    TS2XLSX = 2
    XLSX2TS = 3
    DUMMY = 4


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of a conversion."""

    failed: bool
    message: str
    detailed_message: str = ""


class Converter:
    """Runs a parser and feeds its result to a builder."""

    def __init__(self, parser: Parser, builder: Builder) -> None:
        self.parser = parser
        self.builder = builder

    def process(self) -> ConversionResult:
        """Convert the input file to the output file."""
        result = self.parser.parse()
        if result.error:
            return ConversionResult(True, "Failed to parse source!", result.error)
        try:
            self.builder.build(result)
        except OSError:
            return ConversionResult(True, "Conversion failed!")
        return ConversionResult(False, "Conversion successfull!")


_SUFFIXES = {
    ConversionType.TS2CSV: ".csv",
    ConversionType.TS2XLSX: ".xlsx",
    ConversionType.CSV2TS: ".ts",
    ConversionType.XLSX2TS: ".ts",
}

_BY_SUFFIXES = {
    (".ts", ".csv"): ConversionType.TS2CSV,
    (".ts", ".xlsx"): ConversionType.TS2XLSX,
    (".csv", ".ts"): ConversionType.CSV2TS,
    (".xlsx", ".ts"): ConversionType.XLSX2TS,
}

_PIPELINES = {
    ConversionType.TS2CSV: (TsParser, CsvBuilder),
    ConversionType.CSV2TS: (CsvParser, TsBuilder),
    ConversionType.TS2XLSX: (TsParser, XlsxBuilder),
    ConversionType.XLSX2TS: (XlsxParser, TsBuilder),
}


def suffix_for(conversion_type: ConversionType) -> str:
    """Return the suffix of the files a conversion produces."""
    return _SUFFIXES.get(conversion_type, "")


def conversion_type_from_suffixes(suffix_input: str, suffix_output: str) -> ConversionType:
    """Pick the conversion for an input and output suffix such as ".ts"."""
    return _BY_SUFFIXES.get((suffix_input, suffix_output), ConversionType.DUMMY)


def make_converter(
    conversion_type: ConversionType,
    input_file: str,
    output_file: str,
    field_separator: str,
    string_separator: str,
    ts_version: str,
    no_version: bool = False,
    no_location: bool = False,
) -> Converter:
    """Build the converter for a conversion type; ValueError if unsupported."""
    try:
        parser_cls, builder_cls = _PIPELINES[conversion_type]
    except KeyError:
        raise ValueError(f"unsupported conversion type: {conversion_type!r}") from None

    def params() -> InOutParameter:
        return InOutParameter(
            input_file=input_file,
            output_file=output_file,
            ts_version=ts_version,
            csv_property=CsvProperty(field_separator, string_separator),
            no_version=no_version,
            no_location=no_location,
        )

    return Converter(parser_cls(params()), builder_cls(params()))
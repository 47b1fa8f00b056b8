"""Data types shared by the parsers, builders and converters."""

from __future__ import annotations

from dataclasses import dataclass, field

VERSION = "4.5.0"
DESCRIPTION = (
    "Tool used to convert `.ts` file of Qt translation in other format "
    "more editable using an office suite."
)


class TitleHeader:
    """Column titles used in spreadsheet-like exports."""

    Context = "Context"
    ID = "ID"
    Source = "Source"
    Translation = "Translation"
    Location = "Location"
    TsVersion = "TsVersion"
    Language = "language"
    SourceLanguage = "sourcelanguage"
    Comment = "comment"
    ExtraComment = "extracomment"
    TranslatorComment = "translatorcomment"
    TranslationType = "TranslationType"


@dataclass
class CsvProperty:
    """Field separator and text delimiter of a CSV file."""

    field_separator: str = ";"
    string_separator: str = '"'


@dataclass
class InOutParameter:
    """Files and options of one conversion."""

    input_file: str = ""
    output_file: str = ""
    ts_version: str = ""
    csv_property: CsvProperty = field(default_factory=CsvProperty)
    no_version: bool = False
    no_location: bool = False


@dataclass
class RootAttr:
    """Attributes of the TS root element."""

    ts_version: str = ""
    language: str = ""
    sourcelanguage: str = ""


@dataclass
class TranslationMessage:
    """One message of a translation context."""

    identifier: str = ""
    source: str = ""
    translation: str = ""
    translationtype: str = ""
    comment: str = ""
    extracomment: str = ""
    translatorcomment: str = ""
    locations: list[tuple[str, str]] = field(default_factory=list)


@dataclass
class TranslationContext:
    """A named group of messages."""

    name: str = ""
    messages: list[TranslationMessage] = field(default_factory=list)


@dataclass
class Result:
    """Outcome of parsing a source file."""

    error: str = ""
    translations: list[TranslationContext] = field(default_factory=list)
    params: InOutParameter = field(default_factory=InOutParameter)
    root: RootAttr = field(default_factory=RootAttr)

    def failed(self) -> bool:
        """Return True when parsing reported an error."""
        return bool(self.error)
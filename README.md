# tsconvert

Convert Qt Linguist `.ts` translation files into formats that are easy to
edit in an office suite, and convert them back again. It needs nothing
beyond the Python standard library; XLSX workbooks are read and written
directly.

Supported conversions:

| From    | To      |
|---------|---------|
| `.ts`   | `.csv`  |
| `.csv`  | `.ts`   |
| `.ts`   | `.xlsx` |
| `.xlsx` | `.ts`   |

The conversion is chosen from the file extensions of the input and output.
Any other pair of extensions is rejected.

## Installation

```
pip install .
```

## Command line

```
tsconvert INPUT OUTPUT [--no-version] [--no-location]
tsconvert --version
```

Examples:

```
tsconvert app_it.ts app_it.csv
tsconvert app_it.csv app_it.ts
tsconvert app_it.ts app_it.xlsx --no-location
```

Options:

- `--no-version`: in XLSX output, leave out the rows holding the TS version
  and the source and target language.
- `--no-location`: in XLSX output, leave out the `Location` column and the
  source locations.

Both options affect XLSX output only; CSV output always carries the version
rows and the locations. An XLSX file written with either option cannot be
converted back to `.ts`, because reading expects the full header row on the
third row.

CSV files use `;` as the field separator and `"` as the quote character;
every cell is quoted. An output path starting with `./` is made absolute
against the current directory. The outcome is logged, and the exit status is
`0` when the conversion succeeded and `1` when it failed, when fewer than two
paths were given, or when the extensions name no supported conversion.

## Spreadsheet layout

The first row holds the titles `TsVersion`, `sourcelanguage` and `language`,
the second row their values. Below them is a header row:

```
Context; ID; Source; Translation; TranslationType; comment; extracomment; translatorcomment; Location
```

Each following row is one message. Every location is written as
`filename - line` in its own column, starting at the `Location` column.
When a spreadsheet is read back, rows with the same context name are
gathered into one context, in order of first appearance.

## Library use

```python
from tsconvert.converter import ConversionType, make_converter

converter = make_converter(
    ConversionType.TS2CSV, "app_it.ts", "app_it.csv", ";", '"', "2.1", False, False
)
result = converter.process()
print(result.failed, result.message, result.detailed_message)
```

`make_converter` raises `ValueError` for `ConversionType.DUMMY`.
`conversion_type_from_suffixes(".ts", ".csv")` picks the conversion for a
pair of suffixes, and `suffix_for` gives the suffix a conversion produces.

The parsers and builders are available on their own:
`tsconvert.tsfile.TsParser` / `TsBuilder`, `tsconvert.csvfile.CsvParser` /
`CsvBuilder` and `tsconvert.xlsx.XlsxParser` / `XlsxBuilder`, all working on
the data classes in `tsconvert.model`. `tsconvert.xlsx.Workbook` is a small
single-sheet XLSX reader and writer.

`tsconvert.session` holds `ConverterProxy`, which converts several files
into a directory at once, and `ConversionModel`, which keeps the list of
conversions, the selected inputs and the output path for an interactive
front end.

## What it does not do

There is no graphical window. `tsconvert.session` keeps the state such a
front end would use, with callbacks for changes, but nothing in the package
draws a screen or opens files in other applications.
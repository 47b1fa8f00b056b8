"""State behind an interactive conversion front end."""

from __future__ import annotations

import os
import re
from collections.abc import Callable, Iterable
from urllib.parse import urlparse
from urllib.request import url2pathname

from .converter import ConversionResult, ConversionType, make_converter, suffix_for

_FILE_NAME_WITH_EXTENSION = re.compile(r"\S+\.\S+")
_URL_PREFIX_LENGTH = len("file:///")

Listener = Callable[[], None]


def _to_local_file(value: str) -> str:
    """Turn a file URL into a local path; plain paths are returned unchanged."""
    parsed = urlparse(value)
    if parsed.scheme == "file":
        return url2pathname(parsed.path)
    return value


def _base_stem(path: str) -> str:
    name = path[path.rfind("/") + 1 :]
    dot = name.rfind(".")
    return name[:dot] if dot >= 0 else name


class ConverterProxy:
    """Runs conversions of one or more files and keeps the last outcome."""

    def __init__(self, on_completed: Listener | None = None) -> None:
        self.on_completed = on_completed
        self.result = ConversionResult(False, "", "")

    @property
    def failed(self) -> bool:
        return self.result.failed

    @property
    def message(self) -> str:
        return self.result.message

    @property
    def detailed_message(self) -> str:
        return self.result.detailed_message

    def convert(
        self,
        conversion_type: ConversionType | int,
        inputs: Iterable[str],
        output: str,
        field_separator: str,
        string_separator: str,
        ts_version: str,
    ) -> ConversionResult:
        """Convert every input; with several inputs, output is a directory.

        Stops at the first failing file and reports it; otherwise reports success.
        """
        kind = ConversionType(conversion_type)
        sources = [_to_local_file(item) for item in inputs]
        target = _to_local_file(output)

        if len(sources) > 1:
            outputs = [f"{target}/{_base_stem(src)}{suffix_for(kind)}" for src in sources]
        else:
            outputs = [target] * len(sources)

        outcome = ConversionResult(False, "Conversion successfull!", "")
        for source, destination in zip(sources, outputs):
            converter = make_converter(
                kind, source, destination, field_separator, string_separator, ts_version
            )
            step = converter.process()
            if step.failed:
                outcome = step
                break

        self._set_result(outcome)
        return outcome

    def _set_result(self, result: ConversionResult) -> None:
        self.result = result
        if self.on_completed is not None:
            self.on_completed()


class ConversionModel:
    """List of available conversions plus the chosen inputs and output."""

    CONVERSIONS = ("TS => CSV", "CSV => TS", "TS => XLSX", "XLSX => TS", "Error")

    def __init__(self, on_source_msg_changed: Listener | None = None) -> None:
        self.on_source_msg_changed = on_source_msg_changed
        self._conversions = list(self.CONVERSIONS)
        self._input: list[str] = []
        self.output = ""
        self._source_msg = ""
        self.current_index: int = ConversionType.DUMMY

    @property
    def input(self) -> list[str]:
        return list(self._input)

    @property
    def source_msg(self) -> str:
        return self._source_msg

    def row_count(self) -> int:
        """Number of conversions offered."""
        return len(self._conversions)

    def data(self, row: int) -> str | None:
        """Label of a conversion, or None for a row out of range."""
        if 0 <= row < len(self._conversions):
            return self._conversions[row]
        return None

    def clear_input(self) -> None:
        self._input.clear()

    def add_input(self, value: str) -> None:
        """Add an input file and update the summary message."""
        self._input.append(value)
        if len(self._input) == 1:
            self._set_source_msg(self._input[0])
        elif not self._inputs_have_same_extension():
            self._set_source_msg("source files should have same extension")
        else:
            self._set_source_msg(f"{len(self._input)} files selected")

    def set_output(self, value: str) -> None:
        """Set the output; a file name without extension gets the conversion's."""
        as_folder = "/" + value[_URL_PREFIX_LENGTH:]
        if os.path.isdir(as_folder):
            self.output = as_folder
            return

        self.output = value
        name = value[value.rfind("/") + 1 :]
        if _FILE_NAME_WITH_EXTENSION.search(name):
            return
        if self.current_index == ConversionType.TS2XLSX:
            self.output += ".xlsx"
        elif self.current_index == ConversionType.TS2CSV:
            self.output += ".csv"
        elif self.current_index != ConversionType.DUMMY:
            self.output += ".ts"

    def set_index(self, new_index: int) -> None:
        self.current_index = int(new_index)

    def _inputs_have_same_extension(self) -> bool:
        def extension(path: str) -> str:
            parts = path.split(".")
            return parts[1] if len(parts) > 1 else ""

        first = extension(self._input[0])
        return all(extension(item) == first for item in self._input)

    def _set_source_msg(self, message: str) -> None:
        self._source_msg = message
        if self.on_source_msg_changed is not None:
            self.on_source_msg_changed()
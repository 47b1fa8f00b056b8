"""Abstract parser and builder."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import replace

from .model import InOutParameter, Result


class Parser(ABC):
    """Reads a source file into a Result."""

    def __init__(self, params: InOutParameter | None = None) -> None:
        self.params = replace(params) if params is not None else InOutParameter()

    @abstractmethod
    def parse(self) -> Result:
        """Parse the input file; errors are reported in Result.error."""


class Builder(ABC):
    """Writes a Result to an output file."""

    def __init__(self, params: InOutParameter | None = None) -> None:
        self.params = replace(params) if params is not None else InOutParameter()

    @abstractmethod
    def build(self, result: Result) -> None:
        """Write the result; raises OSError when the file cannot be written."""
"""Command line entry point."""

from __future__ import annotations

import argparse
import logging
import os
from collections.abc import Sequence

from .converter import conversion_type_from_suffixes, make_converter
from .model import DESCRIPTION, VERSION

logger = logging.getLogger(__name__)


def get_suffix(filepath: str) -> str:
    """Return the part of a path from its last dot, or the whole path."""
    dot = filepath.rfind(".")
    return filepath[dot:] if dot >= 0 else filepath


class CliRunner:
    """Converts the first positional path into the second."""

    def __init__(self, args: Sequence[str], no_version: bool = False, no_location: bool = False) -> None:
        self.args = list(args)
        self.no_version = no_version
        self.no_location = no_location

    def run(self) -> int:
        """Run the conversion and return the exit status."""
        if len(self.args) < 2:
            logger.error("error, only 1 parameter passed as arg.")
            return 1

        source, output = self.args[0], self.args[1]
        if output.startswith("./"):
            output = (os.getcwd() + "/" + output).replace("/", os.sep)

        kind = conversion_type_from_suffixes(get_suffix(source), get_suffix(output))
        try:
            converter = make_converter(
                kind, source, output, ";", '"', "2.1", self.no_version, self.no_location
            )
        except ValueError as exc:
            logger.error("%s", exc)
            return 1

        result = converter.process()
        logger.info("%s %s %s", result.failed, result.message, result.detailed_message)
        return int(result.failed)


def main(argv: Sequence[str] | None = None) -> int:
    """Parse the command line and run a conversion."""
    parser = argparse.ArgumentParser(prog="tsconvert", description=DESCRIPTION)
    parser.add_argument("--version", action="version", version=VERSION)
    parser.add_argument("paths", nargs="*", metavar="in/out", help="input file, then output file")
    parser.add_argument(
        "--no-version",
        action="store_true",
        help="do not print version information into output file",
    )
    parser.add_argument(
        "--no-location",
        action="store_true",
        help="do not print location information into output file",
    )
    options = parser.parse_args(argv)

    if not logging.getLogger().handlers:
        logging.basicConfig(level=logging.INFO, format="%(message)s")

    if not options.paths:
        logger.warning("no args provided (this is CLI version)")
        return 1

    return CliRunner(options.paths, options.no_version, options.no_location).run()
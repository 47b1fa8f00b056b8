"""Reading and writing Qt translation (.ts) files."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from .base import Builder, Parser
from .model import (
    InOutParameter,
    Result,
    RootAttr,
    TranslationContext,
    TranslationMessage,
)

_INDENT = "    "


def _text(element: ET.Element | None) -> str:
    return "".join(element.itertext()) if element is not None else ""


class TsParser(Parser):
    """Parses a .ts XML file."""

    def parse(self) -> Result:
        try:
            with open(self.params.input_file, "rb") as handle:
                root = ET.fromstring(handle.read())
        except (OSError, ET.ParseError):
            return Result(error="Failed to open source!")

        attrs = RootAttr(
            ts_version=root.get("version", ""),
            language=root.get("language", ""),
            sourcelanguage=root.get("sourcelanguage", ""),
        )

        translations = []
        for node_ctx in root.iter("context"):
            context = TranslationContext(name=_text(node_ctx.find("name")))
            for node in node_ctx:
                if node.tag != "message":
                    continue
                translation = node.find("translation")
                context.messages.append(
                    TranslationMessage(
                        identifier=node.get("id", ""),
                        source=_text(node.find("source")),
                        translation=_text(translation),
                        translationtype=(
                            translation.get("type", "") if translation is not None else ""
                        ),
                        comment=_text(node.find("comment")),
                        extracomment=_text(node.find("extracomment")),
                        translatorcomment=_text(node.find("translatorcomment")),
                        locations=[
                            (loc.get("filename", ""), loc.get("line", ""))
                            for loc in node.findall("location")
                        ],
                    )
                )
            translations.append(context)

        return Result(translations=translations, root=attrs)


def _escape_text(value: str) -> str:
    return (
        value.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace("\r", "&#13;")
    )


def _escape_attr(value: str) -> str:
    return (
        _escape_text(value)
        .replace('"', "&quot;")
        .replace("\n", "&#10;")
        .replace("\t", "&#9;")
    )


def _attrs(pairs: list[tuple[str, str]]) -> str:
    return "".join(f' {name}="{_escape_attr(value)}"' for name, value in pairs)


def _text_element(depth: int, tag: str, value: str, attrs=()) -> str:
    return f"{_INDENT * depth}<{tag}{_attrs(list(attrs))}>{_escape_text(value)}</{tag}>"


class TsBuilder(Builder):
    """Writes a .ts XML file."""

    def __init__(self, params: InOutParameter | None = None) -> None:
        super().__init__(params)
        if not self.params.output_file.endswith("ts"):
            self.params.output_file += ".ts"

    def build(self, result: Result) -> None:
        lines = ['<?xml version="1.0" encoding="UTF-8"?>', "<!DOCTYPE TS>"]

        root_attrs = [("version", result.root.ts_version)]
        if result.root.sourcelanguage:
            root_attrs.append(("sourcelanguage", result.root.sourcelanguage))
        if result.root.language:
            root_attrs.append(("language", result.root.language))

        if not result.translations:
            lines.append(f"<TS{_attrs(root_attrs)}/>")
        else:
            lines.append(f"<TS{_attrs(root_attrs)}>")
            for context in result.translations:
                lines.append(f"{_INDENT}<context>")
                lines.append(_text_element(2, "name", context.name))
                for msg in context.messages:
                    lines.extend(self._message_lines(msg))
                lines.append(f"{_INDENT}</context>")
            lines.append("</TS>")

        with open(self.params.output_file, "w", encoding="utf-8", newline="\n") as out:
            out.write("\n".join(lines) + "\n")

    @staticmethod
    def _message_lines(msg: TranslationMessage) -> list[str]:
        id_attr = [("id", msg.identifier)] if msg.identifier else []
        lines = [f"{_INDENT * 2}<message{_attrs(id_attr)}>"]
        for filename, line in msg.locations:
            loc_attrs = []
            if filename:
                loc_attrs.append(("filename", filename))
            if line:
                loc_attrs.append(("line", line))
            lines.append(f"{_INDENT * 3}<location{_attrs(loc_attrs)}/>")
        lines.append(_text_element(3, "source", msg.source))
        for tag in ("comment", "extracomment", "translatorcomment"):
            value = getattr(msg, tag)
            if value:
                lines.append(_text_element(3, tag, value))
        type_attr = [("type", msg.translationtype)] if msg.translationtype else []
        lines.append(_text_element(3, "translation", msg.translation, type_attr))
        lines.append(f"{_INDENT * 2}</message>")
        return lines
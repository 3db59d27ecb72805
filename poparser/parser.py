"""Streaming, line-oriented PO parser.

Lines are pulled one at a time from a line source, trimmed, and dispatched on
their first character. Each line mutates the draft of the entry in progress;
a blank line closes the draft and hands it to the catalog, either as the
catalog header (first qualifying entry only) or as a regular entry.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import logging
import re

from poparser import header as poheader
from poparser.catalog import Catalog
from poparser.config import ParserConfig, default_config
from poparser.entry import (
    TRIM_CHARS,
    EntryDraft,
    PropertyKey,
    entry_from_draft,
    parse_property_key,
    strip_quotes,
)
from poparser.errors import DanglingContinuationError, UnrecognizedPropertyError
from poparser.source import FileSource, LineSource, StringSource

logger = logging.getLogger(__name__)

_PROPERTY_SPLIT_RE = re.compile(r"[ \t\n\r\f\v]+")
_FLAG_SPLIT_RE = re.compile(r",[ \t\n\r\f\v]*")


@dataclass
class ParseState:
    line_number: int = 0
    current_property: PropertyKey | None = None
    headers_found: bool = False
    draft: EntryDraft = field(default_factory=EntryDraft)

    def reset_entry(self) -> None:
        self.draft = EntryDraft()
        self.current_property = None


def split_property(line: str) -> tuple[str, str]:
    tokens = _PROPERTY_SPLIT_RE.split(line, maxsplit=1)
    if len(tokens) == 1:
        return tokens[0], ""
    return tokens[0], tokens[1]


class Parser:
    def __init__(self, source: LineSource, config: ParserConfig | None = None) -> None:
        self.source = source
        self.config = config or default_config()

    def parse(self) -> Catalog:
        catalog = Catalog()
        state = ParseState()
        try:
            while not self.source.ended():
                line = self.source.next_line().strip(TRIM_CHARS)
                state.line_number += 1

                if not line and state.draft.is_empty():
                    continue

                if self._should_close_entry(line, state):
                    self._flush(catalog, state, allow_header=True)
                    if not line:
                        continue

                self._dispatch(line, state)
        finally:
            self.source.close()

        if not state.draft.is_empty():
            self._flush(catalog, state, allow_header=False)

        logger.debug(
            "Parsed %d entries over %d lines (header: %s)",
            len(catalog),
            state.line_number,
            state.headers_found,
        )
        return catalog

    def _should_close_entry(self, line: str, state: ParseState) -> bool:
        if not line:
            return True
        if not self.config.boundary.close_on_repeated_msgid:
            return False
        key, _ = split_property(line)
        return key == "msgid" and state.draft.has(PropertyKey("msgid"))

    def _flush(self, catalog: Catalog, state: ParseState, *, allow_header: bool) -> None:
        draft = state.draft
        if allow_header and not state.headers_found and poheader.is_header(draft):
            state.headers_found = True
            catalog.add_headers(poheader.header_lines(draft.msgstr or ""))
            logger.debug("Catalog header found ending at line %d", state.line_number)
        else:
            catalog.add_entry(entry_from_draft(draft))
        state.reset_entry()

    def _dispatch(self, line: str, state: ParseState) -> None:
        first_char = line[0]
        if first_char == "#":
            self._parse_comment(line, state)
        elif first_char == "m":
            self._parse_property(line, state)
        elif first_char == '"':
            self._parse_continuation(line, state)
        else:
            logger.debug("Ignoring line %d: %r", state.line_number, line)

    def _parse_comment(self, line: str, state: ParseState) -> None:
        marker = line[:2]
        if marker == "#,":
            flags = _FLAG_SPLIT_RE.split(line[2:].strip(TRIM_CHARS))
            state.draft.set_flags(flag for flag in flags if flag)
        elif marker == "#.":
            state.draft.add_ccomment(line[2:].strip(TRIM_CHARS))
        else:
            state.draft.add_tcomment(line[1:].strip(TRIM_CHARS))

    def _parse_property(self, line: str, state: ParseState) -> None:
        token, value = split_property(line)
        key = parse_property_key(token)
        if key is None:
            raise UnrecognizedPropertyError(token, state.line_number)
        state.draft.append(key, strip_quotes(value))
        state.current_property = key

    def _parse_continuation(self, line: str, state: ParseState) -> None:
        if state.current_property is None:
            raise DanglingContinuationError(state.line_number)
        state.draft.append(state.current_property, strip_quotes(line))


def parse_string(text: str, config: ParserConfig | None = None) -> Catalog:
    return Parser(StringSource(text), config).parse()


def parse_file(path: Path, config: ParserConfig | None = None) -> Catalog:
    config = config or default_config()
    source = FileSource(
        Path(path),
        encoding=config.source.encoding,
        lock=config.source.lock,
    )
    return Parser(source, config).parse()

"""Recognition of the catalog metadata header among parsed entries.

A PO header is an ordinary-looking entry with an empty ``msgid`` whose
``msgstr`` lists ``Key: value`` pairs separated by the literal two-character
``\\n`` marker (the text is never unescaped). Only an entry that carries all
of the well-known keys below is treated as the header.
"""

from __future__ import annotations

from poparser.entry import TRIM_CHARS, EntryDraft, strip_quotes

LITERAL_NEWLINE = "\\n"

HEADER_KEYS = (
    "Project-Id-Version:",
    "Report-Msgid-Bugs-To:",
    "POT-Creation-Date:",
    "PO-Revision-Date:",
    "Last-Translator:",
    "Language-Team:",
    "MIME-Version:",
    "Content-Type:",
    "Content-Transfer-Encoding:",
    "Plural-Forms:",
)


def _header_token(line: str) -> str:
    name = line.split(":", 1)[0]
    return strip_quotes(name.strip(TRIM_CHARS)).strip(TRIM_CHARS) + ":"


def is_header(draft: EntryDraft) -> bool:
    if draft.is_empty() or draft.msgstr is None:
        return False
    if draft.msgid is None or draft.msgid != "":
        return False
    missing = set(HEADER_KEYS)
    for line in draft.msgstr.split(LITERAL_NEWLINE):
        missing.discard(_header_token(line))
    return not missing


def header_lines(msgstr: str) -> list[str]:
    return [line for line in msgstr.split(LITERAL_NEWLINE) if line]

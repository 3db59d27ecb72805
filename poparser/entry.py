from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping
import re

from poparser import hash as pohash

SCALAR_PROPERTIES = ("msgctxt", "msgid", "msgid_plural", "msgstr")
_PLURAL_KEY_RE = re.compile(r"^msgstr\[(\d+)\]$")
# Characters removed when trimming a line; non-ASCII whitespace is content.
TRIM_CHARS = " \t\n\r\0\x0b"


@dataclass(frozen=True)
class PropertyKey:
    name: str
    index: int | None = None

    def __str__(self) -> str:
        if self.index is None:
            return self.name
        return f"{self.name}[{self.index}]"


def parse_property_key(token: str) -> PropertyKey | None:
    if token in SCALAR_PROPERTIES:
        return PropertyKey(token)
    match = _PLURAL_KEY_RE.match(token)
    if match:
        return PropertyKey("msgstr", int(match.group(1)))
    return None


def strip_quotes(text: str) -> str:
    """Remove one leading and one trailing double quote, if present."""
    if text.startswith('"'):
        text = text[1:]
    if text.endswith('"'):
        text = text[:-1]
    return text


@dataclass
class EntryDraft:
    """Mutable accumulator for the entry currently being parsed."""

    msgctxt: str | None = None
    msgid: str | None = None
    msgid_plural: str | None = None
    msgstr: str | None = None
    msgstr_plural: dict[int, str] = field(default_factory=dict)
    flags: list[str] | None = None
    tcomment: list[str] | None = None
    ccomment: list[str] | None = None

    def has(self, key: PropertyKey) -> bool:
        return self.value(key) is not None

    def value(self, key: PropertyKey) -> str | None:
        if key.index is not None:
            return self.msgstr_plural.get(key.index)
        return getattr(self, key.name)

    def append(self, key: PropertyKey, text: str) -> None:
        current = self.value(key) or ""
        if key.index is not None:
            self.msgstr_plural[key.index] = current + text
        else:
            setattr(self, key.name, current + text)

    def set_flags(self, flags: Iterable[str]) -> None:
        self.flags = list(flags)

    def add_tcomment(self, comment: str) -> None:
        if self.tcomment is None:
            self.tcomment = []
        self.tcomment.append(comment)

    def add_ccomment(self, comment: str) -> None:
        if self.ccomment is None:
            self.ccomment = []
        self.ccomment.append(comment)

    def is_empty(self) -> bool:
        return (
            all(getattr(self, name) is None for name in SCALAR_PROPERTIES)
            and not self.msgstr_plural
            and self.flags is None
            and self.tcomment is None
            and self.ccomment is None
        )


@dataclass(frozen=True)
class Entry:
    msgid: str
    msgctxt: str | None = None
    msgid_plural: str | None = None
    msgstr: str | None = None
    msgstr_plural: Mapping[int, str] = field(default_factory=dict)
    flags: tuple[str, ...] = ()
    tcomment: tuple[str, ...] = ()
    ccomment: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        plural = MappingProxyType(dict(sorted(self.msgstr_plural.items())))
        object.__setattr__(self, "msgstr_plural", plural)
        for name in ("flags", "tcomment", "ccomment"):
            object.__setattr__(self, name, tuple(getattr(self, name)))

    def __hash__(self) -> int:
        return hash(
            (
                self.msgctxt,
                self.msgid,
                self.msgid_plural,
                self.msgstr,
                tuple(self.msgstr_plural.items()),
                self.flags,
                self.tcomment,
                self.ccomment,
            )
        )

    @property
    def key(self) -> str:
        return pohash.entry_key(self.msgctxt, self.msgid)

    @property
    def is_fuzzy(self) -> bool:
        return "fuzzy" in self.flags

    @property
    def is_plural(self) -> bool:
        return self.msgid_plural is not None or bool(self.msgstr_plural)

    @property
    def is_translated(self) -> bool:
        if self.is_plural:
            return bool(self.msgstr_plural) and all(self.msgstr_plural.values())
        return bool(self.msgstr)

    def as_dict(self) -> dict:
        return {
            "msgctxt": self.msgctxt,
            "msgid": self.msgid,
            "msgid_plural": self.msgid_plural,
            "msgstr": self.msgstr,
            "msgstr_plural": {str(k): v for k, v in sorted(self.msgstr_plural.items())},
            "flags": list(self.flags),
            "tcomment": list(self.tcomment),
            "ccomment": list(self.ccomment),
        }


def entry_from_draft(draft: EntryDraft) -> Entry:
    return Entry(
        msgid=draft.msgid if draft.msgid is not None else "",
        msgctxt=draft.msgctxt,
        msgid_plural=draft.msgid_plural,
        msgstr=draft.msgstr,
        msgstr_plural=draft.msgstr_plural,
        flags=tuple(draft.flags or ()),
        tcomment=tuple(draft.tcomment or ()),
        ccomment=tuple(draft.ccomment or ()),
    )

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator
import re

from poparser.entry import Entry


def parse_nplurals(plural_forms: str | None) -> int | None:
    if not plural_forms:
        return None
    match = re.search(r"nplurals\s*=\s*(\d+)", plural_forms, flags=re.IGNORECASE)
    if not match:
        return None
    value = int(match.group(1))
    return value if value >= 1 else None


@dataclass(frozen=True)
class CatalogHeader:
    lines: tuple[str, ...]

    def as_dict(self) -> dict[str, str]:
        fields: dict[str, str] = {}
        for line in self.lines:
            if ":" not in line:
                continue
            name, value = line.split(":", 1)
            fields.setdefault(name.strip(), value.strip())
        return fields

    def get(self, name: str, default: str | None = None) -> str | None:
        return self.as_dict().get(name.rstrip(":"), default)

    @property
    def plural_forms(self) -> str | None:
        return self.get("Plural-Forms")

    @property
    def nplurals(self) -> int | None:
        return parse_nplurals(self.plural_forms)


class Catalog:
    """Ordered collection of parsed entries plus the optional header."""

    def __init__(self) -> None:
        self.header: CatalogHeader | None = None
        self._entries: list[Entry] = []

    def add_headers(self, lines: Iterable[str]) -> None:
        if self.header is not None:
            raise ValueError("catalog header already set")
        self.header = CatalogHeader(tuple(lines))

    def add_entry(self, entry: Entry) -> None:
        self._entries.append(entry)

    @property
    def headers(self) -> list[str]:
        return list(self.header.lines) if self.header is not None else []

    @property
    def entries(self) -> list[Entry]:
        return list(self._entries)

    def get_entry(self, msgid: str, msgctxt: str | None = None) -> Entry | None:
        for entry in self._entries:
            if entry.msgid == msgid and entry.msgctxt == msgctxt:
                return entry
        return None

    def remove_entry(self, msgid: str, msgctxt: str | None = None) -> bool:
        for position, entry in enumerate(self._entries):
            if entry.msgid == msgid and entry.msgctxt == msgctxt:
                del self._entries[position]
                return True
        return False

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(list(self._entries))

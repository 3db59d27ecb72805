from __future__ import annotations

import dataclasses

import pytest

from conftest import FIXTURES
from poparser.catalog import Catalog, CatalogHeader, parse_nplurals
from poparser.entry import Entry, EntryDraft, PropertyKey, entry_from_draft, parse_property_key
from poparser.parser import parse_file, parse_string


def test_parse_property_key() -> None:
    assert parse_property_key("msgid") == PropertyKey("msgid")
    assert parse_property_key("msgstr[12]") == PropertyKey("msgstr", 12)
    assert str(parse_property_key("msgstr[3]")) == "msgstr[3]"
    assert parse_property_key("msgstr[]") is None
    assert parse_property_key("msgstr[-1]") is None
    assert parse_property_key("msgfoo") is None


def test_draft_lifecycle() -> None:
    draft = EntryDraft()
    assert draft.is_empty()
    draft.append(PropertyKey("msgstr", 1), "b")
    draft.append(PropertyKey("msgstr", 0), "a")
    draft.append(PropertyKey("msgstr", 0), "a")
    assert not draft.is_empty()
    entry = entry_from_draft(draft)
    assert entry.msgid == ""
    assert list(entry.msgstr_plural.items()) == [(0, "aa"), (1, "b")]


def test_draft_with_only_empty_flags_is_not_empty() -> None:
    draft = EntryDraft()
    draft.set_flags([])
    assert not draft.is_empty()


def test_entry_translation_state() -> None:
    assert Entry(msgid="a", msgstr="A").is_translated
    assert not Entry(msgid="a", msgstr="").is_translated
    assert not Entry(msgid="a", msgid_plural="b", msgstr_plural={0: "x", 1: ""}).is_translated
    assert Entry(msgid="a", msgid_plural="b", msgstr_plural={0: "x", 1: "y"}).is_translated


def test_catalogued_entry_cannot_be_mutated() -> None:
    catalog = parse_string('msgid "a"\nmsgid_plural "b"\nmsgstr[0] "x"\nmsgstr[1] "y"\n')
    entry = catalog.entries[0]
    with pytest.raises(TypeError):
        entry.msgstr_plural[0] = "changed"
    with pytest.raises(dataclasses.FrozenInstanceError):
        entry.msgstr = "changed"
    assert catalog.entries[0].msgstr_plural[0] == "x"


def test_entries_are_hashable() -> None:
    first = parse_string('msgid "a"\nmsgstr "b"\n').entries[0]
    same = Entry(msgid="a", msgstr="b")
    plural = Entry(msgid="a", msgid_plural="b", msgstr_plural={1: "y", 0: "x"}, flags=["fuzzy"])
    assert hash(first) == hash(same)
    assert first == same
    assert {first, same, plural} == {first, plural}
    assert plural == Entry(
        msgid="a", msgid_plural="b", msgstr_plural={0: "x", 1: "y"}, flags=("fuzzy",)
    )
    assert plural.flags == ("fuzzy",)
    assert list(plural.msgstr_plural) == [0, 1]


def test_catalog_lookup_and_removal() -> None:
    catalog = Catalog()
    catalog.add_entry(Entry(msgid="File", msgstr="Datei"))
    catalog.add_entry(Entry(msgid="File", msgctxt="menu", msgstr="Ablage"))
    assert catalog.get_entry("File").msgstr == "Datei"
    assert catalog.get_entry("File", "menu").msgstr == "Ablage"
    assert catalog.get_entry("Edit") is None
    assert catalog.remove_entry("File", "menu")
    assert not catalog.remove_entry("File", "menu")
    assert [entry.msgid for entry in catalog] == ["File"]


def test_catalog_accepts_headers_once() -> None:
    catalog = Catalog()
    assert catalog.headers == []
    catalog.add_headers(["Language: de"])
    with pytest.raises(ValueError):
        catalog.add_headers(["Language: fr"])


def test_header_lookups() -> None:
    header = CatalogHeader(("Language: de", "Plural-Forms: nplurals=3; plural=0;", "broken"))
    assert header.as_dict() == {"Language": "de", "Plural-Forms": "nplurals=3; plural=0;"}
    assert header.get("Language:") == "de"
    assert header.get("Missing") is None
    assert header.nplurals == 3


def test_parse_nplurals() -> None:
    assert parse_nplurals("nplurals=1; plural=0;") == 1
    assert parse_nplurals("plural=0;") is None
    assert parse_nplurals("nplurals=0; plural=0;") is None
    assert parse_nplurals(None) is None


def test_fixture_entries() -> None:
    catalog = parse_file(FIXTURES / "sample.po")
    assert catalog.header.get("Language") == "de"

    hello = catalog.get_entry("Hello, world!")
    assert hello.msgstr == "Hallo, Welt!"
    assert hello.ccomment == ("Main window title",)
    assert hello.tcomment == (": src/main.c:12",)

    menu = catalog.get_entry("Open %s", "menu")
    assert menu.flags == ("fuzzy", "c-format")
    assert menu.msgstr == "Öffne %s"

    long_text = catalog.get_entry("Long text that spans two lines.")
    assert long_text.msgstr == "Langer Text, der sich über zwei Zeilen erstreckt."

    plural = catalog.get_entry("One file")
    assert plural.msgid_plural == "%d files"
    assert dict(plural.msgstr_plural) == {0: "Eine Datei", 1: "%d Dateien"}

    assert not catalog.get_entry("Untranslated").is_translated

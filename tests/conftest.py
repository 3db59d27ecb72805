from __future__ import annotations

import copy
import sys
from pathlib import Path


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from poparser.config import ParserConfig  # noqa: E402

FIXTURES = PROJECT_ROOT / "tests" / "fixtures"

HEADER_FIELDS = [
    "Project-Id-Version: demo 1.0",
    "Report-Msgid-Bugs-To: bugs@example.org",
    "POT-Creation-Date: 2024-01-01 00:00+0000",
    "PO-Revision-Date: 2024-01-02 00:00+0000",
    "Last-Translator: Jane Doe <jane@example.org>",
    "Language-Team: German <de@example.org>",
    "MIME-Version: 1.0",
    "Content-Type: text/plain; charset=UTF-8",
    "Content-Transfer-Encoding: 8bit",
    "Plural-Forms: nplurals=2; plural=(n != 1);",
]


def header_block(fields: list[str] | None = None) -> str:
    """Build a header entry, one quoted continuation line per field."""
    lines = ['msgid ""', 'msgstr ""']
    for item in HEADER_FIELDS if fields is None else fields:
        lines.append(f'"{item}\\n"')
    return "\n".join(lines) + "\n"


def _deep_merge(base: dict, override: dict) -> dict:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if (
            key in merged
            and isinstance(merged[key], dict)
            and isinstance(value, dict)
        ):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def build_config_dict(overrides: dict | None = None) -> dict:
    base = {
        "format": 1,
        "source": {"encoding": "utf-8", "lock": True},
        "boundary": {"close_on_repeated_msgid": False},
    }
    if overrides:
        return _deep_merge(base, overrides)
    return base


def build_config(overrides: dict | None = None) -> ParserConfig:
    return ParserConfig.model_validate(build_config_dict(overrides))

from __future__ import annotations

import hashlib
import json

CONTEXT_SEPARATOR = "\u0004"


def sha256_hex_bytes(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def canonical_json(obj: object) -> str:
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def canonical_json_bytes(obj: object) -> bytes:
    return canonical_json(obj).encode("utf-8")


def entry_key(msgctxt: str | None, msgid: str) -> str:
    if msgctxt is None:
        return msgid
    return f"{msgctxt}{CONTEXT_SEPARATOR}{msgid}"

from __future__ import annotations

from pathlib import Path
from typing import Literal
import codecs
import hashlib
import json

from poparser import hash as pohash
from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator


def compute_canonical_hash(data: dict) -> str:
    canonical = pohash.canonical_json_bytes(data)
    return hashlib.sha256(canonical).hexdigest()


class _BaseModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


class SourceConfig(_BaseModel):
    encoding: StrictStr = "utf-8"
    lock: StrictBool = True

    @field_validator("encoding")
    @classmethod
    def _encoding_known(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as exc:
            raise ValueError(f"source.encoding is not a known codec: {value}") from exc
        return value


class BoundaryConfig(_BaseModel):
    close_on_repeated_msgid: StrictBool = False


class ParserConfig(_BaseModel):
    format: Literal[1] = 1
    source: SourceConfig = Field(default_factory=SourceConfig)
    boundary: BoundaryConfig = Field(default_factory=BoundaryConfig)
    config_hash: StrictStr = ""

    def model_post_init(self, __context: object) -> None:
        self.config_hash = compute_canonical_hash(self.data)

    @property
    def data(self) -> dict:
        return self.model_dump(mode="json", exclude={"config_hash"})


def default_config() -> ParserConfig:
    return ParserConfig()


def load_config(config_path: Path) -> ParserConfig:
    raw = json.loads(config_path.read_text(encoding="utf-8"))
    return ParserConfig.model_validate(raw)

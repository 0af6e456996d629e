"""Typed intermediate representation of Lexicon documents.

A LexiconDocument groups raw definitions under one namespace id. The loader
decodes each definition into a Lexicon, whose ``type`` is one of the
LexiconType variants below. Object fields are LexiconPrimitive leaves; nested
objects and arrays are not representable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional, Union


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LexiconDocument:
    """One parsed schema file. ``defs`` still holds raw JSON payloads."""

    lexicon: int
    id: str
    defs: dict[str, Any]
    description: Optional[str] = None


# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Boolean:
    tag: ClassVar[str] = "boolean"


@dataclass(frozen=True)
class Number:
    tag: ClassVar[str] = "number"


@dataclass(frozen=True)
class Integer:
    tag: ClassVar[str] = "integer"


@dataclass(frozen=True)
class String:
    """Text field, optionally restricted to a set of literal values."""

    tag: ClassVar[str] = "string"
    enum: Optional[tuple[str, ...]] = None


LexiconPrimitive = Union[Boolean, Number, Integer, String]

PRIMITIVES: dict[str, type] = {
    cls.tag: cls for cls in (Boolean, Number, Integer, String)
}


# ---------------------------------------------------------------------------
# Objects, records and XRPC bodies
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LexiconObject:
    """Field mapping plus the names that must be present."""

    properties: dict[str, LexiconPrimitive] = field(default_factory=dict)
    required: tuple[str, ...] = ()

    def is_required(self, name: str) -> bool:
        return name in self.required


@dataclass(frozen=True)
class LexiconRecord:
    record: LexiconObject
    key: Optional[str] = None


@dataclass(frozen=True)
class XrpcParameters:
    """Query-string parameters. Every parameter is treated as required."""

    properties: dict[str, LexiconPrimitive] = field(default_factory=dict)
    type: str = "params"

    def as_object(self) -> LexiconObject:
        return LexiconObject(
            properties=dict(self.properties),
            required=tuple(self.properties),
        )


@dataclass(frozen=True)
class XrpcBody:
    encoding: str
    schema: LexiconObject


@dataclass(frozen=True)
class XrpcError:
    name: str
    description: Optional[str] = None


@dataclass(frozen=True)
class LexiconXrpcQueryProc:
    parameters: Optional[XrpcParameters] = None
    input: Optional[XrpcBody] = None
    output: Optional[XrpcBody] = None
    errors: tuple[XrpcError, ...] = ()


# ---------------------------------------------------------------------------
# Definition variants
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Token:
    tag: ClassVar[str] = "token"


@dataclass(frozen=True)
class Object:
    tag: ClassVar[str] = "object"
    inner: LexiconObject


@dataclass(frozen=True)
class Record:
    tag: ClassVar[str] = "record"
    inner: LexiconRecord


@dataclass(frozen=True)
class Query:
    """Read-only XRPC method (HTTP GET)."""

    tag: ClassVar[str] = "query"
    inner: LexiconXrpcQueryProc


@dataclass(frozen=True)
class Procedure:
    """Mutating XRPC method (HTTP POST)."""

    tag: ClassVar[str] = "procedure"
    inner: LexiconXrpcQueryProc


@dataclass(frozen=True)
class Blob:
    tag: ClassVar[str] = "blob"


@dataclass(frozen=True)
class Image:
    tag: ClassVar[str] = "image"


@dataclass(frozen=True)
class Video:
    tag: ClassVar[str] = "video"


@dataclass(frozen=True)
class Audio:
    tag: ClassVar[str] = "audio"


LexiconType = Union[Token, Object, Record, Query, Procedure, Blob, Image, Video, Audio]

VARIANTS: dict[str, type] = {
    cls.tag: cls
    for cls in (Token, Object, Record, Query, Procedure, Blob, Image, Video, Audio)
}


@dataclass(frozen=True)
class Lexicon:
    """One compiled definition, identified by its fully qualified id."""

    id: str
    type: LexiconType
    revision: Optional[int] = None
    description: Optional[str] = None

    @property
    def tag(self) -> str:
        return self.type.tag

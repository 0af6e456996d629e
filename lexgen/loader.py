"""Load Lexicon documents and decode their definitions into the IR.

parse() checks the document envelope, expand() turns every entry of ``defs``
into a Lexicon. Decoding follows the ``type`` tag of each definition:
unknown tags raise UnknownVariant, missing or ill-typed sub-fields raise
SchemaMismatch. No cross-reference resolution is done between definitions.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .errors import MalformedDocument, SchemaMismatch, UnknownVariant
from .schema import (
    PRIMITIVES,
    VARIANTS,
    Lexicon,
    LexiconDocument,
    LexiconObject,
    LexiconPrimitive,
    LexiconRecord,
    LexiconXrpcQueryProc,
    Object,
    Procedure,
    Query,
    Record,
    String,
    XrpcBody,
    XrpcError,
    XrpcParameters,
)

logger = logging.getLogger(__name__)

MAIN_DEF = "main"


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------

def parse(data: bytes | str, source: str | None = None) -> LexiconDocument:
    """Parse raw JSON into a LexiconDocument, checking the envelope."""
    try:
        raw = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as exc:
        raise MalformedDocument(f"invalid JSON: {exc}", source) from exc

    if not isinstance(raw, dict):
        raise MalformedDocument("document must be a JSON object", source)

    for key in ("lexicon", "id", "defs"):
        if key not in raw:
            raise MalformedDocument(f"missing {key!r} field", source)

    version = raw["lexicon"]
    if not isinstance(version, int) or isinstance(version, bool):
        raise MalformedDocument("'lexicon' must be an integer", source)

    doc_id = raw["id"]
    if not isinstance(doc_id, str) or not doc_id:
        raise MalformedDocument("'id' must be a non-empty string", source)

    defs = raw["defs"]
    if not isinstance(defs, dict) or not defs:
        raise MalformedDocument("'defs' must be a non-empty object", source or doc_id)

    description = raw.get("description")
    if description is not None and not isinstance(description, str):
        raise MalformedDocument("'description' must be a string", source or doc_id)

    return LexiconDocument(
        lexicon=version,
        id=doc_id,
        defs=defs,
        description=description,
    )


def load_document(path: Path) -> LexiconDocument:
    """Read and parse one schema file."""
    return parse(Path(path).read_bytes(), source=str(path))


def discover(root: Path) -> list[Path]:
    """Find all schema documents under a directory, in a stable order."""
    return sorted(p for p in Path(root).rglob("*.json") if p.is_file())


def qualify(base_id: str, name: str) -> str:
    """Build the fully qualified id of a definition within a document."""
    if name == MAIN_DEF:
        return base_id
    return f"{base_id}.{name}"


def expand(document: LexiconDocument) -> list[Lexicon]:
    """Decode every definition of a document, one Lexicon per ``defs`` entry."""
    lexicons = []
    for name, raw in document.defs.items():
        identifier = qualify(document.id, name)
        lexicons.append(decode_lexicon(raw, identifier))
        logger.debug("Decoded %s", identifier)
    return lexicons


# ---------------------------------------------------------------------------
# Definitions
# ---------------------------------------------------------------------------

def _require(raw: dict[str, Any], key: str, kind: type, identifier: str, tag: str) -> Any:
    """Fetch a mandatory sub-field, checking its JSON type."""
    if key not in raw:
        raise SchemaMismatch(f"missing {key!r}", identifier, tag)
    value = raw[key]
    if not isinstance(value, kind):
        raise SchemaMismatch(f"{key!r} must be {kind.__name__}", identifier, tag)
    return value


def _optional(raw: dict[str, Any], key: str, kind: type, identifier: str, tag: str) -> Any:
    value = raw.get(key)
    if value is not None and not isinstance(value, kind):
        raise SchemaMismatch(f"{key!r} must be {kind.__name__}", identifier, tag)
    return value


def _tag_of(raw: Any, identifier: str) -> str:
    if not isinstance(raw, dict):
        raise SchemaMismatch("definition must be a JSON object", identifier)
    tag = raw.get("type")
    if not isinstance(tag, str):
        raise SchemaMismatch("missing 'type' tag", identifier)
    return tag


def decode_primitive(raw: Any, identifier: str) -> LexiconPrimitive:
    """Decode one object field into a LexiconPrimitive."""
    tag = _tag_of(raw, identifier)
    cls = PRIMITIVES.get(tag)
    if cls is None:
        raise UnknownVariant("unrecognized field type", identifier, tag)
    if cls is String:
        values = _optional(raw, "enum", list, identifier, tag)
        if values is not None:
            if not all(isinstance(v, str) for v in values):
                raise SchemaMismatch("'enum' values must be strings", identifier, tag)
            return String(enum=tuple(values))
        return String()
    return cls()


def _decode_properties(raw: dict[str, Any], identifier: str, tag: str) -> dict[str, LexiconPrimitive]:
    properties = _require(raw, "properties", dict, identifier, tag)
    return {
        name: decode_primitive(value, f"{identifier}#{name}")
        for name, value in properties.items()
    }


def decode_object(raw: Any, identifier: str, tag: str = "object") -> LexiconObject:
    """Decode an object schema and check ``required`` against ``properties``."""
    if not isinstance(raw, dict):
        raise SchemaMismatch("object schema must be a JSON object", identifier, tag)
    properties = _decode_properties(raw, identifier, tag)
    required = _optional(raw, "required", list, identifier, tag) or []

    for name in required:
        if not isinstance(name, str):
            raise SchemaMismatch("'required' entries must be strings", identifier, tag)
        if name not in properties:
            raise SchemaMismatch(
                f"required field {name!r} is not declared in 'properties'",
                identifier,
                tag,
            )

    return LexiconObject(properties=properties, required=tuple(required))


def _decode_body(raw: Any, identifier: str, tag: str) -> XrpcBody:
    if not isinstance(raw, dict):
        raise SchemaMismatch("body must be a JSON object", identifier, tag)
    encoding = _require(raw, "encoding", str, identifier, tag)
    schema = _require(raw, "schema", dict, identifier, tag)
    return XrpcBody(encoding=encoding, schema=decode_object(schema, identifier, tag))


def _decode_parameters(raw: Any, identifier: str, tag: str) -> XrpcParameters:
    if not isinstance(raw, dict):
        raise SchemaMismatch("'parameters' must be a JSON object", identifier, tag)
    return XrpcParameters(
        properties=_decode_properties(raw, identifier, tag),
        type=_optional(raw, "type", str, identifier, tag) or "params",
    )


def _decode_errors(raw: Any, identifier: str, tag: str) -> tuple[XrpcError, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise SchemaMismatch("'errors' must be a list", identifier, tag)
    errors = []
    for entry in raw:
        if not isinstance(entry, dict):
            raise SchemaMismatch("error entries must be JSON objects", identifier, tag)
        errors.append(XrpcError(
            name=_require(entry, "name", str, identifier, tag),
            description=_optional(entry, "description", str, identifier, tag),
        ))
    return tuple(errors)


def _decode_query_proc(raw: dict[str, Any], identifier: str, tag: str) -> LexiconXrpcQueryProc:
    parameters = raw.get("parameters")
    body_in = raw.get("input")
    body_out = raw.get("output")
    return LexiconXrpcQueryProc(
        parameters=_decode_parameters(parameters, identifier, tag) if parameters is not None else None,
        input=_decode_body(body_in, identifier, tag) if body_in is not None else None,
        output=_decode_body(body_out, identifier, tag) if body_out is not None else None,
        errors=_decode_errors(raw.get("errors"), identifier, tag),
    )


def decode_lexicon(raw: Any, identifier: str) -> Lexicon:
    """Decode one raw definition into a Lexicon with the given id."""
    tag = _tag_of(raw, identifier)
    cls = VARIANTS.get(tag)
    if cls is None:
        raise UnknownVariant("unrecognized definition type", identifier, tag)

    if cls is Object:
        variant = Object(decode_object(raw, identifier, tag))
    elif cls is Record:
        record = _require(raw, "record", dict, identifier, tag)
        variant = Record(LexiconRecord(
            record=decode_object(record, identifier, tag),
            key=_optional(raw, "key", str, identifier, tag),
        ))
    elif cls in (Query, Procedure):
        variant = cls(_decode_query_proc(raw, identifier, tag))
    else:
        variant = cls()

    revision = _optional(raw, "revision", int, identifier, tag)
    description = _optional(raw, "description", str, identifier, tag)
    return Lexicon(
        id=identifier,
        type=variant,
        revision=revision,
        description=description,
    )

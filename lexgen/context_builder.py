"""Build Jinja2 template context from decoded Lexicons.

Walks each Lexicon and produces one struct dict per generated dataclass,
then assembles the full context dict for module.py.j2.
"""

from __future__ import annotations

import keyword
from typing import Any

from .casing import to_pascal, to_screaming_snake
from .errors import SchemaMismatch, UnsupportedVariant
from .schema import (
    Audio,
    Blob,
    Boolean,
    Image,
    Integer,
    Lexicon,
    LexiconObject,
    LexiconPrimitive,
    Number,
    Object,
    Procedure,
    Query,
    Record,
    String,
    Token,
    Video,
)

_PYTHON_TYPES: dict[type, str] = {
    Boolean: "bool",
    Number: "float",
    Integer: "int",
    String: "str",
}

# Variants that decode fine but have no generated form yet
_UNSUPPORTED = (Token, Record, Blob, Image, Video, Audio)


def type_name(identifier: str) -> str:
    """PascalCase name from the last dotted segment of an identifier."""
    return to_pascal(identifier.rsplit(".", 1)[-1])


def check_identifier(name: str, owner: str = "") -> str:
    """Reject names that cannot be written out as Python identifiers."""
    if not name.isidentifier() or keyword.iskeyword(name):
        raise SchemaMismatch(
            f"{name!r} is not a valid Python identifier",
            f"{owner}#{name}" if owner else name,
        )
    return name


def python_type(primitive: LexiconPrimitive) -> str:
    """Map a Lexicon primitive to the Python annotation used in output."""
    return _PYTHON_TYPES[type(primitive)]


def build_fields(obj: LexiconObject, owner: str = "") -> list[dict[str, Any]]:
    """Build field dicts for a struct, required fields first.

    Dataclass fields without defaults must precede fields with defaults, so
    optional fields (defaulting to None) go last. Order within each group
    follows the schema.
    """
    fields = []
    for name, primitive in obj.properties.items():
        enum = primitive.enum if isinstance(primitive, String) else None
        fields.append({
            "name": check_identifier(name, owner),
            "type": python_type(primitive),
            "required": obj.is_required(name),
            "enum": list(enum) if enum else None,
        })
    return [f for f in fields if f["required"]] + [f for f in fields if not f["required"]]


def _struct(owner: str, name: str, obj: LexiconObject, description: str | None = None) -> dict[str, Any]:
    return {
        "name": check_identifier(name, owner),
        "fields": build_fields(obj, owner),
        "description": description,
    }


def build_structs(lexicon: Lexicon) -> list[dict[str, Any]]:
    """Build the structs generated for one Lexicon.

    Objects give one struct. Queries and procedures give up to three:
    <Name>Params, <Name>Input and <Name>Output, each only when the matching
    body is declared. Other variants raise UnsupportedVariant.
    """
    variant = lexicon.type
    name = type_name(lexicon.id)

    if isinstance(variant, Object):
        return [_struct(lexicon.id, name, variant.inner, lexicon.description)]

    if isinstance(variant, (Query, Procedure)):
        method = variant.inner
        structs = []
        if method.parameters is not None:
            structs.append(_struct(
                lexicon.id,
                f"{name}Params",
                method.parameters.as_object(),
                f"Query parameters for {lexicon.id}.",
            ))
        if method.input is not None:
            structs.append(_struct(
                lexicon.id,
                f"{name}Input",
                method.input.schema,
                f"Input body for {lexicon.id} ({method.input.encoding}).",
            ))
        if method.output is not None:
            structs.append(_struct(
                lexicon.id,
                f"{name}Output",
                method.output.schema,
                f"Output body for {lexicon.id} ({method.output.encoding}).",
            ))
        return structs

    if isinstance(variant, _UNSUPPORTED):
        raise UnsupportedVariant(
            "code generation is not implemented for this variant",
            lexicon.id,
            variant.tag,
        )

    raise TypeError(f"unexpected lexicon variant {variant!r}")


def build_method(lexicon: Lexicon) -> dict[str, Any] | None:
    """Describe the XRPC method of a query or procedure, if it is one."""
    variant = lexicon.type
    if not isinstance(variant, (Query, Procedure)):
        return None

    method = variant.inner
    prefix = check_identifier(to_screaming_snake(type_name(lexicon.id)), lexicon.id)
    return {
        "prefix": prefix,
        "nsid": lexicon.id,
        "kind": variant.tag,
        "description": lexicon.description,
        "input_encoding": method.input.encoding if method.input else None,
        "output_encoding": method.output.encoding if method.output else None,
        "errors": [e.name for e in method.errors],
    }


def build_context(lexicons: list[Lexicon], source_id: str) -> dict[str, Any]:
    """Build the full template context for one generated module.

    Class names and constant prefixes must be unique within the module, or a
    later definition would silently replace an earlier one.
    """
    structs: list[dict[str, Any]] = []
    methods: list[dict[str, Any]] = []
    owners: dict[str, str] = {}

    def claim(name: str, lexicon: Lexicon) -> None:
        if name in owners:
            raise SchemaMismatch(
                f"{name!r} is already generated for {owners[name]}",
                lexicon.id,
                lexicon.tag,
            )
        owners[name] = lexicon.id

    for lexicon in lexicons:
        for struct in build_structs(lexicon):
            claim(struct["name"], lexicon)
            structs.append(struct)
        method = build_method(lexicon)
        if method is not None:
            claim(f"{method['prefix']}_*", lexicon)
            methods.append(method)

    return {
        "source_id": source_id,
        "structs": structs,
        "methods": methods,
        "needs_optional": any(
            not f["required"] for s in structs for f in s["fields"]
        ),
        "struct_count": len(structs),
    }

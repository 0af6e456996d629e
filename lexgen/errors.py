"""Errors raised while loading Lexicon documents and generating code.

Every error is fatal to the build step. Each one names the offending
identifier (a document id, a lexicon id or a file path) and, where there is
one, the variant tag that caused it.
"""

from __future__ import annotations


class LexiconError(Exception):
    """Base class for all lexgen errors."""

    code = "lexicon"

    def __init__(self, message: str, identifier: str | None = None, tag: str | None = None):
        self.message = message
        self.identifier = identifier
        self.tag = tag
        super().__init__(message)

    def __str__(self) -> str:
        context = []
        if self.identifier:
            context.append(self.identifier)
        if self.tag is not None:
            context.append(f"type={self.tag}")
        suffix = f" ({', '.join(context)})" if context else ""
        return f"[{self.code}] {self.message}{suffix}"


class MalformedDocument(LexiconError):
    """Input is not JSON or does not match the document envelope."""

    code = "malformed-document"


class UnknownVariant(LexiconError):
    """A ``type`` tag outside the closed set of recognized variants."""

    code = "unknown-variant"


class SchemaMismatch(LexiconError):
    """A recognized variant is missing required sub-fields or has ill-typed ones."""

    code = "schema-mismatch"


class UnsupportedVariant(LexiconError):
    """A valid variant that the code generator cannot emit yet."""

    code = "unsupported-variant"

"""Convert Lexicon identifiers between casing conventions.

Every conversion first splits the input into words, then rejoins them:
  - camelCase            -> ["camel", "Case"]
  - PascalCase           -> ["Pascal", "Case"]
  - snake_case           -> ["snake", "case"]
  - SCREAMING_SNAKE_CASE -> ["SCREAMING", "SNAKE", "CASE"]

Examples:
  createSession  -> create_session / CreateSession
  SCREAMING_CASE -> screaming_case / ScreamingCase
  getV2Blob      -> get_v2_blob / GetV2Blob
"""

from __future__ import annotations

import re

# A word is either an optional capital followed by lowercase letters or digits,
# or a run of capitals. Anything else (underscores, dots, dashes) is dropped.
_WORD_RE = re.compile(r"[A-Z]?[a-z0-9]+|[A-Z]+")


def split_words(identifier: str) -> list[str]:
    """Split an identifier into words regardless of its casing convention."""
    return _WORD_RE.findall(identifier)


def _capitalize(word: str) -> str:
    if len(word) > 1:
        return word[0].upper() + word[1:].lower()
    return word.upper()


def to_snake(identifier: str) -> str:
    """Convert camelCase, PascalCase or SCREAMING_SNAKE_CASE to snake_case."""
    return "_".join(split_words(identifier)).lower()


def to_pascal(identifier: str) -> str:
    """Convert camelCase, snake_case or SCREAMING_SNAKE_CASE to PascalCase."""
    return "".join(_capitalize(word) for word in split_words(identifier))


def to_camel(identifier: str) -> str:
    """Convert any supported casing to camelCase."""
    words = split_words(identifier)
    if not words:
        return ""
    return words[0].lower() + "".join(_capitalize(word) for word in words[1:])


def to_screaming_snake(identifier: str) -> str:
    """Convert any supported casing to SCREAMING_SNAKE_CASE."""
    return to_snake(identifier).upper()

"""Shared fixtures for lexgen tests.

Documents are built as plain dicts so each test can tweak one field and
write them to disk when a test needs files.
"""

from __future__ import annotations

import importlib.util
import json
import sys
from pathlib import Path
from types import ModuleType
from typing import Any, Callable

import pytest


def _dump(document: dict[str, Any]) -> bytes:
    """Serialize a document dict the way it would sit on disk."""
    return json.dumps(document).encode()


@pytest.fixture
def session_object() -> dict[str, Any]:
    """Object definition with one required and one optional field."""
    return {
        "type": "object",
        "required": ["did"],
        "properties": {
            "did": {"type": "string"},
            "email": {"type": "string"},
        },
    }


@pytest.fixture
def create_session_doc() -> dict[str, Any]:
    """A procedure document modelled on com.atproto.server.createSession."""
    return {
        "lexicon": 1,
        "id": "com.atproto.server.createSession",
        "description": "Session management",
        "defs": {
            "main": {
                "type": "procedure",
                "description": "Create an authentication session.",
                "input": {
                    "encoding": "application/json",
                    "schema": {
                        "type": "object",
                        "required": ["identifier", "password"],
                        "properties": {
                            "identifier": {"type": "string"},
                            "password": {"type": "string"},
                        },
                    },
                },
                "output": {
                    "encoding": "application/json",
                    "schema": {
                        "type": "object",
                        "required": ["accessJwt", "did"],
                        "properties": {
                            "accessJwt": {"type": "string"},
                            "did": {"type": "string"},
                            "email": {"type": "string"},
                        },
                    },
                },
                "errors": [{"name": "AccountTakedown", "description": "Account is taken down."}],
            },
        },
    }


@pytest.fixture
def schema_dir(tmp_path: Path, create_session_doc: dict[str, Any]) -> Path:
    """A schema tree on disk with one procedure document."""
    root = tmp_path / "lexicons"
    path = root / "com" / "atproto" / "server" / "createSession.json"
    path.parent.mkdir(parents=True)
    path.write_bytes(_dump(create_session_doc))
    return root


@pytest.fixture
def load_source(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Callable[[str, str], ModuleType]:
    """Import generated source text as a throwaway module.

    Usage in tests::

        module = load_source(source, "create_session")
        module.CreateSessionOutput(accessJwt="a", did="d")
    """
    def _load(source: str, name: str) -> ModuleType:
        path = tmp_path / f"{name}.py"
        path.write_text(source)
        spec = importlib.util.spec_from_file_location(name, path)
        module = importlib.util.module_from_spec(spec)
        # dataclasses resolves string annotations through sys.modules
        monkeypatch.setitem(sys.modules, name, module)
        spec.loader.exec_module(module)
        return module
    return _load

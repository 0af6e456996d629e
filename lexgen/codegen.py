"""Render templates and write generated output.

Takes decoded Lexicons, builds the template context with context_builder
and renders one Python module per Lexicon document.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import jinja2

from .casing import to_snake
from .context_builder import build_context
from .loader import discover, expand, load_document
from .schema import Lexicon

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
MODULE_TEMPLATE = "module.py.j2"


def _literal(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        items = [_literal(v) for v in value]
        if len(items) == 1:
            return f"({items[0]},)"
        return f"({', '.join(items)})"
    if isinstance(value, str):
        return json.dumps(value)
    return repr(value)


def _docstring(text: str) -> str:
    text = text.strip().replace("\\", "\\\\").replace('"""', '\\"\\"\\"')
    if text.endswith('"'):
        text = text[:-1] + '\\"'
    return text


def _comment(text: str) -> str:
    return "\n# ".join(line.rstrip() for line in text.strip().splitlines())


def _environment() -> jinja2.Environment:
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )
    env.filters["literal"] = _literal
    env.filters["docstring"] = _docstring
    env.filters["comment"] = _comment
    return env


_ENV = _environment()


def format_code(code: str) -> str:
    """Strip trailing whitespace and collapse runs of blank lines."""
    lines = []
    blank_count = 0
    for line in code.split("\n"):
        stripped = line.rstrip()
        if not stripped:
            blank_count += 1
            if blank_count <= 2:
                lines.append("")
        else:
            blank_count = 0
            lines.append(stripped)
    return "\n".join(lines).rstrip("\n") + "\n"


def render(context: dict[str, Any]) -> str:
    """Render the module template with a prepared context."""
    template = _ENV.get_template(MODULE_TEMPLATE)
    return format_code(template.render(**context))


def generate(lexicon: Lexicon) -> str:
    """Generate the Python source declaring one Lexicon's structs."""
    return render(build_context([lexicon], lexicon.id))


def generate_module(lexicons: list[Lexicon], source_id: str) -> str:
    """Generate one module holding every Lexicon of a document."""
    return render(build_context(lexicons, source_id))


def module_path(document_id: str, output_root: Path) -> Path:
    """Map a document id to its output file.

    com.atproto.server.createSession -> com/atproto/server/create_session.py
    """
    *namespace, name = document_id.split(".")
    return Path(output_root).joinpath(*namespace, f"{to_snake(name)}.py")


def write_module(path: Path, source: str, output_root: Path) -> None:
    """Write a generated module, making every directory below the root a package."""
    path.parent.mkdir(parents=True, exist_ok=True)
    root = Path(output_root).resolve()
    package = path.parent.resolve()
    while package == root or root in package.parents:
        init = package / "__init__.py"
        if not init.exists():
            init.write_text("")
        if package == root:
            break
        package = package.parent
    path.write_text(source)


def build(schema_root: Path, output_root: Path) -> list[Path]:
    """Compile every Lexicon document under schema_root into output_root.

    All documents are loaded and decoded before anything is generated, and
    all modules are rendered before anything is written, so a bad definition
    leaves the output tree untouched.
    """
    documents = [load_document(path) for path in discover(schema_root)]
    expanded = [(doc.id, expand(doc)) for doc in documents]
    logger.info(
        "Loaded %d lexicons from %d documents",
        sum(len(lexicons) for _, lexicons in expanded),
        len(documents),
    )

    rendered = []
    for doc_id, lexicons in expanded:
        rendered.append((module_path(doc_id, output_root), generate_module(lexicons, doc_id)))

    written = []
    for path, source in rendered:
        write_module(path, source, output_root)
        logger.info("Generated %s", path)
        written.append(path)
    return written

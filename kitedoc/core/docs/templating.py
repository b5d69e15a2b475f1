"""Jinja2 environment and static assets for the HTML site."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape
from markupsafe import Markup

TEMPLATE_DIR = Path(__file__).parent / "templates"

#: Static files copied verbatim to the site root.
STATIC_ASSETS = ("styles.css", "scripts.js")


@lru_cache(maxsize=1)
def get_environment() -> Environment:
    """Return the shared template environment (HTML and XML autoescaped)."""
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["json_script"] = json_script
    return env


def render_template(name: str, **variables: Any) -> str:
    return get_environment().get_template(name).render(**variables)


def static_asset(name: str) -> str:
    """Contents of a static asset shipped with the package."""
    if name not in STATIC_ASSETS:
        raise KeyError(name)
    return (TEMPLATE_DIR / name).read_text(encoding="utf-8")


def json_script(data: Any) -> Markup:
    """Serialize ``data`` for embedding inside a ``<script>`` element."""
    text = json.dumps(data, indent=2, ensure_ascii=False)
    return Markup(text.replace("</", "<\\/"))

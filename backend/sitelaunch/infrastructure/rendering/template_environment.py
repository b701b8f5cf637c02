"""
Jinja2 environment shared by the site generator and the notification emails.

HTML templates are autoescaped, so business-supplied text (name, about us,
services, address) can never inject markup into a generated page or email.
Plain-text templates (``.txt``) are rendered verbatim.
"""

import re
from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

TEMPLATES_DIR = Path(__file__).resolve().parents[2] / "templates"

_NON_DIAL = re.compile(r"[^\d+]")


def _tel_filter(value: str | None) -> str:
    """Strip a display phone number down to what a ``tel:`` link accepts."""
    if not value:
        return ""
    return _NON_DIAL.sub("", value)


def create_jinja_env(templates_dir: Path | None = None) -> Environment:
    """Create and configure the Jinja2 environment."""
    env = Environment(
        loader=FileSystemLoader(str(templates_dir or TEMPLATES_DIR)),
        autoescape=select_autoescape(["html"]),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["tel"] = _tel_filter
    return env


@lru_cache
def get_jinja_env() -> Environment:
    """Shared environment (lazy singleton)."""
    return create_jinja_env()

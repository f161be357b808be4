"""Jinja2 rendering of packaged scaffold templates."""

from functools import lru_cache
from pathlib import Path
import re
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

TEMPLATE_DIR = Path(__file__).parent / "templates"


def package_name(name: str) -> str:
    """npm package name for a project: lower-cased, whitespace runs as ``-``."""
    return re.sub(r"\s+", "-", name.lower())


class TemplateRenderer:
    """Renders ``.j2`` templates from a template directory.

    Rendering is a pure function of the template and the context: no globals
    that depend on time or environment are exposed to templates.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        self.template_dir = Path(template_dir or TEMPLATE_DIR)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["package_name"] = package_name

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a template relative to the template directory."""
        template = self.env.get_template(template_path)
        return template.render(**context)


@lru_cache
def get_renderer() -> TemplateRenderer:
    return TemplateRenderer()

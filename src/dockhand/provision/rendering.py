# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockhand/provision/rendering.py

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from dockhand.errors import TemplateRenderError

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


def _quote(value) -> str:
    # double-quoted with backslash escapes, the way systemd reads Environment=
    return json.dumps(str(value), ensure_ascii=False)


class TemplateRenderer:
    def __init__(self, templates_dir: Optional[Path] = None):
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir or TEMPLATES_DIR)),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )
        self.env.filters["quote"] = _quote

    def render(self, template_name: str, context: dict) -> str:
        try:
            tmpl = self.env.get_template(template_name)
            return tmpl.render(**context)
        except TemplateError as e:
            raise TemplateRenderError(f"failed to render {template_name}: {e}") from e


_default: Optional[TemplateRenderer] = None


def default_renderer() -> TemplateRenderer:
    global _default
    if _default is None:
        _default = TemplateRenderer()
    return _default

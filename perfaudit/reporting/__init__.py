"""Report renderers: console text, JSON and static HTML."""

from .console import render_console, score_bar
from .html import render_html
from .json_report import render_json

RENDERERS = {
    "console": render_console,
    "json": render_json,
    "html": render_html,
}

__all__ = ["RENDERERS", "render_console", "render_html", "render_json", "score_bar"]

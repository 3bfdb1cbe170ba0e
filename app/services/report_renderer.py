# app/services/report_renderer.py
"""HTML rendering of the filtered enrichment results."""
import json
from pathlib import Path
from typing import Any, Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape

from app.models.internal import NamedResult

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
REPORT_TEMPLATE = "report.html"


def answer_value(value: Any) -> str:
    """Strings render as-is; other JSON values keep their JSON spelling (true, null, 3)."""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


# Provider text is interpolated into the page, so autoescaping stays on.
_env = Environment(
    loader=FileSystemLoader(TEMPLATE_DIR),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)
_env.filters["answer_value"] = answer_value


def render_report(url: str, results: Sequence[NamedResult]) -> str:
    template = _env.get_template(REPORT_TEMPLATE)
    return template.render(url=url, results=list(results))

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable

from loguru import logger

from .models import CombinedResult, GenerationOutput, SimplePortfolioData


CONFIDENCE_COLORS = {
    "high": "#22c55e",
    "medium": "#eab308",
    "low": "#ef4444",
}

EVENT_TYPE_COLORS = {
    "Work": "#22d3ee",
    "Project": "#a78bfa",
    "Learning": "#34d399",
    "Achievement": "#fbbf24",
    "Community": "#f472b6",
    "Other": "#9ca3af",
}


def esc(s: Any) -> str:
    x = "" if s is None else str(s)
    return x.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;").replace('"', "&quot;")


def _items(values: Iterable[Any], cls: str = "") -> str:
    attr = f' class="{cls}"' if cls else ""
    return "\n".join([f"<li{attr}>{esc(v)}</li>" for v in values])


def _tags(values: Iterable[Any]) -> str:
    return " ".join([f'<span class="tag">{esc(v)}</span>' for v in values])


def render_timeline_html(output: GenerationOutput) -> str:
    cards = []
    for ev in output.timeline:
        color = EVENT_TYPE_COLORS.get(ev.type, EVENT_TYPE_COLORS["Other"])
        badge = CONFIDENCE_COLORS.get(ev.confidence, "#9ca3af")
        note = ""
        if ev.inference_explanation:
            note = f'<p class="note"><b>AI Note:</b> {esc(ev.inference_explanation)}</p>'
        tags = f'<div class="tags">{_tags(ev.tags)}</div>' if ev.tags else ""
        cards.append(f"""
  <div class="card">
    <div class="meta"><span>{esc(ev.date)}</span> <span class="badge" style="border-color:{badge};color:{badge}">{esc(ev.confidence)}</span></div>
    <h3>{esc(ev.title)}</h3>
    <div class="type" style="color:{color}">{esc(ev.type)}</div>
    <ul>{_items(ev.bullets)}</ul>
    {tags}
    {note}
  </div>""")

    verify_html = ""
    if output.needs_user_verification:
        rows = "\n".join(
            [f"<li><b>{esc(v.item)}</b> — {esc(v.reason)}</li>" for v in output.needs_user_verification]
        )
        verify_html = f"""
  <div class="card">
    <div class="label">Needs your verification</div>
    <ul>{rows}</ul>
  </div>"""

    return "\n".join(cards) + verify_html


def render_simple_portfolio_html(data: SimplePortfolioData) -> str:
    experience_html = "\n".join([
        f"""
    <div class="entry">
      <div class="meta"><b>{esc(x.title)}</b> — {esc(x.company)} <span class="date">{esc(x.date)}</span></div>
      <ul>{_items(x.bullets)}</ul>
    </div>"""
        for x in data.experience
    ])

    projects_html = "\n".join([
        f"""
    <div class="entry">
      <div class="meta"><b>{esc(p.title)}</b> <span class="date">{esc(p.date)}</span></div>
      <p>{esc(p.description)}</p>
      <div class="tags">{_tags(p.tech_stack)}</div>
    </div>"""
        for p in data.projects
    ])

    skills_html = "\n".join([
        f"<li><b>{esc(s.category)}:</b> {esc(', '.join(s.list))}</li>" for s in data.skills
    ])

    return f"""
  <div class="header">
    <h2>{esc(data.name)}</h2>
    <div class="subtitle">{esc(data.title)}</div>
  </div>

  <div class="card">
    <div class="label">Summary</div>
    <p>{esc(data.summary)}</p>
  </div>

  <div class="card">
    <div class="label">Experience</div>
    {experience_html}
  </div>

  <div class="card">
    <div class="label">Projects</div>
    {projects_html}
  </div>

  <div class="card">
    <div class="label">Skills</div>
    <ul>{skills_html}</ul>
  </div>"""


def render_page(title: str, body: str) -> str:
    return f"""<!doctype html>
<html>
<head>
  <meta charset="utf-8" />
  <title>{esc(title)}</title>
  <style>
    body {{ font-family: -apple-system, BlinkMacSystemFont, Segoe UI, Roboto, Helvetica, Arial, sans-serif; margin: 28px; color: #e5e7eb; background: #1f2937; }}
    h1 {{ margin-bottom: 6px; }}
    h3 {{ margin: 8px 0 2px; }}
    .meta {{ color: #9ca3af; font-size: 14px; }}
    .card {{ border: 1px solid #374151; border-radius: 10px; padding: 14px 16px; margin: 12px 0; }}
    .label {{ font-weight: 700; margin-bottom: 8px; color: #22d3ee; }}
    .badge {{ border: 1px solid; border-radius: 999px; padding: 0 8px; font-size: 12px; }}
    .type {{ font-weight: 600; font-size: 14px; }}
    .tag {{ display: inline-block; background: #374151; border-radius: 999px; padding: 2px 10px; margin: 0 6px 6px 0; font-size: 12px; }}
    .note {{ color: #6b7280; font-style: italic; font-size: 12px; }}
    .date {{ float: right; }}
    .entry {{ margin-bottom: 12px; }}
    ul {{ margin-top: 6px; }}
  </style>
</head>
<body>
  <h1>{esc(title)}</h1>
{body}
</body>
</html>
"""


def export_html(result: CombinedResult, mode: str, out_dir: Path) -> Path:
    """
    Write the product shown in `mode` ("deepfolio" or "simple") to
    <out_dir>/<mode>-portfolio.html.
    """
    mode = str(getattr(mode, "value", mode))
    if mode == "deepfolio":
        if result.timeline is None:
            raise ValueError("No timeline to export")
        html = render_page("DeepFolio Timeline", render_timeline_html(result.timeline))
    elif mode == "simple":
        if result.simple_portfolio is None:
            raise ValueError("No simple portfolio to export")
        data = result.simple_portfolio
        html = render_page(f"{data.name} — Portfolio", render_simple_portfolio_html(data))
    else:
        raise ValueError(f"Unknown output mode: {mode}")

    out_path = Path(out_dir) / f"{mode}-portfolio.html"
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(html, encoding="utf-8")
    except OSError as e:
        logger.error(f"Failed to export {mode} portfolio: {e}")
        raise
    return out_path

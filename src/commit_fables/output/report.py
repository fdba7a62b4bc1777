"""Story export to Markdown and JSON."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..narrative.story import Story

EXPORT_FORMATS = ("json", "markdown")


def get_template_env() -> Environment:
    """Get Jinja2 environment for export templates.

    Markdown output, so no HTML autoescaping.
    """
    template_dir = Path(__file__).parent / "templates"
    return Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )


def export_markdown(story: Story, exported_at: datetime | None = None) -> str:
    """Render a story as a Markdown document.

    Args:
        story: Assembled story
        exported_at: Export timestamp; defaults to now (UTC)

    Returns:
        Markdown text
    """
    exported_at = exported_at or datetime.now(timezone.utc)
    template = get_template_env().get_template("story.md.j2")
    return template.render(
        story=story,
        persona_emoji=story.persona.emoji,
        confidence=f"{story.persona.confidence * 100:.0f}%",
        traits=", ".join(t.value for t in story.persona.traits),
        exported_at=exported_at.isoformat(),
    )


def export_json(story: Story, exported_at: datetime | None = None) -> dict[str, Any]:
    """Build the export envelope: title, content, metadata and export time."""
    exported_at = exported_at or datetime.now(timezone.utc)
    data = story.to_dict()
    return {
        "title": story.title,
        "content": story.text,
        "metadata": {
            "generated_at": data["created_at"],
            "style": data["style"],
            "persona": data["persona"],
            "stats": data["stats"],
        },
        "story": data,
        "exported_at": exported_at.isoformat(),
    }


def write_export(story: Story, output_path: Path, fmt: str = "json") -> Path:
    """Write a story export to disk.

    Args:
        story: Assembled story
        output_path: Destination file
        fmt: "json" or "markdown"

    Returns:
        Path to the written file
    """
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unknown export format {fmt!r}; expected one of {EXPORT_FORMATS}")

    output_path.parent.mkdir(parents=True, exist_ok=True)

    if fmt == "markdown":
        output_path.write_text(export_markdown(story), encoding="utf-8")
    else:
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(export_json(story), f, indent=2)

    return output_path

"""Export: resolve page fields, build the sidecar JSON, and write output files"""

import json
from datetime import datetime
from pathlib import Path
from typing import Optional

from wmd.core.models import Heading, ParsedDoc, RenderedDoc, Sidecar
from wmd.core.registry import Registry


def resolve_title(parsed: ParsedDoc, registry: Optional[Registry] = None) -> str:
    """Registry title, then frontmatter title, then the article id."""
    entry = registry.article(parsed.id) if registry else None
    if entry and entry.title:
        return entry.title
    title = parsed.metadata.get('title')
    return title if isinstance(title, str) and title else parsed.id


def resolve_category(parsed: ParsedDoc, registry: Optional[Registry] = None) -> dict[str, str]:
    """Frontmatter category, then the registry entry's; label from registry categories when known."""
    entry = registry.article(parsed.id) if registry else None
    cat_id = parsed.metadata.get('category')
    if not isinstance(cat_id, str) or not cat_id:
        cat_id = entry.category if entry else ''
    known = registry.category(cat_id) if registry and cat_id else None
    return {"id": cat_id, "label": (known.label if known and known.label else cat_id)}


def build_sidecar(
    parsed: ParsedDoc,
    rendered: RenderedDoc,
    headings: list[Heading],
    registry: Optional[Registry] = None,
    rendered_at: Optional[datetime] = None,
    ) -> Sidecar:
    """Build the sidecar describing one rendered article."""
    return Sidecar(
        id=parsed.id,
        slug=parsed.slug,
        path=str(parsed.path) if parsed.path else "",
        title=resolve_title(parsed, registry),
        category=resolve_category(parsed, registry),
        hash=parsed.hash,
        rendered_at=(rendered_at or datetime.now()).isoformat(timespec='seconds'),
        metadata=dict(rendered.metadata),
        outline=headings,
    )


def read_sidecar(json_path: Path) -> Optional[dict]:
    """Return an existing sidecar as a dict, or None if missing or unreadable."""
    if not json_path.exists():
        return None
    try:
        data = json.loads(json_path.read_text(encoding='utf-8'))
    except (OSError, ValueError):
        return None
    return data if isinstance(data, dict) else None


def is_current(
    parsed: ParsedDoc,
    previous: Optional[dict],
    html_path: Path,
    registry: Optional[Registry] = None,
    ) -> bool:
    """True when the written outputs already reflect this source and registry.

    The fragment must exist, and the sidecar must record the same source hash
    and the same resolved title and category.
    """
    if previous is None or not html_path.exists():
        return False
    return (
        previous.get('hash') == parsed.hash
        and previous.get('title') == resolve_title(parsed, registry)
        and previous.get('category') == resolve_category(parsed, registry)
    )


def output_paths(dest_dir: Path, slug: str) -> tuple[Path, Path]:
    return dest_dir / f"{slug}.html", dest_dir / f"{slug}.json"


def write_doc(
    parsed: ParsedDoc,
    rendered: RenderedDoc,
    headings: list[Heading],
    dest_dir: Path,
    registry: Optional[Registry] = None,
    indent: int = 2,
    ) -> tuple[Path, Path]:
    """Write the HTML fragment + sidecar JSON for a single article.

    Returns (html_path, json_path).
    """
    dest_dir.mkdir(parents=True, exist_ok=True)
    html_path, json_path = output_paths(dest_dir, parsed.slug)

    sidecar = build_sidecar(parsed, rendered, headings, registry)
    html_path.write_text(rendered.html + "\n", encoding='utf-8')
    json_path.write_text(
        json.dumps(sidecar.model_dump(), indent=indent or None, ensure_ascii=False),
        encoding='utf-8',
    )
    return html_path, json_path

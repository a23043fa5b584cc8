"""Pipeline step functions: discover, render, and export orchestration"""

import logging
from pathlib import Path
from typing import Optional

from wmd.core.export import is_current, output_paths, read_sidecar, write_doc
from wmd.core.parse import discover_files, parse_file
from wmd.core.registry import Registry
from wmd.core.render import render_parsed


log = logging.getLogger(__name__)


def _dest_dir(source: Path, root: Path, output_dir: Path) -> Path:
    """Mirror the source file's directory below root inside output_dir."""
    if root.is_file():
        return output_dir
    return output_dir / source.relative_to(root).parent


def run_render(
    path: str,
    output_dir: Path,
    registry: Optional[Registry] = None,
    force: bool = False,
    indent: int = 2,
    ) -> tuple[dict[str, int], list[tuple[str, str, Path]]]:
    """Render every .wmd file under path into output_dir.

    Returns (counts, results) where results holds (status, slug, html_path)
    per file and status is 'created', 'updated' or 'unchanged'. Files whose
    outputs are current (see is_current) are skipped unless force.
    """
    root = Path(path)
    counts = {"created": 0, "updated": 0, "unchanged": 0}
    results = []
    for p in discover_files(root):
        try:
            parsed = parse_file(p)
            dest = _dest_dir(p, root, output_dir)
            html_path, json_path = output_paths(dest, parsed.slug)
            previous = read_sidecar(json_path)

            if not force and is_current(parsed, previous, html_path, registry):
                status = 'unchanged'
            else:
                rendered, headings = render_parsed(parsed)
                write_doc(parsed, rendered, headings, dest, registry, indent)
                status = 'created' if previous is None else 'updated'
        except Exception as e:
            raise RuntimeError(f"Failed to render {p}: {e}") from e

        log.info("%s: %s -> %s", status, p, html_path)
        counts[status] += 1
        results.append((status, parsed.slug, html_path))
    return counts, results

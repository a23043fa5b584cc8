"""File discovery and frontmatter extraction"""

import re
from pathlib import Path

from wmd.core.models import MetaValue, ParsedDoc
from wmd.core.utils.hashing import sha256
from wmd.core.utils.slug import slugify


DELIMITER = '---'
FIELD_RE = re.compile(r'^(\w+):\s*(.*)', re.ASCII)
WMD_EXTENSIONS = {'.wmd'}


def _coerce(key: str, value: str) -> MetaValue:
    """Apply the tags / boolean / string coercion rules to one value."""
    if key == 'tags':
        return [t.strip() for t in value.split(',') if t.strip()]
    if value == 'true':
        return True
    if value == 'false':
        return False
    return value


def parse_frontmatter(text: str) -> ParsedDoc:
    """Split a leading ``key: value`` block from the body.

    Lines that do not look like ``identifier: value`` are skipped. Without an
    opening delimiter the whole input is body. An unclosed block runs to the
    end of the input.
    """
    lines = text.split('\n')
    metadata: dict[str, MetaValue] = {}
    if not lines or lines[0].strip() != DELIMITER:
        return ParsedDoc(metadata=metadata, body=text)

    i = 1
    while i < len(lines) and lines[i].strip() != DELIMITER:
        m = FIELD_RE.match(lines[i])
        if m:
            key = m.group(1)
            metadata[key] = _coerce(key, m.group(2).strip())
        i += 1

    return ParsedDoc(metadata=metadata, body='\n'.join(lines[i + 1:]))


def discover_files(path: Path) -> list[Path]:
    """Return sorted .wmd files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in WMD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.suffix in WMD_EXTENSIONS)


def parse_file(path: Path) -> ParsedDoc:
    """Read a single .wmd file into a ParsedDoc carrying id, slug and hash."""
    raw = path.read_text(encoding='utf-8')
    parsed = parse_frontmatter(raw)
    return ParsedDoc(
        metadata=parsed.metadata,
        body=parsed.body,
        path=path,
        id=path.stem,
        slug=slugify(path.stem) or 'article',
        hash=sha256(raw),
    )

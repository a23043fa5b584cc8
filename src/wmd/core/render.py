"""Public entry point: WMD source text -> {metadata, html}"""

from wmd.core.models import Heading, ParsedDoc, RenderedDoc
from wmd.core.parse import parse_frontmatter
from wmd.core.transform.blocks import render_blocks


def render_parsed(parsed: ParsedDoc) -> tuple[RenderedDoc, list[Heading]]:
    """Render an already split document, also returning its heading outline."""
    headings: list[Heading] = []
    html = render_blocks(parsed.body, headings)
    return RenderedDoc(metadata=parsed.metadata, html=html), headings


def render(text: str) -> RenderedDoc:
    """Convert a full WMD document (frontmatter + body) into metadata and an HTML fragment."""
    rendered, _ = render_parsed(parse_frontmatter(text))
    return rendered

"""HTML escaping shared by the block and inline transformers"""

_ENTITIES = str.maketrans({
    '&': '&amp;',
    '<': '&lt;',
    '>': '&gt;',
    '"': '&quot;',
    "'": '&#39;',
})


def escape_html(text: str) -> str:
    """Escape the five HTML-significant characters, ampersand included."""
    return str(text).translate(_ENTITIES)

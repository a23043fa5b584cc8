"""Article registry: a category list plus split article files merged into one view"""

import json
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ValidationError

from wmd.core.models import Article, Category


class Registry(BaseModel):
    categories: list[Category] = []
    articles: list[Article] = []

    def article(self, article_id: str) -> Optional[Article]:
        """Return the first article with the given id, or None."""
        return next((a for a in self.articles if a.id == article_id), None)

    def category(self, category_id: str) -> Optional[Category]:
        return next((c for c in self.categories if c.id == category_id), None)


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding='utf-8'))
    except OSError as e:
        raise ValueError(f"Cannot read registry file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in registry file {path}: {e}") from e


def _site_root(index_path: Path) -> Path:
    """Split-file paths are relative to the site root (parent of a config/ dir)."""
    parent = index_path.parent
    return parent.parent if parent.name == 'config' else parent


def load_registry(index_path: Path) -> Registry:
    """Load an index ``{categories, files}`` and concatenate the article arrays in file order.

    Raises ValueError if the index or any split file is unreadable, is not
    valid JSON, or does not have the expected shape.
    """
    index = _read_json(index_path)
    if not isinstance(index, dict):
        raise ValueError(f"Invalid registry index {index_path}: expected an object")

    root = _site_root(index_path)
    articles: list[Any] = list(index.get('articles') or [])
    for name in index.get('files') or []:
        chunk = _read_json(root / name)
        if not isinstance(chunk, list):
            raise ValueError(f"Invalid registry file {root / name}: expected an array of articles")
        articles.extend(chunk)

    try:
        return Registry(categories=index.get('categories') or [], articles=articles)
    except ValidationError as e:
        raise ValueError(f"Invalid registry {index_path}: {e}") from e

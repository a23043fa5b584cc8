"""Data models for parsed and rendered WMD documents"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


MetaValue = Union[bool, str, list[str]]


@dataclass(frozen=True)
class ParsedDoc:
    """Frontmatter split from the body; not persisted."""
    metadata: dict[str, MetaValue]
    body:     str
    path:     Optional[Path] = None
    id:       str = ""          # article id (file stem)
    slug:     str = ""
    hash:     str = ""          # sha256 of the full source text


class RenderedDoc(BaseModel):
    """Public output contract: frontmatter metadata plus an HTML fragment."""
    model_config = ConfigDict(frozen=True)

    metadata: dict[str, MetaValue] = {}
    html: str = ""


class Heading(BaseModel):
    """One h2-h4 heading of a rendered document, in document order."""
    level: int = Field(..., ge=2, le=4)
    text: str
    anchor: str


class Category(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    label: str = ""


class Article(BaseModel):
    """A registry entry; unknown keys are kept as extras."""
    model_config = ConfigDict(extra="allow")

    id: str
    title: str = ""
    category: str = ""


class Sidecar(BaseModel):
    """JSON written next to each rendered fragment."""
    id: str
    slug: str
    path: str
    title: str
    category: dict[str, str] = {}
    hash: str
    rendered_at: str
    metadata: dict[str, Any] = {}
    outline: list[Heading] = []

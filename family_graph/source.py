"""
source.py - Sources and the citations that attach them to events.

Module: family_graph.source
"""
from __future__ import annotations

__all__ = ['Source', 'GeneralCitation']

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from .life_event import TimelineEvent


class Source:
    """
    A source document or collection.

    Attributes:
        id (str): Canonical identifier.
        title (str): Title of the source.
        search_link (str): URL for searching the source, if any.
        repository_name (str): Name of the holding repository.
        tags (List[str]): Free-form tags.
        event_citations (List[TimelineEvent]): Events citing this source.
    """
    __slots__ = ['id', 'title', 'search_link', 'repository_name', 'tags', 'event_citations']

    def __init__(self, id: str, title: str = ""):
        self.id = id
        self.title = title
        self.search_link = ""
        self.repository_name = ""
        self.tags: List[str] = []
        self.event_citations: List['TimelineEvent'] = []

    def __repr__(self) -> str:
        return f"Source(id={self.id!r}, title={self.title!r})"


@dataclass
class GeneralCitation:
    """A reference from an event to a source, or a free-text justification."""
    detail: str
    source: Optional[Source] = None
    id: str = ""
    url: str = ""
    transcription: List[str] = field(default_factory=list)

"""Keycloak community forum (Discourse) search.

Lets a caller look up how others solved a similar Keycloak problem. This is
the one collaborator that does not talk to the Keycloak Admin API and needs no
realm or credentials.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import List

import requests

logger = logging.getLogger(__name__)

DEFAULT_DISCOURSE_URL = "https://keycloak.discourse.group"


@dataclass(frozen=True)
class Post:
    id: int
    name: str
    username: str
    topic_id: int
    blurb: str


@dataclass(frozen=True)
class Topic:
    id: int
    title: str
    slug: str
    posts_count: int


@dataclass(frozen=True)
class SearchResult:
    posts: List[Post] = field(default_factory=list)
    topics: List[Topic] = field(default_factory=list)


class DiscourseSearchService:
    """Thin client for the public ``/search.json`` endpoint."""

    def __init__(self, base_url: str = DEFAULT_DISCOURSE_URL, timeout: float = 5):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def search(self, query: str) -> SearchResult:
        """Run a free-text search and keep the fields an agent needs.

        Raises:
            requests.HTTPError: If the forum answers with an error status
        """
        resp = requests.request(
            "GET",
            f"{self.base_url}/search.json",
            params={"q": query},
            headers={"Accept": "application/json"},
            timeout=self.timeout,
        )
        resp.raise_for_status()
        payload = resp.json() or {}
        logger.debug("Discourse search '%s' returned %d posts", query, len(payload.get("posts") or []))
        return SearchResult(
            posts=[
                Post(
                    id=post.get("id", 0),
                    name=post.get("name") or "",
                    username=post.get("username") or "",
                    topic_id=post.get("topic_id", 0),
                    blurb=post.get("blurb") or "",
                )
                for post in payload.get("posts") or []
            ],
            topics=[
                Topic(
                    id=topic.get("id", 0),
                    title=topic.get("title") or "",
                    slug=topic.get("slug") or "",
                    posts_count=topic.get("posts_count", 0),
                )
                for topic in payload.get("topics") or []
            ],
        )

"""Blog documents.

Learn: The WordPress REST API returns rendered HTML inside
{"rendered": "..."} wrappers. A Document keeps only what the counter
needs — the title and body as plain text.
"""

import html
import re
from dataclasses import dataclass
from typing import Any, Optional

_TAG_RE = re.compile(r"<[^>]+>")
# Block CSS, embeds and scripts carry no prose.
_NON_TEXT_RE = re.compile(r"<(script|style|noscript)[^>]*>.*?</\1>", re.I | re.S)


def strip_html(markup: str) -> str:
    """Drop script/style blocks and tags, then unescape entities.

    Tags become spaces so words don't fuse.
    """
    markup = _NON_TEXT_RE.sub(" ", markup)
    return html.unescape(_TAG_RE.sub(" ", markup))


def _rendered(field: Any) -> str:
    if isinstance(field, dict):
        field = field.get("rendered", "")
    if not isinstance(field, str):
        return ""
    return strip_html(field)


@dataclass(frozen=True)
class Document:
    """One fetched blog post."""

    title: str
    body: str
    id: Optional[int] = None

    @property
    def text(self) -> str:
        return f"{self.title}\n{self.body}"

    @classmethod
    def from_wp_post(cls, post: dict) -> "Document":
        """Build a Document from a wp/v2/posts item."""
        return cls(
            title=_rendered(post.get("title")),
            body=_rendered(post.get("content")),
            id=post.get("id"),
        )

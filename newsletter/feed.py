"""RSS feed client: lists the newsletter's posts."""

from __future__ import annotations

import calendar
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

import feedparser

from newsletter.config import settings
from newsletter.scraper.cleaner import decode_entities, strip_tags
from newsletter.scraper.errors import FetchError
from newsletter.scraper.fetcher import fetch_url

logger = logging.getLogger(__name__)


@dataclass
class Post:
    """One feed entry."""

    title: str
    link: str
    published: Optional[datetime] = None
    snippet: str = ""


def _published(entry) -> Optional[datetime]:
    parsed = entry.get("published_parsed") or entry.get("updated_parsed")
    if not parsed:
        return None
    return datetime.fromtimestamp(calendar.timegm(parsed), tz=timezone.utc)


def _snippet(entry) -> str:
    raw = entry.get("summary") or ""
    text = decode_entities(strip_tags(raw))
    return re.sub(r"\s+", " ", text).strip()


def parse_feed(text: str) -> List[Post]:
    """Parse RSS/Atom *text* into posts, keeping feed order."""
    parsed = feedparser.parse(text)

    if parsed.bozo:
        if not parsed.entries:
            raise FetchError(f"Error fetching posts: {parsed.get('bozo_exception')}")
        logger.warning("Feed parsing warning: %s", parsed.get("bozo_exception"))

    posts: List[Post] = []
    for entry in parsed.entries:
        link = (entry.get("link") or "").strip()
        if not link:
            logger.info("Skipping feed entry without a link: %r", entry.get("title"))
            continue
        posts.append(
            Post(
                title=(entry.get("title") or "").strip(),
                link=link,
                published=_published(entry),
                snippet=_snippet(entry),
            )
        )
    return posts


def fetch_posts(feed_url: Optional[str] = None) -> List[Post]:
    """Download and parse the newsletter feed.

    Raises:
        FetchError: when the feed cannot be fetched or is unreadable.
    """
    url = feed_url or settings.feed_url
    raw = fetch_url(url)
    posts = parse_feed(raw.html)
    logger.info("Loaded %d posts from %s", len(posts), url)
    return posts


def search_posts(posts: List[Post], term: str) -> List[Post]:
    """Posts whose title or snippet contains *term* (case-insensitive)."""
    needle = term.strip().lower()
    if not needle:
        return list(posts)
    return [p for p in posts if needle in p.title.lower() or needle in p.snippet.lower()]

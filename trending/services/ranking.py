from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Any, Hashable, Iterable, Optional

from loguru import logger

from ..config import Biases
from ..errors import InvalidArgument


@dataclass(frozen=True)
class Item:
    id: Hashable
    answered_at: Optional[datetime]
    likes_count: int = 0
    # None means "resolve from the candidate set by parent_id"
    comments_count: Optional[int] = None
    parent_id: Optional[Hashable] = None
    content: Any = None


@dataclass(frozen=True)
class ScoredItem:
    item: Item
    score: float


@dataclass(frozen=True)
class TrendingPage:
    items: list[ScoredItem]
    page: int
    per_page: int
    total: int

    @property
    def has_more(self) -> bool:
        return (self.page + 1) * self.per_page < self.total

    @property
    def is_empty(self) -> bool:
        return not self.items


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(dt: datetime) -> datetime:
    # naive timestamps (sqlite, datetime.utcnow) are UTC
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def trending_score(likes_count: int, comments_count: int, seconds_since_answered: float, biases: Biases) -> float:
    # (likes * lb + 1) * (comments * cb + 1) / (t + time_bias + 1)
    numerator = (likes_count * biases.likes_bias + 1) * (comments_count * biases.comments_bias + 1)
    return numerator / (max(0.0, seconds_since_answered) + biases.time_bias + 1)


def seconds_since(answered_at: datetime, now: datetime) -> float:
    """Elapsed seconds, floored at 0 for answers stamped in the future."""
    return max(0.0, (as_utc(now) - as_utc(answered_at)).total_seconds())


def is_eligible(item: Item, now: datetime, max_days_since_posted: int) -> bool:
    if item.answered_at is None:
        return False
    if max_days_since_posted <= 0:
        return False
    return as_utc(now) - as_utc(item.answered_at) <= timedelta(days=max_days_since_posted)


def comment_counts(items: Iterable[Item]) -> Counter:
    """parent_id -> number of direct children. One level only."""
    return Counter(it.parent_id for it in items if it.parent_id is not None)


def id_key(value: Hashable) -> tuple:
    """Total order over opaque ids: grouped by type, then by value."""
    if isinstance(value, (int, float, str, bytes)):
        return (type(value).__name__, value)
    return (type(value).__name__, repr(value))


def validate_window(page: int, per_page: int) -> None:
    if isinstance(page, bool) or not isinstance(page, int) or page < 0:
        raise InvalidArgument(f"page must be an integer >= 0, got {page!r}")
    if isinstance(per_page, bool) or not isinstance(per_page, int) or per_page <= 0:
        raise InvalidArgument(f"per_page must be an integer > 0, got {per_page!r}")


def rank(items: Iterable[Item], now: datetime, biases: Biases, page: int = 0, per_page: int = 10) -> TrendingPage:
    """Score eligible items against a single ``now`` and return one page.

    Order is score descending, then most recently answered, then id
    ascending, so equal scores never depend on input order.
    """
    validate_window(page, per_page)
    biases.validate()
    candidates = list(items)
    index = comment_counts(candidates)

    scored: list[ScoredItem] = []
    for it in candidates:
        if not is_eligible(it, now, biases.max_days_since_posted):
            continue
        comments = it.comments_count if it.comments_count is not None else index.get(it.id, 0)
        score = trending_score(it.likes_count, comments, seconds_since(it.answered_at, now), biases)
        scored.append(ScoredItem(item=replace(it, comments_count=comments), score=score))

    scored.sort(key=lambda s: id_key(s.item.id))
    scored.sort(key=lambda s: (s.score, as_utc(s.item.answered_at)), reverse=True)

    offset = page * per_page
    window = scored[offset:offset + per_page]
    logger.debug(
        "trending pass: {} candidates, {} eligible, page {} ({} items)",
        len(candidates), len(scored), page, len(window),
    )
    return TrendingPage(items=window, page=page, per_page=per_page, total=len(scored))

from __future__ import annotations

from datetime import datetime, timedelta

from sqlalchemy import func, select
from sqlalchemy.orm import Session, aliased

from ..models import Like, Question
from .ranking import Item, as_utc


def to_item(q: Question, likes_count: int, comments_count: int) -> Item:
    return Item(
        id=q.id,
        answered_at=q.answer_created_at,
        likes_count=int(likes_count or 0),
        comments_count=int(comments_count or 0),
        parent_id=q.parent_id,
        content={"content": q.content, "answer": q.answer},
    )


def load_candidates(db: Session, now: datetime, max_days_since_posted: int) -> list[Item]:
    """Answered questions inside the window, with like and comment counts.

    Comments are questions whose parent_id points at the row; only direct
    children are counted.
    """
    child = aliased(Question)
    likes_count = (
        select(func.count(Like.id))
        .where(Like.question_id == Question.id)
        .correlate(Question)
        .scalar_subquery()
    )
    comments_count = (
        select(func.count(child.id))
        .where(child.parent_id == Question.id)
        .correlate(Question)
        .scalar_subquery()
    )
    # answer_created_at is stored as naive UTC
    cutoff = (as_utc(now) - timedelta(days=max(0, max_days_since_posted))).replace(tzinfo=None)
    rows = (
        db.query(Question, likes_count.label("likes_count"), comments_count.label("comments_count"))
        .filter(Question.answer_created_at.isnot(None))
        .filter(Question.answer_created_at >= cutoff)
        .all()
    )
    return [to_item(q, likes, comments) for q, likes, comments in rows]

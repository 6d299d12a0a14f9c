from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.orm import Session

from ..config import Biases, biases_from_env
from .candidates import load_candidates
from .ranking import TrendingPage, rank, utc_now, validate_window


def trending_questions(
    db: Session,
    page: int = 0,
    per_page: int = 10,
    biases: Optional[Biases] = None,
    clock: Callable[[], datetime] = utc_now,
) -> TrendingPage:
    """One trending page. Config and ``now`` are read once for the whole pass."""
    validate_window(page, per_page)
    cfg = (biases or biases_from_env()).validate()
    now = clock()
    items = load_candidates(db, now, cfg.max_days_since_posted)
    return rank(items, now, cfg, page=page, per_page=per_page)

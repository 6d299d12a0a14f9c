from datetime import timedelta

from factories import make_question
from trending.services.candidates import load_candidates


def test_loads_answered_questions_with_counts(db, now):
    q = make_question(db, "popular", answered_at=now - timedelta(hours=1), likes=3)
    make_question(db, "reply one", answered_at=now, parent=q)
    make_question(db, "reply two", answered_at=None, parent=q)
    db.commit()

    items = {it.content["content"]: it for it in load_candidates(db, now, 7)}

    assert set(items) == {"popular", "reply one"}
    assert items["popular"].likes_count == 3
    # unanswered children still count as comments
    assert items["popular"].comments_count == 2
    assert items["reply one"].parent_id == q.id
    assert items["reply one"].comments_count == 0


def test_comment_count_is_one_level(db, now):
    root = make_question(db, "root", answered_at=now)
    child = make_question(db, "child", answered_at=now, parent=root)
    make_question(db, "grandchild", answered_at=now, parent=child)
    db.commit()

    items = {it.content["content"]: it for it in load_candidates(db, now, 7)}
    assert items["root"].comments_count == 1
    assert items["child"].comments_count == 1


def test_cutoff_is_pushed_into_the_query(db, now):
    make_question(db, "on the boundary", answered_at=now - timedelta(days=7))
    make_question(db, "too old", answered_at=now - timedelta(days=7, seconds=1))
    make_question(db, "unanswered", answered_at=None, likes=5)
    db.commit()

    contents = [it.content["content"] for it in load_candidates(db, now, 7)]
    assert contents == ["on the boundary"]


def test_payload_carries_answer(db, now):
    make_question(db, "what?", answered_at=now, answer="that")
    db.commit()

    [item] = load_candidates(db, now, 1)
    assert item.content == {"content": "what?", "answer": "that"}
    assert item.answered_at == now

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .db import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    username: Mapped[str] = mapped_column(String(50), unique=True, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    likes: Mapped[list[Like]] = relationship("Like", back_populates="user")  # type: ignore[name-defined]


class Question(Base):
    __tablename__ = "questions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    content: Mapped[str] = mapped_column(Text)
    answer: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    # null until the recipient answers; unanswered questions never trend
    answer_created_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True, index=True)
    parent_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("questions.id"), nullable=True, index=True)
    from_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("users.id"), nullable=True)
    to_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("users.id"), nullable=True)
    views: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    likes: Mapped[list[Like]] = relationship("Like", back_populates="question", cascade="all, delete-orphan")  # type: ignore[name-defined]
    parent: Mapped[Optional[Question]] = relationship("Question", remote_side="Question.id", back_populates="children")  # type: ignore[name-defined]
    children: Mapped[list[Question]] = relationship("Question", back_populates="parent")  # type: ignore[name-defined]


class Like(Base):
    __tablename__ = "likes"
    __table_args__ = (
        UniqueConstraint("user_id", "question_id", name="uq_like_once"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"))
    question_id: Mapped[int] = mapped_column(Integer, ForeignKey("questions.id"), index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    user: Mapped[User] = relationship("User", back_populates="likes")
    question: Mapped[Question] = relationship("Question", back_populates="likes")

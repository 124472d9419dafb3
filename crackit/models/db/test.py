"""
Published test model.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

import sqlalchemy as sa
from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from crackit.database import Base
from crackit.utils.tags import dump_tag_ids, parse_tag_ids

if TYPE_CHECKING:
    from crackit.models.db.lookup import Class, University
    from crackit.models.db.review import Review
    from crackit.models.db.saved_test import SavedTest
    from crackit.models.db.user import User


class Test(Base):
    """
    A published multiple-choice test.
    Questions are embedded as a JSON list, tags as a JSON-encoded list of tag ids.
    """

    __tablename__ = "tests"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    questions_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")

    # References
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    university_id: Mapped[int] = mapped_column(
        ForeignKey("universities.id"), nullable=False, index=True
    )
    class_id: Mapped[int] = mapped_column(
        ForeignKey("classes.id"), nullable=False, index=True
    )
    tags: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True,
    )

    # Relationships
    owner: Mapped["User"] = relationship("User", back_populates="tests")
    university: Mapped["University"] = relationship("University")
    class_: Mapped["Class"] = relationship("Class")
    reviews: Mapped[list["Review"]] = relationship(
        "Review", back_populates="test", cascade="all, delete-orphan"
    )
    saves: Mapped[list["SavedTest"]] = relationship(
        "SavedTest", back_populates="test", cascade="all, delete-orphan"
    )

    @property
    def questions(self) -> list[dict[str, Any]]:
        """Parse questions from JSON."""
        if not self.questions_json:
            return []
        try:
            parsed = json.loads(self.questions_json)
        except (json.JSONDecodeError, TypeError):
            return []
        return parsed if isinstance(parsed, list) else []

    @questions.setter
    def questions(self, value: list[dict[str, Any]]) -> None:
        """Serialize questions to JSON."""
        self.questions_json = json.dumps(value or [], ensure_ascii=False)

    @property
    def tag_ids(self) -> list[int]:
        """Parse tag ids from the stored JSON string."""
        return parse_tag_ids(self.tags)

    @tag_ids.setter
    def tag_ids(self, value: list[int]) -> None:
        """Serialize tag ids to a JSON string."""
        self.tags = dump_tag_ids(value or [])

    def __repr__(self) -> str:
        return f"<Test(id={self.id}, name='{self.name}', user_id={self.user_id})>"

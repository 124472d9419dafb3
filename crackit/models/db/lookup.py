"""University, Class and Tag lookup models.

Names are unique case-insensitively, matching the lower(name) lookups
in the find-or-create service.
"""
from __future__ import annotations

from sqlalchemy import ForeignKey, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from crackit.database import Base


class University(Base):
    __tablename__ = "universities"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    classes: Mapped[list["Class"]] = relationship(
        "Class", back_populates="university", cascade="all, delete-orphan"
    )


class Class(Base):
    __tablename__ = "classes"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    university_id: Mapped[int] = mapped_column(
        ForeignKey("universities.id", ondelete="CASCADE"), nullable=False, index=True
    )

    university: Mapped["University"] = relationship("University", back_populates="classes")


class Tag(Base):
    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)


Index("uq_universities_name_lower", func.lower(University.name), unique=True)
Index(
    "uq_classes_university_name_lower",
    Class.university_id,
    func.lower(Class.name),
    unique=True,
)
Index("uq_tags_name_lower", func.lower(Tag.name), unique=True)

"""Database models."""
from crackit.models.db.user import User, Session
from crackit.models.db.lookup import Class, Tag, University
from crackit.models.db.test import Test
from crackit.models.db.review import Review
from crackit.models.db.saved_test import SavedTest

__all__ = [
    "User",
    "Session",
    "Class",
    "Tag",
    "University",
    "Test",
    "Review",
    "SavedTest",
]

"""API route modules."""
from crackit.routes import auth, lookups, quizzes, reviews, saved, tests, users

__all__ = ["auth", "lookups", "quizzes", "reviews", "saved", "tests", "users"]

"""Main FastAPI application with modularized routes."""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from crackit.core.logging_setup import setup_console_logging
from crackit.database import init_db
from crackit.routes import auth, lookups, quizzes, reviews, saved, tests, users
from crackit.services.cleanup_service import schedule_sessions_cleanup

setup_console_logging()

app = FastAPI(title="CrackIt API")

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def startup_events() -> None:
    """Initialize database and schedule cleanup tasks on startup."""
    init_db()
    schedule_sessions_cleanup()


@app.get("/", include_in_schema=False)
def index() -> RedirectResponse:
    return RedirectResponse(url="/docs")


# Include routers
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(quizzes.router)
app.include_router(tests.router)
app.include_router(reviews.router)
app.include_router(saved.router)
app.include_router(lookups.router)

from __future__ import annotations
import logging


def setup_console_logging(level: int = logging.INFO) -> None:
    """
    Call once at app start. Prints logs to console.
    """
    root = logging.getLogger()
    if root.handlers:
        # already configured (avoid duplicates)
        root.setLevel(level)
        return

    root.setLevel(level)
    h = logging.StreamHandler()
    fmt = logging.Formatter(
        "[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    h.setFormatter(fmt)
    root.addHandler(h)
    # SQL statement logging is too noisy for the console
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

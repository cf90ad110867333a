import logging
import sys
from deviflow.core.config import settings


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure logging for the application.

    Logs go to stdout with timestamps, levels and logger names so that the
    container runtime can collect them. Messages never include passwords or
    raw tokens.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)]
    )

    # SQLAlchemy echoes every statement at INFO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    return logging.getLogger("deviflow")


# Create global logger instance
logger = setup_logging(settings.LOG_LEVEL)

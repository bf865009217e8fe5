import sys
import logging
from typing import Any

from loguru import logger

from rosterboard.config.settings import settings

# Raw CSV/JSON bodies can be large; keep log lines readable
MAX_EXTRA_VALUE_LENGTH = 200

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def shorten_value(value: Any) -> Any:
    """Returns a copy of ``value`` with oversized strings cut down."""
    if isinstance(value, str) and len(value) > MAX_EXTRA_VALUE_LENGTH:
        return value[:MAX_EXTRA_VALUE_LENGTH] + f"... ({len(value)} chars)"
    if isinstance(value, dict):
        return {k: shorten_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [shorten_value(item) for item in value]
    return value


def _escape_template(text: str) -> str:
    # Literal text inside a loguru template: braces and markup tags
    return text.replace("{", "{{").replace("}", "}}").replace("<", r"\<")


def console_format(record: dict[str, Any]) -> str:
    """Format function for the console sink.

    Bound values are shortened into the rendered line only; the record
    itself (shared by every sink) is left untouched.
    """
    extra = record.get("extra") or {}
    template = CONSOLE_FORMAT
    if extra:
        shortened = shorten_value(dict(extra))
        rendered = " ".join(f"{key}={value!r}" for key, value in shortened.items())
        template += " | " + _escape_template(rendered)
    return template + "\n{exception}"


def setup_logging() -> None:
    """Configures Loguru logger based on application settings."""
    logger.remove()  # Remove default handler

    logger.add(
        sys.stderr,
        level=settings.log_level.upper(),
        format=console_format,
        colorize=True,
        backtrace=True,
        diagnose=True,
    )

    logger.info(f"Logging initialized with level: {settings.log_level}")

    # Intercept standard logging messages (httpx, httpcore)
    class InterceptHandler(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            # Get corresponding Loguru level if it exists
            try:
                level = logger.level(record.levelname).name
            except ValueError:
                level = record.levelno

            # Find caller from where originated the logged message
            frame, depth = logging.currentframe(), 2
            while frame.f_code.co_filename == logging.__file__:
                frame = frame.f_back
                depth += 1

            logger.opt(depth=depth, exception=record.exc_info).log(
                level, record.getMessage()
            )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    logger.info("Standard logging intercepted.")

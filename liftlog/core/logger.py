"""Logger configuration for LiftLog.

Modules log with structured fields (`logger.info("Plan created", user_id=...)`).
Those fields land in `record["extra"]` and are rendered after the message as
`key=value` pairs, or as JSON when the file sink is serialized.
"""

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def format_fields(extra: dict) -> str:
    """Render structured log fields as sorted `key=value` pairs."""
    return " ".join(f"{key}={extra[key]!r}" for key in sorted(extra))


def _with_fields(base: str, *, markup: bool):
    def formatter(record) -> str:
        fields = format_fields(record["extra"])
        # Rendered fields go into the template literally
        fields = fields.replace("{", "{{").replace("}", "}}")
        if markup:
            fields = fields.replace("<", "\\<")
        return f"{base} {fields}\n{{exception}}" if fields else f"{base}\n{{exception}}"

    return formatter


def setup_logger(
    level: str = "INFO",
    log_file: str | None = None,
    *,
    json_file: bool = False,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """Configure loguru with a console sink and an optional rotating file sink.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file. If None, only console logging.
        json_file: Write the file sink as one JSON object per line
        rotation: Log rotation size (e.g., "10 MB", "1 day")
        retention: Log retention period (e.g., "7 days", "1 month")
    """
    logger.remove()
    logger.add(sys.stderr, format=_with_fields(CONSOLE_FORMAT, markup=True), level=level, colorize=True)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            format="{message}" if json_file else _with_fields(FILE_FORMAT, markup=False),
            serialize=json_file,
            level=level,
            rotation=rotation,
            retention=retention,
            compression="zip",
            backtrace=True,
            diagnose=False,
        )

    logger.bind(json_file=json_file).info(f"Logger initialized with level={level}")

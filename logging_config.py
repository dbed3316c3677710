import logging
import os
from logging.handlers import RotatingFileHandler

LOGS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "logs")

LOG_FORMAT = ("%(asctime)s %(levelname)-8s "
              "[%(filename)s:%(lineno)d %(funcName)s()] "
              "%(message)s")

DEFAULT_LEVEL = logging.INFO


def resolve_level(level) -> int:
    """Accept either a logging constant or a level name such as "DEBUG"."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def configured_level() -> int:
    """Level from ``[env].log_level`` in settings.toml, INFO if it can't be read.

    ``markets log-level DEBUG`` edits that key, so every module logger picks
    it up on the next run.
    """
    from settings_service import SettingsService

    try:
        return resolve_level(SettingsService().log_level)
    except (OSError, KeyError, ValueError) as e:
        logging.getLogger(__name__).warning(f"Using INFO log level, settings not usable: {e}")
        return DEFAULT_LEVEL


def setup_logging(name="holiday_markets", log_file="holiday_markets.log", level=None,
                  max_bytes=5*1024*1024, backup_count=3):
    """Set up a module logger for the markets app.

    Each module gets its own rotating file in ./logs/ (date_parser.log,
    sheet_repo.log, ...) plus a console stream.

    Args:
        name: The name of the logger, usually ``__name__``.
        log_file: File name inside ./logs/, or an absolute path (tests pass
            a tmpdir path).
        level: Logging constant or level name; None reads settings.toml.
        max_bytes: Size at which the file handler rolls over.
        backup_count: Number of rolled-over files to keep.

    Returns:
        logger: The configured logger.

    Example usage:
    from logging_config import setup_logging
    logger = setup_logging(__name__, log_file="sheet_repo.log")
    """
    logger = logging.getLogger(name)
    # Streamlit reruns re-import page modules
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)

    os.makedirs(LOGS_DIR, exist_ok=True)
    if os.path.isabs(log_file):
        log_path = log_file
    else:
        log_path = os.path.join(LOGS_DIR, os.path.basename(log_file))

    file_handler = RotatingFileHandler(log_path, maxBytes=max_bytes, backupCount=backup_count, encoding='utf-8')
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    logger.setLevel(configured_level() if level is None else resolve_level(level))
    return logger

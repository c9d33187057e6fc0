from loguru import logger

from budget_tracker.config import Settings

# loguru's logger is process wide, so its sinks are tracked per process
# rather than per app instance
_configured_sinks = {}


def configure_logging(settings: Settings) -> int:
    """Add the rotating file sink once per log file and return its loguru id."""
    if settings.LOG_FILE not in _configured_sinks:
        _configured_sinks[settings.LOG_FILE] = logger.add(
            settings.LOG_FILE,
            rotation="500 MB",
            level=settings.LOG_LEVEL,
        )
    return _configured_sinks[settings.LOG_FILE]

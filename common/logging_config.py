# common/logging_config.py
import logging
import sys
from typing import Optional

from common.config import Settings, get_settings

_NOISY_LOGGERS = ("httpx", "httpcore", "asyncio")


def configure_logging(settings: Optional[Settings] = None) -> None:
    """
    Initialize stdout logging for applications embedding the client.

    The library itself only creates module loggers; calling this is optional.
    `mute_all_logs` disables everything below CRITICAL (CI, benchmarks).
    """
    settings = settings or get_settings()

    if settings.mute_all_logs:
        logging.disable(logging.CRITICAL)
        return

    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stdout,
    )

    # Transport libraries log every request at INFO
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

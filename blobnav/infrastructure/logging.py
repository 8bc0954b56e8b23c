import logging
import logging.handlers
import sys

import structlog

from blobnav.infrastructure.config import Settings
from blobnav.infrastructure.config import settings as default_settings


def setup_logging(settings: Settings | None = None) -> None:
    """Configure unified logging for structlog and the standard library.

    A daily rotating file under ``settings.log_dir`` is added when a log directory
    is configured; otherwise logs only go to stdout.
    """
    settings = settings or default_settings

    common_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if settings.app_env == "development":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            *common_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=common_processors,
        processor=renderer,
    )

    # Handlers
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    handlers: list[logging.Handler] = [stream_handler]

    if settings.log_dir is not None:
        settings.log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.TimedRotatingFileHandler(
            settings.log_dir / f"{settings.app_env}.log",
            when="midnight",
            interval=1,
            backupCount=7,
        )
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    # Root Logger
    root_logger = logging.getLogger()
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(settings.log_level.upper())

    # google-cloud-storage and fsspec log through their own loggers
    for logger_name in ("google.cloud.storage", "fsspec"):
        logging.getLogger(logger_name).setLevel(max(root_logger.level, logging.WARNING))

import logging
import sys

from pythonjsonlogger import jsonlogger

_SDK_LOGGERS = [
    "azure",
    "azure.core.pipeline.policies.http_logging_policy",
    "urllib3",
]


def setup_logging():
    """
    Configures and sets up structured JSON logging for the library.

    This function initializes a JSON formatter that includes timestamp, level,
    logger name and message. It replaces the default handlers of the root
    logger with a stdout stream handler, and quiets the storage SDK loggers,
    which log every HTTP request and response at INFO.

    Returns:
        logging.Logger: The configured root logger instance.
    """
    formatter = jsonlogger.JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO)
    root_logger.handlers = []
    root_logger.addHandler(stream_handler)

    for logger_name in _SDK_LOGGERS:
        sdk_logger = logging.getLogger(logger_name)
        sdk_logger.setLevel(logging.WARNING)

    return root_logger

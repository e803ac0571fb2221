"""Logging setup shared by the API, the refresh worker and the CLI."""
import logging
import sys
from typing import Optional, TextIO

from pythonjsonlogger import jsonlogger
from fasttld.config import settings

JSON_FORMAT = '%(asctime)s %(name)s %(levelname)s %(message)s %(filename)s %(lineno)d'
PLAIN_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(
    level: Optional[str] = None,
    json_output: bool = True,
    stream: Optional[TextIO] = None
) -> None:
    """
    Configure root logging.

    Args:
        level: Log level name, defaults to ``settings.log_level``
        json_output: Emit structured JSON records; plain text otherwise
        stream: Target stream, defaults to stdout
    """
    root = logging.getLogger()

    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)

    if json_output:
        formatter = jsonlogger.JsonFormatter(
            JSON_FORMAT,
            datefmt='%Y-%m-%dT%H:%M:%S%z',
            rename_fields={
                'asctime': 'timestamp',
                'levelname': 'level'
            }
        )
    else:
        formatter = logging.Formatter(PLAIN_FORMAT)

    handler.setFormatter(formatter)
    root.addHandler(handler)
    root.setLevel(getattr(logging, (level or settings.log_level).upper()))

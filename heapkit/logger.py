import logging
import os
import sys

_FORMAT = "%(levelname)s %(asctime)s %(filename)s:%(lineno)d] %(message)s"
_DATE_FORMAT = "%m-%d %H:%M:%S"

_root_logger = logging.getLogger("heapkit")
_root_logger.addHandler(logging.NullHandler())
_default_handler = None


class NewLineFormatter(logging.Formatter):
    """Indents continuation lines so multi-line messages keep the prefix column."""

    def format(self, record):
        msg = logging.Formatter.format(self, record)
        if record.message != "":
            parts = msg.split(record.message)
            msg = msg.replace("\n", "\r\n" + parts[0])
        return msg


def init_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def configure_logging(level: str | None = None) -> None:
    """Send heapkit and script records to stdout. Only entry points call this."""
    global _default_handler
    level = (level or os.environ.get("HEAPKIT_LOGGING_LEVEL", "INFO")).upper()
    root = logging.getLogger()
    if _default_handler is None:
        _default_handler = logging.StreamHandler(sys.stdout)
        _default_handler.setFormatter(NewLineFormatter(_FORMAT, datefmt=_DATE_FORMAT))
        root.addHandler(_default_handler)
    root.setLevel(level)
    _root_logger.setLevel(level)

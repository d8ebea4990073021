"""
Logging setup for the BRF Ellagården API.

``create_app`` calls ``setup_logging`` with ``LOG_LEVEL`` and
``LOG_FILE`` before it builds anything else, so the data store can
report what it loaded from ``DATA_DIR``.  Every module logs through
``logging.getLogger(__name__)``; records end up on the console and,
when ``LOG_FILE`` is set, in that file as well.
"""

import logging
from pathlib import Path
from typing import Optional


# The multipart parser logs every form part at DEBUG, which drowns out
# the API's own records whenever LOG_LEVEL=DEBUG and a document is uploaded.
QUIET_LOGGERS = ("multipart", "python_multipart")


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger for the API process.

    Parameters
    ----------
    level : str
        Logging level name from ``LOG_LEVEL`` (e.g. ``"DEBUG"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Value of ``LOG_FILE``.  Missing parent directories are created,
        so a path such as ``logs/api.log`` works on a fresh checkout.
    """
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger = logging.getLogger()
    if logger.handlers:
        # Handlers already present: uvicorn, pytest or an earlier create_app().
        return

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

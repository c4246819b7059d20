import logging
import os
from typing import Optional

from hoteldeck.config import Config

LOG_FORMAT = '%(asctime)s | %(name)s | %(levelname)s | %(message)s'


#-- function to initialize a logger that writes to a file, or to stderr when no file is configured
def setup_logger(name: str, log_file: Optional[str] = None, level=None):
    log_file = Config.LOG_FILE if log_file is None else log_file
    level = level if level is not None else getattr(logging, Config.LOG_LEVEL, logging.INFO)

    if log_file:
        directory = os.path.dirname(log_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        handler = logging.FileHandler(log_file)
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.hasHandlers():
        logger.addHandler(handler)
    else:
        handler.close()

    return logger

# neurostep/utils/logger.py
import logging
import sys
from neurostep.utils.config import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logger = logging.getLogger("neurostep")
logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

# Hot-reloads import this module again; drop the handlers from the previous import.
if logger.hasHandlers():
    logger.handlers.clear()

formatter = logging.Formatter(LOG_FORMAT)

stdout_handler = logging.StreamHandler(sys.stdout)
stdout_handler.setFormatter(formatter)
logger.addHandler(stdout_handler)

# Optional copy of the quiz log on disk (LOG_FILE)
if settings.log_file:
    file_handler = logging.FileHandler(settings.log_file, encoding="utf-8")
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

logger.propagate = False

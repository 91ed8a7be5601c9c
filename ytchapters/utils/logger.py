import os
import sys
import logging as stdlib_logging

from ytchapters.config import config

logging_str = "[%(asctime)s] {%(pathname)s:%(lineno)d} %(levelname)s - %(message)s"
logging_dir = os.path.join(str(config.BASE_DIR), "logs")
logging_path = os.path.join(logging_dir, "ytchapters.log")


def setup_logging(level=None):
    """Attach the file and console handlers and apply the configured level."""
    os.makedirs(logging_dir, exist_ok=True)

    if not stdlib_logging.getLogger().handlers:
        stdlib_logging.basicConfig(
            format=logging_str,
            handlers=[
                stdlib_logging.FileHandler(logging_path),
                stdlib_logging.StreamHandler(sys.stdout)
            ]
        )

    logger = stdlib_logging.getLogger('ytchapters')
    logger.setLevel(level or config.LOG_LEVEL)
    return logger


logging = setup_logging()

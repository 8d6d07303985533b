import logging
from logging.handlers import RotatingFileHandler

from app.core.config import settings


def get_logger(name: str):
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    sh = logging.StreamHandler()
    sh.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(sh)

    try:
        settings.LOG_DIR.mkdir(exist_ok=True, parents=True)
        fh = RotatingFileHandler(settings.LOG_DIR / "app.log", maxBytes=2_000_000, backupCount=5)
    except OSError as e:
        # read-only filesystems (serverless deploys) still get console logs
        logger.warning("File logging disabled: %s", e)
    else:
        fh.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s"))
        logger.addHandler(fh)

    logger.propagate = False
    return logger

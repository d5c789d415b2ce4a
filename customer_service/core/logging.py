import sys

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DDTHH:mm:ss.SSSZ}</green> | "
    "<level>{level: <8}</level> | "
    "request_id={extra[request_id]} | "
    "<level>{message}</level>"
)


def setup_logging(level: str = "INFO", json: bool = False) -> None:
    """Replace loguru's default sink with a single stdout sink carrying request_id"""
    logger.remove()
    logger.configure(extra={"request_id": "system"})
    if json:
        logger.add(sys.stdout, level=level, serialize=True, backtrace=False, diagnose=False)
    else:
        logger.add(sys.stdout, level=level, format=LOG_FORMAT, backtrace=False, diagnose=False)

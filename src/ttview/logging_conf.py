import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def setup_logging(level: str = "WARNING") -> None:
    """Configure the root logger for command line use."""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.WARNING), format=LOG_FORMAT)

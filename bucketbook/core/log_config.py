import logging

from bucketbook.config import settings

def setup_logging(level: str = None):
    """Configure root logging once for the application"""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

"""
Restaurant reviews application package.

Layered architecture:

  restaurant_reviews/repositories/  — SQL access through a caller-owned session.
  restaurant_reviews/validators/    — field rules and uniqueness checks.
  restaurant_reviews/services/      — validate-then-persist orchestration.

``reviews_api.py`` is the integration point: it creates repository,
validator and service instances at import time and its Flask route handlers
call the services, translating domain errors into HTTP responses.
"""
import logging


def setup_logging(level: str = 'WARNING') -> logging.Logger:
    """Configure the root restaurant_reviews logger.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               Defaults to WARNING so normal use is quiet.

    Returns:
        Configured logger instance.
    """
    numeric = getattr(logging, level.upper(), logging.WARNING)
    logger = logging.getLogger('restaurant_reviews')
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('[%(levelname)s] %(name)s: %(message)s'))
        logger.addHandler(handler)
    logger.setLevel(numeric)
    return logger

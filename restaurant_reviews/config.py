"""Configuration loading: defaults, then an optional JSON file, then environment."""
import json
import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from .errors import ConfigError

DEFAULTS: Dict[str, Any] = {
    'database_url': 'sqlite:///restaurant_reviews.db',
    'host': '127.0.0.1',
    'port': 5000,
    'log_level': 'INFO',
    'debug': False,
}


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from a JSON file with environment variable support.

    Environment variables take precedence over config file values:
    - DATABASE_URL overrides database_url
    - REVIEWS_HOST overrides host
    - REVIEWS_PORT overrides port
    - REVIEWS_LOG_LEVEL overrides log_level
    - REVIEWS_DEBUG overrides debug

    A missing file is not an error; the defaults are used instead.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    load_dotenv()
    config = dict(DEFAULTS)

    if config_path and os.path.exists(config_path):
        try:
            with open(config_path, 'r') as f:
                loaded = json.load(f)
        except (IOError, json.JSONDecodeError) as e:
            raise ConfigError(f"Could not read config file '{config_path}': {e}") from e
        if not isinstance(loaded, dict):
            raise ConfigError(f"Config file '{config_path}' must contain a JSON object")
        config.update(loaded)

    if os.getenv('DATABASE_URL'):
        config['database_url'] = os.getenv('DATABASE_URL')
    if os.getenv('REVIEWS_HOST'):
        config['host'] = os.getenv('REVIEWS_HOST')
    if os.getenv('REVIEWS_PORT'):
        try:
            config['port'] = int(os.getenv('REVIEWS_PORT'))
        except ValueError as e:
            raise ConfigError(f"REVIEWS_PORT must be an integer: {e}") from e
    if os.getenv('REVIEWS_LOG_LEVEL'):
        config['log_level'] = os.getenv('REVIEWS_LOG_LEVEL')
    if os.getenv('REVIEWS_DEBUG'):
        config['debug'] = _env_bool(os.getenv('REVIEWS_DEBUG'))

    return config

"""League configuration management."""

import logging
from functools import lru_cache
from pathlib import Path

from .schemas import LeagueConfig
from .utils import load_json

logger = logging.getLogger('golfleague.config')

CONFIG_PATH = Path(__file__).parent.parent / 'data' / 'league_config.json'


@lru_cache(maxsize=1)
def get_config() -> LeagueConfig:
    """
    Load league configuration from data/league_config.json.

    Configuration is cached after first load. When the file is absent the
    built-in defaults are used.

    Returns:
        LeagueConfig object with validated settings

    Raises:
        ValueError: If config file has invalid structure

    Example:
        from golfleague.config import get_config
        config = get_config()
        print(f"Gold bracket size: {config.gold_cutoff}")
    """
    if not CONFIG_PATH.exists():
        logger.debug(f'No config at {CONFIG_PATH}, using defaults')
        return LeagueConfig()
    return load_json(CONFIG_PATH, schema=LeagueConfig)


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this if the config file is modified during runtime
    and you need to reload it.
    """
    get_config.cache_clear()

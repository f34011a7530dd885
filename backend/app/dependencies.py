from functools import lru_cache
import logging

from graphcompose.config.settings import CompositionConfig

from backend.app.config import AppConfig


@lru_cache
def get_config() -> AppConfig:
    return AppConfig()


@lru_cache
def get_composition_config() -> CompositionConfig:
    config = get_config().composition
    logging.getLogger("graphcompose.startup").info(
        "[startup] composition policy root_alias=%s enforce_acyclic=%s",
        config.root_alias,
        config.enforce_acyclic,
    )
    return config

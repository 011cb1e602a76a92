import os
from importlib import resources
from typing import IO, Any, Optional, Union

import yaml


def load_stock_config(name: str = "default") -> dict[str, Any]:
    """
    Load one of the YAML logging configurations shipped in ``labsite/logging/configurations``.
    """
    config_file = resources.files(__package__).joinpath("configurations", f"{name}.yaml")
    with config_file.open("r") as stream:
        return load_config(stream)


def load_config(config: Union[str, IO[str]]) -> dict[str, Any]:
    """
    Parse a logging *config* written in YAML, resolving the custom tags understood by
    :py:class:`LogConfigLoader`.
    """
    return yaml.load(config, Loader=LogConfigLoader)


class LogConfigLoader(yaml.SafeLoader):
    """
    A :py:class:`yaml.SafeLoader` which understands a few environment-driven tags.

    * ``!LOG_LEVEL`` resolves to the uppercased ``LOG_LEVEL`` environment variable, or ``None``.
    * ``!CLOUD_WATCH_LOG_GROUP`` resolves to ``CLOUD_WATCH_LOG_GROUP``, or ``None``.
    * ``!CLOUD_WATCH_USE_QUEUES`` resolves to a boolean read from ``CLOUD_WATCH_USE_QUEUES``.
    * ``!coalesce`` resolves a sequence to its first non-null item.

    >>> os.environ["LOG_LEVEL"] = "debug"
    >>> yaml.load("level: !LOG_LEVEL", Loader=LogConfigLoader)
    {'level': 'DEBUG'}
    >>> del os.environ["LOG_LEVEL"]
    >>> yaml.load('''
    ... level: !coalesce
    ...   - !LOG_LEVEL
    ...   - INFO
    ... ''', Loader=LogConfigLoader)
    {'level': 'INFO'}
    """


def _env_or_none(name: str) -> Optional[str]:
    value = os.environ.get(name)
    return value if value else None


def log_level_constructor(loader, node) -> Optional[str]:
    level = _env_or_none("LOG_LEVEL")
    return level.upper() if level else None


def cloud_watch_log_group_constructor(loader, node) -> Optional[str]:
    return _env_or_none("CLOUD_WATCH_LOG_GROUP")


def use_queues_constructor(loader, node) -> bool:
    use_queues = _env_or_none("CLOUD_WATCH_USE_QUEUES")
    return use_queues.lower() == "true" if use_queues else False


def coalesce_constructor(loader, node) -> Any:
    values = loader.construct_sequence(node)
    return next((value for value in values if value is not None), None)


LogConfigLoader.add_constructor("!LOG_LEVEL", log_level_constructor)
LogConfigLoader.add_constructor("!CLOUD_WATCH_LOG_GROUP", cloud_watch_log_group_constructor)
LogConfigLoader.add_constructor("!CLOUD_WATCH_USE_QUEUES", use_queues_constructor)
LogConfigLoader.add_constructor("!coalesce", coalesce_constructor)

"""Configuration loading from an optional YAML file, env vars, and CLI args."""

import logging
import os
import socket
from dataclasses import dataclass, field

import yaml

from logstash_redis.message import DEFAULT_LOGTYPES

logger = logging.getLogger(__name__)


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes")


def _parse_logtypes(value) -> tuple[str, ...]:
    """Accept a comma-separated string or a YAML list."""
    if value is None:
        return ()
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = [str(v) for v in value]
    else:
        logger.warning("Invalid logtypes %r, using defaults", value)
        return DEFAULT_LOGTYPES
    return tuple(item.strip() for item in items if item.strip())


def _parse_log_level(value) -> str:
    level = str(value).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        logger.warning("Unknown log level %r, using %s", value, Config.log_level)
        return Config.log_level
    return level


@dataclass(frozen=True)
class Config:
    docker_host: str = field(default_factory=socket.gethostname)
    logstash_type: str = ""
    suppress_type: bool = True
    use_v0_layout: bool = False
    logtypes: tuple[str, ...] = DEFAULT_LOGTYPES
    log_level: str = "INFO"


def load_yaml_config(path: str | None) -> dict:
    """Load settings from a YAML file. Returns empty dict if no path."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    except yaml.YAMLError as e:
        logger.warning("Invalid YAML in %s (%s), using defaults", path, e)
        return {}

    if not isinstance(data, dict):
        logger.warning("Config file %s is not a mapping, using defaults", path)
        return {}
    logger.info("Loaded YAML config from %s", path)
    return data


def load_config(cli_args=None, yaml_data: dict | None = None) -> Config:
    """Build Config from defaults <- YAML <- env vars <- CLI args (highest priority).

    *cli_args* is an argparse Namespace; attributes left at None do not
    override anything.
    """
    settings: dict = dict(yaml_data or {})

    env_map = {
        "REDIS_DOCKER_HOST": "docker_host",
        "REDIS_LOGSTASH_TYPE": "logstash_type",
        "REDIS_SUPPRESS_TYPE": "suppress_type",
        "REDIS_USE_V0_LAYOUT": "use_v0_layout",
        "REDIS_LOGTYPES": "logtypes",
        "LOG_LEVEL": "log_level",
    }
    for env_name, key in env_map.items():
        if env_name in os.environ:
            settings[key] = os.environ[env_name]

    if cli_args is not None:
        for key in ("docker_host", "logstash_type", "suppress_type",
                    "use_v0_layout", "logtypes", "log_level"):
            value = getattr(cli_args, key, None)
            if value is not None:
                settings[key] = value

    if _parse_bool(os.environ.get("DEBUG", "false")):
        settings["log_level"] = "DEBUG"

    logstash_type = str(settings.get("logstash_type", ""))
    if "suppress_type" in settings:
        suppress_type = _parse_bool(settings["suppress_type"])
    else:
        # No type configured means no @type field.
        suppress_type = not logstash_type

    kwargs: dict = {
        "logstash_type": logstash_type,
        "suppress_type": suppress_type,
        "use_v0_layout": _parse_bool(settings.get("use_v0_layout", False)),
        "log_level": _parse_log_level(settings.get("log_level", Config.log_level)),
    }
    if settings.get("docker_host"):
        kwargs["docker_host"] = str(settings["docker_host"])
    if "logtypes" in settings:
        kwargs["logtypes"] = _parse_logtypes(settings["logtypes"])

    return Config(**kwargs)

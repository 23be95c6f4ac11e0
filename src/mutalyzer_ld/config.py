"""Runtime configuration, read from YAML."""
import logging
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, Field

from mutalyzer_ld.wrappers.mutalyzer_wrapper import SERVICE_NAMESPACE, SERVICE_URL

logger = logging.getLogger(__name__)


class Settings(BaseModel):
    """Settings for the server and the remote service connection."""

    service_url: str = SERVICE_URL
    """SOAP endpoint of the Mutalyzer service."""

    service_namespace: str = SERVICE_NAMESPACE

    timeout: float = Field(60.0, gt=0)
    """Seconds to wait for the remote service."""

    cache_name: Optional[str] = None
    """If set, remote responses are cached with requests_cache under this name."""

    console_logging: bool = True
    """Log errors before they are returned to the caller."""

    host: str = "0.0.0.0"
    port: int = Field(8888, gt=0)


def load_config(config_path: Optional[Union[str, Path]] = None) -> Settings:
    """
    Load settings from a YAML file.

    A missing path or file yields the defaults.

    :param config_path:
    :return:
    """
    if config_path is None:
        return Settings()
    try:
        with open(config_path, "r") as file:
            config_data = yaml.safe_load(file) or {}
    except FileNotFoundError:
        logger.warning(f"No config file at {config_path}; using defaults")
        return Settings()
    return Settings(**config_data)

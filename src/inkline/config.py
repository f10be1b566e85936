"""Engine configuration.

Settings come from three layers, later ones winning: model defaults, an
optional JSON file, and ``INKLINE_*`` environment variables (a ``.env``
file is honoured through python-dotenv).
"""

import json
import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from inkline.logger import get_logger

logger = get_logger("config")

# Environment variable -> config field
ENV_OVERRIDES: dict[str, str] = {
    "INKLINE_RESULT_LIMIT": "result_limit",
    "INKLINE_CACHE_TTL": "cache_ttl_seconds",
    "INKLINE_CACHE_SIZE": "cache_size_limit",
    "INKLINE_ENABLE_CACHE": "enable_cache",
    "INKLINE_BARE_TRIGGER_LIMIT": "bare_trigger_limit",
}


class EngineConfig(BaseModel):
    """Tunables for the completion engine and its cache."""

    model_config = ConfigDict(frozen=True)

    result_limit: int = Field(15, ge=1, description="Maximum completion items returned")
    cache_ttl_seconds: float = Field(5.0, gt=0, description="Completion cache time-to-live")
    cache_size_limit: int = Field(100, ge=1, description="Maximum cached completion results")
    bare_trigger_limit: int = Field(
        5, ge=1, description="Items shown right after a bare trigger such as '@'"
    )
    enable_cache: bool = Field(True, description="Whether completion results are cached")


def _read_env_overrides() -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for env_name, field_name in ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value is None or value == "":
            continue
        if field_name == "enable_cache":
            overrides[field_name] = value.strip().lower() in ("1", "true", "yes", "on")
        else:
            overrides[field_name] = value
    return overrides


def load_engine_config(config_path: Optional[str | Path] = None) -> EngineConfig:
    """
    Load the engine configuration.

    Args:
        config_path: Optional path to a JSON file holding ``EngineConfig`` fields.

    Returns:
        EngineConfig: The merged configuration

    Raises:
        FileNotFoundError: If ``config_path`` is given but does not exist
        json.JSONDecodeError: If the JSON file is invalid
        ValidationError: If a value is out of range or of the wrong type
    """
    load_dotenv()

    data: dict[str, Any] = {}
    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            error_msg = f"Engine configuration file not found: {config_path}"
            logger.error(error_msg)
            raise FileNotFoundError(error_msg)

        logger.info(f"Loading engine configuration from: {config_path}")
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in configuration file {config_path}: {e}")
            raise

    data.update(_read_env_overrides())

    try:
        config = EngineConfig(**data)
    except ValidationError as e:
        logger.error(f"Invalid engine configuration: {e}")
        raise

    logger.debug(f"Engine configuration: {config.model_dump()}")
    return config

"""Loader for ``local.settings.json`` files used by the upload tool."""

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from ..core.domain.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class LocalSettings(BaseModel):
    """Key/value pairs under the ``Values`` section of the settings file."""

    values: dict[str, str] = Field(default_factory=dict, alias="Values")


def load_local_settings(path: Path) -> dict[str, str]:
    """Export the ``Values`` of a settings file into the process environment.

    Args:
        path: Settings file location.

    Returns:
        The exported pairs; empty if the file does not exist.

    Raises:
        ConfigurationError: If the file is not valid JSON of the expected shape.
    """
    if not path.exists():
        logger.warning("%s not found", path)
        return {}

    try:
        local = LocalSettings.model_validate(json.loads(path.read_text(encoding="utf-8-sig")))
    except (ValueError, PydanticValidationError) as e:
        raise ConfigurationError(
            f"Error loading settings from {path}", cause=e, context={"path": str(path)}
        ) from e

    for key, value in local.values.items():
        os.environ[key] = value

    logger.info("Environment variables loaded from %s", path)
    return local.values

"""Reading item collections from JSON and YAML files."""

import logging
from pathlib import Path
from typing import Any

import msgspec
import yaml

from itemsearch.exceptions import ItemLoadError

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}


def load_items(path: Path) -> list[Any]:
    """Load items from a file.

    The file holds either a list of items or an object with an ``items``
    list. Files ending in .yaml/.yml are read as YAML, everything else as
    JSON.

    Raises:
        ItemLoadError: If the file cannot be read or has the wrong shape
    """
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise ItemLoadError(path, str(e)) from e

    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            data = yaml.safe_load(raw)
        else:
            data = msgspec.json.decode(raw)
    except (yaml.YAMLError, msgspec.DecodeError) as e:
        raise ItemLoadError(path, f"invalid file contents: {e}") from e

    if isinstance(data, dict) and "items" in data:
        data = data["items"]
    if not isinstance(data, list):
        raise ItemLoadError(path, "expected a list or an object with 'items'")

    logger.debug(f"Loaded {len(data)} items from {path}")
    return data

"""File utility functions."""

from pathlib import Path
from typing import Any, Dict


def load_yaml(path: Path) -> Dict[str, Any]:
    """Loads a YAML file and returns its contents as a dict.

    Raises:
        ValueError: If the file is not valid YAML or not a mapping.
    """
    import yaml

    path = Path(path).expanduser()
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Malformed YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"YAML file must be a mapping/object: {path}")
    return data

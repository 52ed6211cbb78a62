import json
import os
from typing import Any, Dict, Optional


class FormConfigError(Exception):
    """Raised when the form config file is missing, unreadable or incomplete."""


def load_form_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load form-check thresholds from a JSON file."""
    if config_path is None:
        config_path = os.path.join(os.path.dirname(__file__), "form_config.json")
    try:
        with open(config_path, "r") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise FormConfigError(f"Could not load form config from {config_path}: {e}") from e


def get_config_section(config: Dict[str, Any], section: str) -> Dict[str, Any]:
    try:
        return dict(config[section])
    except (KeyError, TypeError) as e:
        raise FormConfigError(f"Form config has no '{section}' section") from e

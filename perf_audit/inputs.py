import json
from pathlib import Path

import yaml


class InputError(RuntimeError):
    """A report or threshold file could not be loaded."""


def _read_text(path) -> str:
    p = Path(path)
    try:
        return p.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise InputError(f"file not found: {p}") from None
    except OSError as e:
        raise InputError(f"cannot read {p}: {e}") from e

def _require_mapping(doc, path, what):
    if not isinstance(doc, dict):
        raise InputError(f"{what} {path} must contain an object at the top level, "
                         f"got {type(doc).__name__}")
    return doc

def read_lhr(path) -> dict:
    """Load a Lighthouse JSON report."""
    text = _read_text(path)
    try:
        doc = json.loads(text)
    except json.JSONDecodeError as e:
        raise InputError(f"invalid JSON in Lighthouse report {path}: {e}") from e
    return _require_mapping(doc, path, "Lighthouse report")

def read_thresholds(path) -> dict:
    """
    Load a threshold config. .json files go through json, everything else
    through yaml.safe_load (YAML is what we keep in config/).
    """
    text = _read_text(path)
    try:
        if Path(path).suffix.lower() == ".json":
            doc = json.loads(text)
        else:
            doc = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise InputError(f"invalid threshold config {path}: {e}") from e
    return _require_mapping(doc, path, "threshold config")

"""YAML/dict config loader for cue.

Example YAML (``~/.cue/config.yaml``):

    cue:
      db_path: ~/.cue/prompts.db
      editor: nvim
      preview_lines: 10
      sanitize:
        skip_types:
          - email
        allow_list:
          - support@example.com
        use_presidio: false
        language: en
        score_threshold: 0.35

Environment overrides: ``CUE_CONFIG`` (config file path), ``CUE_DB``
(database path), ``CUE_EDITOR`` (editor command).
"""

from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Any

import yaml

from .sanitizer import Sanitizer, SanitizerConfig

logger = logging.getLogger(__name__)

DEFAULT_HOME = Path.home() / ".cue"
DEFAULT_DB = str(DEFAULT_HOME / "prompts.db")
DEFAULT_CONFIG = DEFAULT_HOME / "config.yaml"


def load_config(data: dict[str, Any] | None) -> dict[str, Any]:
    """Normalize a config dict (from YAML or inline)."""
    data = data or {}
    # Support nested under "cue" key or flat
    if "cue" in data:
        data = data["cue"] or {}

    sanitize = data.get("sanitize") or {}
    return {
        "db_path": data.get("db_path", DEFAULT_DB),
        "editor": data.get("editor"),
        "preview_lines": int(data.get("preview_lines", 10)),
        "skip_types": set(sanitize.get("skip_types", [])),
        "allow_list": set(sanitize.get("allow_list", [])),
        "use_presidio": sanitize.get("use_presidio", False),
        "language": sanitize.get("language", "en"),
        "score_threshold": sanitize.get("score_threshold", 0.35),
        "entities": sanitize.get("entities"),
    }


def load_from_yaml(path: str | Path) -> dict[str, Any]:
    """Load config from a YAML file."""
    with open(Path(path).expanduser()) as f:
        return load_config(yaml.safe_load(f))


def load_settings(path: str | Path | None = None) -> dict[str, Any]:
    """Config file (if any) plus environment overrides."""
    path = path or os.environ.get("CUE_CONFIG") or DEFAULT_CONFIG
    if Path(path).expanduser().is_file():
        logger.debug("loading config from %s", path)
        settings = load_from_yaml(path)
    else:
        settings = load_config({})

    if os.environ.get("CUE_DB"):
        settings["db_path"] = os.environ["CUE_DB"]
    if os.environ.get("CUE_EDITOR"):
        settings["editor"] = os.environ["CUE_EDITOR"]
    return settings


def build_sanitizer(settings: dict[str, Any]) -> Sanitizer:
    """Create a Sanitizer from a normalized settings dict."""
    return Sanitizer(SanitizerConfig(
        skip_types=settings["skip_types"],
        allow_list=settings["allow_list"],
        use_presidio=settings["use_presidio"],
        language=settings["language"],
        score_threshold=settings["score_threshold"],
        presidio_entities=settings.get("entities"),
    ))

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .aggregate import DEFAULT_SUBMITTED_TOKENS
from .utils import default_config_dir

logger = logging.getLogger(__name__)


@dataclass
class TTConfig:
    ignore_submitted: bool = False
    submitted_tokens: list[str] = field(default_factory=lambda: list(DEFAULT_SUBMITTED_TOKENS))
    verbosity: int = 0


def config_path(explicit_path: Optional[str] = None) -> Path:
    if explicit_path:
        return Path(explicit_path).expanduser()
    return default_config_dir() / "config.json"


def load_config(explicit_path: Optional[str] = None) -> TTConfig:
    p = config_path(explicit_path)
    if not p.exists():
        return TTConfig()
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning(f"Could not read config {p}: {e}; using defaults")
        return TTConfig()

    cfg = TTConfig()
    if isinstance(data, dict):
        if isinstance(data.get("ignore_submitted"), bool):
            cfg.ignore_submitted = data["ignore_submitted"]
        if isinstance(data.get("submitted_tokens"), list):
            cfg.submitted_tokens = [str(x).strip().lower() for x in data["submitted_tokens"]]
        # bool is an int subclass
        if isinstance(data.get("verbosity"), int) and not isinstance(data["verbosity"], bool):
            cfg.verbosity = max(0, data["verbosity"])
    else:
        logger.warning(f"Config {p} is not a JSON object; using defaults")
    return cfg

"""
Protocol configuration for blindbid.

Defines the public-list binding variant and operational limits. Values come
from defaults, an optional JSON file, and ``BLINDBID_*`` environment
variables (a ``.env`` file is honored), in that order of precedence.
"""

import json
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

ENV_PREFIX = "BLINDBID_"


@dataclass(frozen=True)
class BlindBidConfig:
    """Protocol-wide configuration parameters"""

    # Public list binding
    require_membership: bool = True  # Z must appear in a non-empty public list
    allow_empty_list: bool = False  # Single-bidder variant: empty list is accepted
    max_list_size: int = 4096  # Upper bound on public list length

    # Logging
    log_level: str = "INFO"
    log_to_file: bool = False
    log_dir: Path = field(default=Path("logs"))

    def __post_init__(self):
        if self.max_list_size < 1:
            raise ValueError("max_list_size must be >= 1")
        # Accept plain strings from JSON/env
        if not isinstance(self.log_dir, Path):
            object.__setattr__(self, "log_dir", Path(self.log_dir))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "require_membership": self.require_membership,
            "allow_empty_list": self.allow_empty_list,
            "max_list_size": self.max_list_size,
            "log_level": self.log_level,
            "log_to_file": self.log_to_file,
            "log_dir": str(self.log_dir),
        }


# Global config instance (can be overridden per call)
config = BlindBidConfig()


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"Invalid boolean value: {value!r}")


def _coerce(value: Any, target: Any) -> Any:
    """Convert a raw JSON/env value to the type of the default."""
    if isinstance(target, bool):
        return _parse_bool(value) if isinstance(value, str) else bool(value)
    if isinstance(target, int):
        return int(value)
    if isinstance(target, Path):
        return Path(value)
    return str(value)


def load_config(
    config_path: Optional[str] = None,
    env: Optional[Dict[str, str]] = None,
    dotenv_path: Optional[str] = None,
) -> BlindBidConfig:
    """
    Load configuration from file and environment.

    Args:
        config_path: Optional path to a JSON config file
        env: Environment mapping (defaults to os.environ after loading .env)
        dotenv_path: Optional explicit .env file path

    Returns:
        BlindBidConfig instance

    Raises:
        ValueError: Unknown keys or unparseable values
    """
    defaults = BlindBidConfig()
    known = {f.name: getattr(defaults, f.name) for f in fields(BlindBidConfig)}
    overrides: Dict[str, Any] = {}

    if config_path:
        with open(config_path) as fh:
            data = json.load(fh)
        if not isinstance(data, dict):
            raise ValueError("Config file must contain a JSON object")
        for key, value in data.items():
            if key not in known:
                raise ValueError(f"Unknown config key: {key}")
            overrides[key] = _coerce(value, known[key])

    if env is None:
        load_dotenv(dotenv_path=dotenv_path, override=False)
        env = dict(os.environ)

    for name, default in known.items():
        raw = env.get(ENV_PREFIX + name.upper())
        if raw is not None:
            overrides[name] = _coerce(raw, default)

    return replace(defaults, **overrides)


__all__ = ["BlindBidConfig", "config", "load_config", "ENV_PREFIX"]

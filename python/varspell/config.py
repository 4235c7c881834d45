"""Configuration loader for varspell.

Loads defaults from config.json at project root, with hardcoded fallbacks.
"""

import json
from pathlib import Path
from typing import Any, Optional

from loguru import logger

# Hardcoded fallback defaults
FALLBACK_DEFAULTS = {
    "corpus_path": None,        # None = bundled varspell/data/varcon.txt
    "artifact_path": None,      # Prebuilt JSON artifact, preferred when set
    "output": "output/variants.json",
    "category": "american",
    "ignored_variants": [
        {
            "word": "anesthetisation",
            "category": "australian",
            "tags": ["variant", "seldom"],
        },
    ],
    "verbose": False,
}

_config: dict[str, Any] | None = None


def _find_config() -> Path | None:
    """Find config.json by walking up from current file."""
    paths = [
        Path(__file__).parent.parent.parent / "config.json",  # python/varspell -> root
        Path.cwd() / "config.json",
    ]
    for path in paths:
        if path.exists():
            return path
    return None


def load() -> dict[str, Any]:
    """Load configuration from config.json or use fallbacks."""
    global _config
    if _config is not None:
        return _config

    config_path = _find_config()
    if config_path:
        try:
            with open(config_path) as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Ignoring unreadable config {config_path}: {e}")
        else:
            if isinstance(data, dict) and isinstance(data.get("defaults", {}), dict):
                _config = data
                logger.debug(f"Loaded config from {config_path}")
                return _config
            logger.warning(f"Ignoring config {config_path}: expected an object with object 'defaults'")

    # Fallback
    _config = {"defaults": FALLBACK_DEFAULTS}
    return _config


def reset() -> None:
    """Forget the cached configuration."""
    global _config
    _config = None


def get_default(key: str, fallback: Any = None) -> Any:
    """Get a default value from config."""
    cfg = load()
    return cfg.get("defaults", {}).get(key, fallback)


# Convenience accessors
def default_corpus_path() -> Optional[str]:
    return get_default("corpus_path", FALLBACK_DEFAULTS["corpus_path"])


def default_artifact_path() -> Optional[str]:
    return get_default("artifact_path", FALLBACK_DEFAULTS["artifact_path"])


def default_output() -> str:
    return get_default("output", FALLBACK_DEFAULTS["output"])


def default_category() -> str:
    return get_default("category", FALLBACK_DEFAULTS["category"])


def default_ignored_variants() -> list[dict[str, Any]]:
    return get_default("ignored_variants", FALLBACK_DEFAULTS["ignored_variants"])

"""Load editor and simulation parameters. Configs live in configs/ as {name}.json, merged onto defaults."""

import json
import logging
import re
from pathlib import Path

from tiles.constants import DAMPING, DEFAULT_CHUNK_SIZE, DEFAULT_TILE_SIZE, EMPTY_EPSILON, GRAVITY_BIAS

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).resolve().parent / "configs"


def _sanitize_name(name: str) -> str:
    s = (name or "").strip()
    s = re.sub(r"[^\w\s-]", "", s)
    s = re.sub(r"[\s-]+", "_", s).strip("_")
    return s[:64] or "unnamed"


def get_config_path(name: str) -> Path:
    return CONFIG_DIR / f"{_sanitize_name(name)}.json"


def resolve_config(name_or_path: str) -> Path:
    """A path to an existing file wins; otherwise treat it as a name under configs/."""
    p = Path(name_or_path)
    if p.suffix == ".json" or p.exists():
        return p
    return get_config_path(name_or_path)


def list_configs() -> list[str]:
    if not CONFIG_DIR.exists():
        return []
    return sorted(f.stem for f in CONFIG_DIR.glob("*.json"))


def load_config(path: Path | str | None = None) -> dict:
    """Defaults when path is None, missing, or unreadable."""
    if path is None:
        return _default_config()
    p = Path(path)
    if not p.exists():
        logger.info("config %s not found, using defaults", p)
        return _default_config()
    try:
        with open(p, "r") as f:
            data = json.load(f)
    except (ValueError, OSError) as exc:
        logger.warning("could not read config %s: %s", p, exc)
        return _default_config()
    if not isinstance(data, dict):
        logger.warning("config %s is not a JSON object, using defaults", p)
        return _default_config()
    return _merge_defaults(data)


def save_config(params: dict, name: str) -> Path:
    path = get_config_path(name)
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(_merge_defaults(params), f, indent=2)
    return path


def _default_config() -> dict:
    return {
        "window": {"width": 960, "height": 640},
        "chunk_size": DEFAULT_CHUNK_SIZE,
        "tile_size": DEFAULT_TILE_SIZE,
        "tick_rate": 30,
        "dt": 0.1,
        "liquid": {"damping": DAMPING, "gravity": GRAVITY_BIAS, "epsilon": EMPTY_EPSILON},
        "demo_scene": True,
        "show_amounts": True,
        "log_level": "INFO",
    }


def _merge_defaults(data: dict) -> dict:
    d = _default_config()
    for section in ("window", "liquid"):
        if isinstance(data.get(section), dict):
            d[section] = {**d[section], **data[section]}
    for k in ("chunk_size", "tile_size", "tick_rate", "dt", "demo_scene", "show_amounts", "log_level"):
        if k in data:
            d[k] = data[k]
    return d

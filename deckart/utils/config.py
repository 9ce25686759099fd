# deckart/utils/config.py
import os
from typing import Any, Dict, Optional

from pathlib import Path

try:
    import yaml
except Exception as e:  # pragma: no cover
    raise RuntimeError("PyYAML is required: pip install pyyaml") from e

from dotenv import load_dotenv

from deckart.core import BASE, get_logger

log = get_logger("deckart.config")

DEFAULT_CONFIG_PATH = os.path.join(BASE, "conf", "seeded_svg.yaml")
EXAMPLE_CONFIG_PATH = os.path.join(BASE, "conf", "seeded_svg.example.yaml")


def _read_yaml(path: str) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        return {}
    with p.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
        if not isinstance(data, dict):
            raise ValueError(f"YAML at {path} must be a mapping/object.")
        return data


def read_or_die(path: str, schema_hint: str = "") -> Dict[str, Any]:
    """
    Read a YAML config file that the caller asked for explicitly.

    Args:
        path: Path to YAML file
        schema_hint: Optional hint about the expected schema

    Returns:
        Parsed YAML data as dict

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the file is not valid YAML or not a mapping
    """
    p = Path(path)
    if not p.exists():
        error_msg = f"Configuration file missing: {path}\n"
        if schema_hint:
            error_msg += f"Schema hint: {schema_hint}\n"
        error_msg += f"Create {path} or drop the --config option."
        raise FileNotFoundError(error_msg)

    try:
        with p.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse {path}: {e}")
    if not isinstance(data, dict):
        raise ValueError(f"YAML at {path} must be a mapping/object.")
    return data


def deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(a)
    for k, v in (b or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _env_overlay() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    if os.getenv("DECKART_SEED_MODE"):
        out["seed_mode"] = os.getenv("DECKART_SEED_MODE")
    for env_key, field in (("DECKART_DENSITY", "density"), ("DECKART_LAYERS", "layers")):
        raw = os.getenv(env_key)
        if not raw:
            continue
        try:
            out[field] = int(raw)
        except ValueError:
            log.warning(f"Ignoring non-integer {env_key}={raw!r}")
    return out


def load_decor_config(
    path: Optional[str] = None,
    *,
    cli_overrides: Optional[Dict[str, Any]] = None,
    use_env: bool = True,
):
    """
    Load the decoration config with strict precedence.
    Precedence (low -> high):
      1) Defaults baked into DecorConfig
      2) YAML file (explicit path, else conf/seeded_svg.yaml, else the example)
      3) Environment variables (after reading .env)
      4) CLI overrides

    Returns a validated DecorConfig.
    """
    from deckart.seeded.sdk import resolve_config

    if path:
        try:
            raw = read_or_die(path, schema_hint="top-level keys of DecorConfig, e.g. density: 24")
        except (FileNotFoundError, ValueError) as e:
            log.error(f"Config load failed: {e}")
            raise
    else:
        fallback = DEFAULT_CONFIG_PATH if os.path.exists(DEFAULT_CONFIG_PATH) else EXAMPLE_CONFIG_PATH
        raw = _read_yaml(fallback)

    merged: Dict[str, Any] = dict(raw)
    if use_env:
        load_dotenv(os.path.join(BASE, ".env"))
        merged = deep_merge(merged, _env_overlay())
    if cli_overrides:
        merged = deep_merge(merged, cli_overrides)
    return resolve_config(None, merged)

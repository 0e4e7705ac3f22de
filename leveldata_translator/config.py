import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .errors import ConfigError
from .offset import Offset

PKG_ROOT = Path(__file__).resolve().parent
DEFAULT_CFG_PATH = PKG_ROOT / "config.default.yaml"

FALLBACK_CONFIG: Dict[str, Any] = {
    "paths": {"input": "input", "output": "output", "logs": "logs"},
    "offset": {"vertical": 0.0, "lane": 3},
    "slides": {"merge_unlinked": True},
    "metadata": {"emit": False},
    "output": {"minified": False, "single_precision": False},
}


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} should contain a mapping")
    return data


def _deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(a)
    for k, v in (b or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = copy.deepcopy(v)
    return out


def load_config(
    user_path: Optional[Union[str, Path]] = None,
    default_path: Optional[Union[str, Path]] = None,
) -> Dict[str, Any]:
    """Packaged defaults merged with an optional user YAML file."""
    dpath = Path(default_path) if default_path else DEFAULT_CFG_PATH
    cfg = _deep_merge(FALLBACK_CONFIG, _read_yaml(dpath))
    if user_path:
        cfg = _deep_merge(cfg, _read_yaml(Path(user_path)))
    return cfg


def _section(cfg: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = cfg.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"'{name}' should be a mapping")
    return section


def _number(section: Dict[str, Any], key: str, kind: type, name: str):
    value = section.get(key, 0)
    if isinstance(value, bool):
        raise ConfigError(f"'{name}.{key}' should be a number")
    try:
        return kind(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"'{name}.{key}' should be a number") from e


@dataclass(frozen=True)
class TranslatorOptions:
    offset: Offset = field(default_factory=Offset)
    merge_unlinked: bool = True
    emit_metadata: bool = False
    minified: bool = False
    single_precision: bool = False

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "TranslatorOptions":
        offset = _section(cfg, "offset")
        slides = _section(cfg, "slides")
        metadata = _section(cfg, "metadata")
        output = _section(cfg, "output")
        return cls(
            offset=Offset(
                vertical=_number(offset, "vertical", float, "offset"),
                lane=_number(offset, "lane", int, "offset"),
            ),
            merge_unlinked=bool(slides.get("merge_unlinked", True)),
            emit_metadata=bool(metadata.get("emit", False)),
            minified=bool(output.get("minified", False)),
            single_precision=bool(output.get("single_precision", False)),
        )


def config_path(cfg: Dict[str, Any], key: str) -> Path:
    paths = _section(cfg, "paths")
    value = paths.get(key) or FALLBACK_CONFIG["paths"][key]
    return Path(value)

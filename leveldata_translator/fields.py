import math
from typing import Any, Dict, Mapping

from .archetypes import EngineArchetypeDataName
from .level import LevelDataEntity


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _records(data: Any):
    if not isinstance(data, (list, tuple)):
        return ()
    return (d for d in data if isinstance(d, Mapping))


def field_value(data: Any, field_name: str) -> float:
    """Numeric value of the first field named ``field_name``.

    Falls back to ``0.0`` when the field list is missing or malformed, or when
    no matching numeric field exists. Infinite, NaN and out-of-range numbers
    count as malformed.
    """
    for d in _records(data):
        if d.get("name") == field_name and "value" in d:
            value = d["value"]
            if not _is_number(value):
                return 0.0
            try:
                number = float(value)
            except OverflowError:
                return 0.0
            return number if math.isfinite(number) else 0.0
    return 0.0


def field_ref(data: Any, field_name: str) -> str:
    """Referenced entity name of the first field named ``field_name``, or ``""``."""
    for d in _records(data):
        if d.get("name") == field_name and "ref" in d:
            ref = d["ref"]
            return str(ref) if ref is not None else ""
    return ""


def entity_refs(entity: LevelDataEntity) -> Dict[str, str]:
    refs: Dict[str, str] = {}
    for d in _records(entity.data):
        name = d.get("name")
        if name is None or "ref" not in d or d["ref"] is None:
            continue
        refs.setdefault(str(name), str(d["ref"]))
    return refs


def base_beat(entity: LevelDataEntity) -> float:
    return field_value(entity.data, EngineArchetypeDataName.Beat)


def base_lane(entity: LevelDataEntity) -> int:
    return int(field_value(entity.data, EngineArchetypeDataName.Lane))


def format_refs(refs: Dict[str, str]) -> str:
    return ",".join(f"{name}={ref}" for name, ref in refs.items())

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from .errors import MalformedEntityError


@dataclass(frozen=True)
class LevelDataEntity:
    archetype: str
    data: Any = field(default_factory=tuple)
    name: Optional[str] = None

    @classmethod
    def from_raw(cls, raw: Any) -> "LevelDataEntity":
        if not isinstance(raw, Mapping):
            raise MalformedEntityError(raw, "Expected an object for entity")
        archetype = raw.get("archetype")
        name = raw.get("name")
        data = raw.get("data")
        return cls(
            archetype=str(archetype) if archetype is not None else "",
            # field records stay untouched, the extractor tolerates bad shapes
            data=tuple(data) if isinstance(data, list) else data,
            name=str(name) if name is not None else None,
        )


@dataclass(frozen=True)
class LevelData:
    entities: List[Any]
    bgmOffset: float = 0


class EntityIndex:
    """Read-only lookup from entity name to entity.

    Built once per document. Only the first entity carrying a given name is
    indexed; later duplicates are reported through ``duplicates``.
    """

    def __init__(self, entities: List[Tuple[int, LevelDataEntity]]):
        self._by_name: Dict[str, LevelDataEntity] = {}
        self.duplicates: List[Tuple[int, str]] = []
        for index, entity in entities:
            if not entity.name:
                continue
            if entity.name in self._by_name:
                self.duplicates.append((index, entity.name))
                continue
            self._by_name[entity.name] = entity

    def get(self, name: str) -> Optional[LevelDataEntity]:
        if not name:
            return None
        return self._by_name.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._by_name)

    def __iter__(self) -> Iterator[str]:
        return iter(self._by_name)

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

import base36

from .archetypes import EngineArchetypeDataName
from .errors import EntityReferenceError
from .fields import base_beat, base_lane, field_ref
from .level import EntityIndex, LevelDataEntity
from .notes import Slide, SlidePoint
from .offset import Offset

UNLINKED_GROUP_KEY = ""
MINTED_KEY_PREFIX = "~"


@dataclass(frozen=True)
class SlideSegment:
    position: int
    entity: LevelDataEntity

    @property
    def beat(self) -> float:
        return base_beat(self.entity)

    @property
    def lane(self) -> int:
        return base_lane(self.entity)


@dataclass
class SlideGroup:
    key: str
    segments: List[SlideSegment] = field(default_factory=list)

    def append(self, segment: SlideSegment):
        self.segments.append(segment)

    def ordered(self) -> List[SlideSegment]:
        # sorted() is stable, so equal beats keep input order
        return sorted(self.segments, key=lambda s: s.beat)

    def __len__(self) -> int:
        return len(self.segments)


@dataclass(frozen=True)
class ReconstructedSlide:
    group: SlideGroup
    slide: Slide


class SlideChainReconstructor:
    """Collects scattered slide/connector entities and rebuilds one path per gesture.

    Segments are grouped by the entity their ``first`` field points at, or by
    their own name when they are the first segment. Segments carrying neither
    are "unlinked": they either share the ``""`` group (``merge_unlinked``) or
    each get a freshly minted key and become single-point slides.
    """

    def __init__(
        self, index: EntityIndex, offset: Offset, merge_unlinked: bool = True
    ):
        self.index = index
        self.offset = offset
        self.merge_unlinked = merge_unlinked
        self._groups: Dict[str, SlideGroup] = {}
        self._minted = 0

    def _mint_key(self) -> str:
        while True:
            self._minted += 1
            key = MINTED_KEY_PREFIX + base36.dumps(self._minted)
            if key not in self._groups and key not in self.index:
                return key

    def group_key(self, entity: LevelDataEntity) -> Tuple[str, bool]:
        """Return ``(key, unlinked)`` for a segment."""
        first_ref = field_ref(entity.data, EngineArchetypeDataName.First)
        if first_ref:
            if self.index.get(first_ref) is None:
                raise EntityReferenceError(
                    entity,
                    f"Slide segment references unknown first segment {first_ref!r}",
                )
            return first_ref, False
        if entity.name:
            return entity.name, False
        if self.merge_unlinked:
            return UNLINKED_GROUP_KEY, True
        return self._mint_key(), True

    def add(self, position: int, entity: LevelDataEntity) -> Tuple[str, bool]:
        key, unlinked = self.group_key(entity)
        group = self._groups.get(key)
        if group is None:
            group = self._groups[key] = SlideGroup(key)
        group.append(SlideSegment(position, entity))
        return key, unlinked

    @property
    def groups(self) -> List[SlideGroup]:
        return list(self._groups.values())

    def build(self) -> List[ReconstructedSlide]:
        """One slide per group, groups in order of first appearance."""
        results = []
        for group in self._groups.values():
            slide = Slide()
            for segment in group.ordered():
                beat, lane = self.offset.apply(segment.beat, segment.lane)
                slide.append(SlidePoint(beat=beat, lane=lane))
            results.append(ReconstructedSlide(group, slide))
        return results

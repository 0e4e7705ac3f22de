from dataclasses import dataclass
from typing import Any, List, Mapping, Tuple

from .archetypes import EngineArchetypeDataName, is_flick_archetype
from .errors import EntityReferenceError
from .fields import base_beat, base_lane, field_ref
from .level import EntityIndex, LevelDataEntity
from .notes import Single
from .offset import Offset


@dataclass(frozen=True)
class PairedNote:
    """One side of an expanded SimLine, kept with its pre-offset coordinates."""

    side: str
    ref: str
    source: LevelDataEntity
    base_beat: float
    base_lane: int
    note: Single


def single_from_entity(
    entity: LevelDataEntity, offset: Offset
) -> Tuple[float, int, Single]:
    beat = base_beat(entity)
    lane = base_lane(entity)
    final_beat, final_lane = offset.apply(beat, lane)
    single = Single(
        flick=True if is_flick_archetype(entity.archetype) else None,
        beat=final_beat,
        lane=final_lane,
    )
    return beat, lane, single


def _endpoint_ref(data: Any, field_name: str) -> str:
    ref = field_ref(data, field_name)
    if not ref and isinstance(data, Mapping):
        # object-shaped data: {"a": {"ref": "L"}, "b": {"ref": "R"}}
        record = data.get(field_name)
        if isinstance(record, Mapping) and record.get("ref") is not None:
            ref = str(record["ref"])
    return ref


def expand_sim_line(
    sim_line: LevelDataEntity, index: EntityIndex, offset: Offset
) -> List[PairedNote]:
    """Resolve both SimLine endpoints into two independent singles.

    Either both notes come back (left first) or ``EntityReferenceError`` is
    raised and nothing is emitted. The endpoints are read from the field list,
    or from keyed ``{"a": {"ref": ...}}`` data.
    """
    left_ref = _endpoint_ref(sim_line.data, EngineArchetypeDataName.Left)
    right_ref = _endpoint_ref(sim_line.data, EngineArchetypeDataName.Right)
    if not left_ref or not right_ref:
        raise EntityReferenceError(
            sim_line,
            f"SimLine is missing a/b references (a={left_ref!r}, b={right_ref!r})",
        )

    left = index.get(left_ref)
    right = index.get(right_ref)
    if left is None or right is None:
        raise EntityReferenceError(
            sim_line,
            f"SimLine references unknown notes (a={left_ref!r}, b={right_ref!r})",
        )

    paired = []
    for side, ref, entity in (("left", left_ref, left), ("right", right_ref, right)):
        beat, lane, single = single_from_entity(entity, offset)
        paired.append(PairedNote(side, ref, entity, beat, lane, single))
    return paired

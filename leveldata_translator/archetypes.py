from dataclasses import dataclass
from enum import Enum


class EngineArchetypeName:
    Initialization = "Initialization"
    Stage = "Stage"
    BpmChange = "#BPM_CHANGE"
    TapNote = "TapNote"
    FlickNote = "FlickNote"
    SimLine = "SimLine"
    IgnoredNote = "IgnoredNote"
    SlidePrefix = "Slide"
    ConnectorMarker = "Connector"


class EngineArchetypeDataName:
    Beat = "#BEAT"
    Bpm = "#BPM"
    Lane = "lane"
    # SimLine endpoints
    Left = "a"
    Right = "b"
    # slide segments point at the first segment of their gesture
    First = "first"


class NoteCategory(Enum):
    METADATA = "metadata"
    TEMPO_CHANGE = "tempo-change"
    SINGLE_TAP = "single-tap"
    SINGLE_FLICK = "single-flick"
    SIMULTANEOUS_PAIR = "simultaneous-pair"
    SLIDE_SEGMENT = "slide-segment"
    CONNECTOR_SEGMENT = "connector-segment"
    PASSTHROUGH = "passthrough"

    @property
    def audit_code(self) -> str:
        return _AUDIT_CODES[self]


_AUDIT_CODES = {
    NoteCategory.METADATA: "M",
    NoteCategory.TEMPO_CHANGE: "B",
    NoteCategory.SINGLE_TAP: "T",
    NoteCategory.SINGLE_FLICK: "F",
    NoteCategory.SIMULTANEOUS_PAIR: "P",
    NoteCategory.SLIDE_SEGMENT: "S",
    NoteCategory.CONNECTOR_SEGMENT: "C",
    NoteCategory.PASSTHROUGH: "O",
}


@dataclass(frozen=True)
class Classification:
    category: NoteCategory
    dev_type: str
    known: bool = True


_EXACT = {
    EngineArchetypeName.Initialization: Classification(NoteCategory.METADATA, "Meta"),
    EngineArchetypeName.Stage: Classification(NoteCategory.METADATA, "Meta"),
    EngineArchetypeName.BpmChange: Classification(NoteCategory.TEMPO_CHANGE, "BPM"),
    EngineArchetypeName.TapNote: Classification(NoteCategory.SINGLE_TAP, "Single"),
    EngineArchetypeName.FlickNote: Classification(
        NoteCategory.SINGLE_FLICK, "Single"
    ),
    EngineArchetypeName.SimLine: Classification(
        NoteCategory.SIMULTANEOUS_PAIR, "SimLine"
    ),
    EngineArchetypeName.IgnoredNote: Classification(
        NoteCategory.PASSTHROUGH, "Ignored"
    ),
}


def classify(archetype: str) -> Classification:
    if archetype in _EXACT:
        return _EXACT[archetype]
    if archetype.startswith(EngineArchetypeName.SlidePrefix):
        return Classification(NoteCategory.SLIDE_SEGMENT, "Slide")
    if EngineArchetypeName.ConnectorMarker in archetype:
        return Classification(NoteCategory.CONNECTOR_SEGMENT, "Slide")
    return Classification(NoteCategory.PASSTHROUGH, archetype, known=False)


def is_flick_archetype(archetype: str) -> bool:
    return archetype == EngineArchetypeName.FlickNote

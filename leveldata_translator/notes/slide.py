from dataclasses import dataclass, field
from typing import List, Literal

from dataclasses_json import dataclass_json


@dataclass_json
@dataclass
class SlidePoint:
    beat: float
    lane: int


@dataclass_json
@dataclass(kw_only=True)
class Slide:
    type: Literal["Slide"] = "Slide"
    connections: List[SlidePoint] = field(default_factory=list)

    def append(self, point: SlidePoint):
        self.connections.append(point)

    @property
    def start_beat(self) -> float:
        return self.connections[0].beat

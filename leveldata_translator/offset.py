from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Offset:
    """Beat/lane shift applied to every translated coordinate.

    Results are never clamped; negative beats or lanes pass through.
    """

    vertical: float = 0.0
    lane: int = 0

    def apply(self, beat: float, lane: int) -> Tuple[float, int]:
        return beat + self.vertical, lane + self.lane

    def apply_beat(self, beat: float) -> float:
        return beat + self.vertical

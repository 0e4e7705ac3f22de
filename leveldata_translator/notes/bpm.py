from dataclasses import dataclass
from typing import Literal

from dataclasses_json import dataclass_json


@dataclass_json
@dataclass(kw_only=True)
class Bpm:
    type: Literal["BPM"] = "BPM"
    bpm: float
    beat: float

from dataclasses import dataclass
from typing import Literal, Optional

from dataclasses_json import dataclass_json

from .serialization import exclude_none


@dataclass_json
@dataclass(kw_only=True)
class Single:
    type: Literal["Single"] = "Single"
    flick: Optional[bool] = exclude_none()
    beat: float
    lane: int

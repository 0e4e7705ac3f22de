from dataclasses import dataclass
from typing import Dict, Literal, Optional

from dataclasses_json import dataclass_json

from .serialization import exclude_none


@dataclass_json
@dataclass(kw_only=True)
class Passthrough:
    """Best-effort record for archetypes with no dedicated editable form."""

    type: str
    beat: float
    lane: int
    name: Optional[str] = exclude_none()
    refs: Optional[Dict[str, str]] = exclude_none()


@dataclass_json
@dataclass(kw_only=True)
class Meta:
    type: Literal["Meta"] = "Meta"
    name: str

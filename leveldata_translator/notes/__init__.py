from typing import Union

from .bpm import Bpm
from .passthrough import Meta, Passthrough
from .single import Single
from .slide import Slide, SlidePoint

TranslatedNote = Union[Single, Slide, Bpm, Passthrough, Meta]

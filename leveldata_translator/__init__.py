__version__ = "0.1.0"

from .archetypes import NoteCategory, classify
from .audit import AuditLog
from .config import TranslatorOptions, load_config
from .errors import (
    ConfigError,
    EntityError,
    EntityReferenceError,
    InvalidTempoError,
    StructuralError,
    TranslatorError,
)
from .exporter import export
from .level import EntityIndex, LevelData, LevelDataEntity
from .loader import load, load_path, loads
from .offset import Offset
from .translator import BatchSummary, Issue, TranslationResult, Translator

__all__ = [
    "AuditLog",
    "BatchSummary",
    "ConfigError",
    "EntityError",
    "EntityIndex",
    "EntityReferenceError",
    "InvalidTempoError",
    "Issue",
    "LevelData",
    "LevelDataEntity",
    "NoteCategory",
    "Offset",
    "StructuralError",
    "TranslationResult",
    "Translator",
    "TranslatorError",
    "TranslatorOptions",
    "classify",
    "export",
    "load",
    "load_config",
    "load_path",
    "loads",
]

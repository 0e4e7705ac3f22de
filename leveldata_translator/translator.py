import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Literal, Optional, Tuple, Union

from .archetypes import (
    Classification,
    EngineArchetypeDataName,
    NoteCategory,
    classify,
)
from .audit import AuditLog
from .config import TranslatorOptions
from .errors import EntityError, InvalidTempoError, StructuralError
from .exporter import export, to_dicts
from .fields import base_beat, base_lane, entity_refs, field_value, format_refs
from .level import EntityIndex, LevelData, LevelDataEntity
from .loader import load_path, parse
from .notes import Bpm, Meta, Passthrough, TranslatedNote
from .simline import expand_sim_line, single_from_entity
from .slide_chain import SlideChainReconstructor
from .utils import LEVEL_SUFFIXES, is_level_file, output_path_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Issue:
    index: int
    severity: Literal["error", "warning"]
    message: str
    archetype: Optional[str] = None


@dataclass
class TranslationResult:
    notes: List[TranslatedNote] = field(default_factory=list)
    issues: List[Issue] = field(default_factory=list)
    entity_count: int = 0
    source: Optional[str] = None
    output: Optional[Path] = None

    @property
    def errors(self) -> List[Issue]:
        return [i for i in self.issues if i.severity == "error"]

    @property
    def warnings(self) -> List[Issue]:
        return [i for i in self.issues if i.severity == "warning"]

    def to_dicts(self) -> List[dict]:
        return to_dicts(self.notes)


@dataclass
class BatchSummary:
    files: int = 0
    succeeded: int = 0
    failed: int = 0
    entities: int = 0
    notes: int = 0
    errors: int = 0
    warnings: int = 0
    failures: List[Tuple[str, str]] = field(default_factory=list)

    def add(self, result: TranslationResult):
        self.succeeded += 1
        self.entities += result.entity_count
        self.notes += len(result.notes)
        self.errors += len(result.errors)
        self.warnings += len(result.warnings)


class TranslationState(Enum):
    SCANNING = "scanning"
    FLUSHED = "flushed"


class TranslationPass:
    """One document's translation: a scanning pass, then the deferred slides.

    Entities are handled in input order. Slide and connector segments are
    collected during the scan and emitted after every other note once the
    scan is done.
    """

    def __init__(
        self,
        level: LevelData,
        options: TranslatorOptions,
        audit: AuditLog,
        source: Optional[str] = None,
    ):
        self.level = level
        self.options = options
        self.offset = options.offset
        self.audit = audit
        self.source = source
        self.state = TranslationState.SCANNING
        self.total = len(level.entities)
        self.result = TranslationResult(entity_count=self.total, source=source)
        audit.file_started(source or "<document>", self.total, level.bgmOffset)

        self._handlers: Dict[
            NoteCategory, Callable[[int, LevelDataEntity, Classification], None]
        ] = {
            NoteCategory.METADATA: self._metadata,
            NoteCategory.TEMPO_CHANGE: self._tempo_change,
            NoteCategory.SINGLE_TAP: self._single,
            NoteCategory.SINGLE_FLICK: self._single,
            NoteCategory.SIMULTANEOUS_PAIR: self._sim_line,
            NoteCategory.SLIDE_SEGMENT: self._slide_segment,
            NoteCategory.CONNECTOR_SEGMENT: self._slide_segment,
            NoteCategory.PASSTHROUGH: self._passthrough,
        }

        self.entities: List[Tuple[int, Optional[LevelDataEntity]]] = []
        for position, raw in enumerate(level.entities, start=1):
            try:
                self.entities.append((position, LevelDataEntity.from_raw(raw)))
            except EntityError as e:
                self.entities.append((position, None))
                self._error(position, e)

        self.index = EntityIndex([(p, e) for p, e in self.entities if e is not None])
        for position, name in self.index.duplicates:
            self._warning(
                position, f"Duplicate entity name {name!r}; the first one is used"
            )
        self.slides = SlideChainReconstructor(
            self.index, self.offset, merge_unlinked=options.merge_unlinked
        )

    def _error(self, position: int, error: EntityError):
        archetype = getattr(error.entity, "archetype", None)
        self.result.issues.append(
            Issue(position, "error", error.error_message, archetype)
        )
        self.audit.error(position, error.error_message)

    def _warning(self, position: int, message: str, archetype: Optional[str] = None):
        self.result.issues.append(Issue(position, "warning", message, archetype))
        self.audit.warning(position, message)

    def _emit(self, note: TranslatedNote):
        self.result.notes.append(note)

    def _audit_entity(
        self,
        position: int,
        category: NoteCategory,
        name: str,
        base: Tuple[float, int],
        final: Tuple[float, int],
        refs: str = "",
    ):
        self.audit.entity(position, self.total, category, name, base, final, refs)

    def _audit_moved(
        self, position: int, entity: LevelDataEntity, category: NoteCategory
    ):
        base = (base_beat(entity), base_lane(entity))
        self._audit_entity(
            position,
            category,
            entity.name or "",
            base,
            self.offset.apply(*base),
            format_refs(entity_refs(entity)),
        )

    def run(self) -> TranslationResult:
        if self.state is not TranslationState.SCANNING:
            raise RuntimeError("Translation pass already flushed")

        for position, entity in self.entities:
            if entity is None:
                continue
            classification = classify(entity.archetype)
            handler = self._handlers[classification.category]
            try:
                handler(position, entity, classification)
            except EntityError as e:
                self._error(position, e)

        self._flush()
        return self.result

    def _flush(self):
        for reconstructed in self.slides.build():
            slide = reconstructed.slide
            self._emit(slide)
            self.audit.slide(
                reconstructed.group.key, slide.start_beat, len(slide.connections)
            )
        self.state = TranslationState.FLUSHED

    def _metadata(self, position, entity, classification):
        self._audit_moved(position, entity, classification.category)
        if self.options.emit_metadata:
            self._emit(Meta(name=entity.archetype))

    def _tempo_change(self, position, entity, classification):
        beat = field_value(entity.data, EngineArchetypeDataName.Beat)
        bpm = field_value(entity.data, EngineArchetypeDataName.Bpm)
        if bpm <= 0 or beat < 0:
            raise InvalidTempoError(
                entity, f"Invalid BPM change: bpm={bpm} beat={beat}"
            )
        final_beat = self.offset.apply_beat(beat)
        self._emit(Bpm(bpm=bpm, beat=final_beat))
        self._audit_entity(
            position,
            classification.category,
            "BPM",
            (beat, 0),
            (final_beat, 0),
            format_refs(entity_refs(entity)),
        )

    def _single(self, position, entity, classification):
        beat, lane, single = single_from_entity(entity, self.offset)
        self._emit(single)
        self._audit_entity(
            position,
            classification.category,
            entity.name or "",
            (beat, lane),
            (single.beat, single.lane),
            format_refs(entity_refs(entity)),
        )

    def _sim_line(self, position, entity, classification):
        left, right = expand_sim_line(entity, self.index, self.offset)
        for this, other in ((left, right), (right, left)):
            self._emit(this.note)
            self._audit_entity(
                position,
                classification.category,
                f"{entity.name or 'SimLine'}:{this.side}",
                (this.base_beat, this.base_lane),
                (this.note.beat, this.note.lane),
                f"{other.side}={other.ref}",
            )

    def _slide_segment(self, position, entity, classification):
        key, unlinked = self.slides.add(position, entity)
        if unlinked:
            if self.options.merge_unlinked:
                message = (
                    "Slide segment has neither a first reference nor a name; "
                    "merged into the shared unlinked slide"
                )
            else:
                message = (
                    "Slide segment has neither a first reference nor a name; "
                    f"emitted on its own as slide {key!r}"
                )
            self._warning(position, message, entity.archetype)
        self._audit_moved(position, entity, classification.category)

    def _passthrough(self, position, entity, classification):
        if not classification.known:
            self._warning(
                position,
                f"Unknown archetype {entity.archetype!r}; passed through as is",
                entity.archetype,
            )
        beat, lane = self.offset.apply(base_beat(entity), base_lane(entity))
        refs = entity_refs(entity)
        self._emit(
            Passthrough(
                type=classification.dev_type,
                beat=beat,
                lane=lane,
                name=entity.name or None,
                refs=refs or None,
            )
        )
        self._audit_moved(position, entity, classification.category)


class Translator:
    """Compiled LevelData -> editable chart notes.

    The offset and the other options are fixed per instance, so translators
    with different settings can be used side by side.
    """

    def __init__(
        self,
        options: Optional[TranslatorOptions] = None,
        audit: Optional[AuditLog] = None,
    ):
        self.options = options or TranslatorOptions()
        self.audit = audit or AuditLog()
        self.audit.run_started(self.options.offset, self.options.merge_unlinked)

    def translate(
        self, level: Union[LevelData, Any], source: Optional[str] = None
    ) -> TranslationResult:
        """Translate one document.

        Only ``StructuralError`` escapes; per-entity problems end up in
        ``TranslationResult.issues``.
        """
        if not isinstance(level, LevelData):
            level = parse(level, source or "<document>")
        return TranslationPass(level, self.options, self.audit, source).run()

    def translate_file(
        self, input_path: Union[str, Path], output_dir: Union[str, Path]
    ) -> TranslationResult:
        input_path = Path(input_path)
        if not input_path.name.lower().endswith(LEVEL_SUFFIXES):
            raise StructuralError(input_path.name, "Not a JSON level file")

        level = load_path(input_path)
        result = self.translate(level, source=input_path.name)

        output_path = output_path_for(input_path, output_dir)
        export(
            output_path,
            result.notes,
            minified=self.options.minified,
            single_precision=self.options.single_precision,
        )
        result.output = output_path
        self.audit.file_completed(input_path.name, output_path, len(result.notes))
        logger.info(
            "Translated %s -> %s (%d notes, %d errors, %d warnings)",
            input_path.name,
            output_path,
            len(result.notes),
            len(result.errors),
            len(result.warnings),
        )
        return result

    def translate_batch(
        self, input_dir: Union[str, Path], output_dir: Union[str, Path]
    ) -> BatchSummary:
        input_dir = Path(input_dir)
        if not input_dir.is_dir():
            raise FileNotFoundError(f"Input directory not found: {input_dir}")

        files = sorted(p for p in input_dir.iterdir() if is_level_file(p))
        summary = BatchSummary(files=len(files))
        if not files:
            logger.warning("No JSON level files in %s", input_dir)

        for i, path in enumerate(files, start=1):
            logger.info("[%d/%d] %s", i, len(files), path.name)
            try:
                result = self.translate_file(path, output_dir)
            except (StructuralError, OSError, ValueError, ArithmeticError) as e:
                summary.failed += 1
                summary.failures.append((path.name, str(e)))
                self.audit.file_failed(path.name, str(e))
                logger.error("Failed to translate %s: %s", path.name, e)
                continue
            summary.add(result)

        self.audit.batch_completed(summary)
        return summary

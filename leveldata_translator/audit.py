import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from .archetypes import NoteCategory
from .offset import Offset

LOGGER_NAME = "leveldata_translator.audit"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
RULE = "=" * 72


def log_file_name(now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    return f"note_translate_{now.strftime('%Y%m%d%H%M%S%f')[:-3]}.log"


class AuditLog:
    """Per-run trail of every translated entity.

    Everything goes through a standard ``logging.Logger``; ``to_file`` adds a
    time-stamped log file under ``log_dir``. Nothing in the translator reads
    the log back.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(LOGGER_NAME)
        self.path: Optional[Path] = None
        self._handler: Optional[logging.Handler] = None

    @classmethod
    def to_file(cls, log_dir: Union[str, Path]) -> "AuditLog":
        audit = cls()
        audit.open_file(log_dir)
        return audit

    def open_file(self, log_dir: Union[str, Path]) -> Path:
        self.close()
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        self.path = log_dir / log_file_name()

        handler = logging.FileHandler(self.path, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        self._handler = handler
        self.logger.addHandler(handler)
        self.logger.setLevel(logging.INFO)
        self.logger.propagate = False

        self.logger.info(RULE)
        self.logger.info("Audit log: %s", self.path)
        self.logger.info(RULE)
        return self.path

    def close(self):
        if self._handler is None:
            return
        self.logger.removeHandler(self._handler)
        self._handler.close()
        self._handler = None
        self.logger.propagate = True

    def __enter__(self) -> "AuditLog":
        return self

    def __exit__(self, *exc_info):
        self.close()

    def run_started(self, offset: Offset, merge_unlinked: bool):
        self.logger.info(
            "Reverse translation offsets | beat=%s | lane=%s | merge unlinked slides=%s",
            offset.vertical,
            offset.lane,
            merge_unlinked,
        )

    def file_started(self, source: str, entity_count: int, bgm_offset: float):
        self.logger.info(RULE)
        self.logger.info(
            "Translating %s | entities=%d | bgmOffset=%s",
            source,
            entity_count,
            bgm_offset,
        )

    def entity(
        self,
        position: int,
        total: int,
        category: NoteCategory,
        name: str,
        base: tuple,
        final: tuple,
        refs: str = "",
    ):
        self.logger.info(
            "[%d/%d] type=%s | name=%s | base(B=%s,L=%s) | offset(B=%s,L=%s) | refs=%s",
            position,
            total,
            category.audit_code,
            name,
            base[0],
            base[1],
            final[0],
            final[1],
            refs,
        )

    def slide(self, group_key: str, start_beat: float, point_count: int):
        self.logger.info(
            "Slide | group=%r | start beat=%s | points=%d",
            group_key,
            start_beat,
            point_count,
        )

    def error(self, position: int, message: str):
        self.logger.error("[%d] %s", position, message)

    def warning(self, position: int, message: str):
        self.logger.warning("[%d] %s", position, message)

    def file_failed(self, source: str, message: str):
        self.logger.error("File failed: %s | %s", source, message)

    def file_completed(self, source: str, output: Optional[Path], note_count: int):
        self.logger.info(
            "Translated %s -> %s | notes=%d", source, output or "-", note_count
        )
        self.logger.info(RULE)

    def batch_completed(self, summary):
        self.logger.info(RULE)
        self.logger.info(
            "Batch finished | files=%d | succeeded=%d | failed=%d | entities=%d | notes=%d",
            summary.files,
            summary.succeeded,
            summary.failed,
            summary.entities,
            summary.notes,
        )
        self.logger.info(RULE)

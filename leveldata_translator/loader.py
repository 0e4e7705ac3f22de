import gzip
import json
import zlib
from collections import abc
from pathlib import Path
from typing import IO, Any, Union

from .errors import StructuralError
from .level import LevelData


def _is_gzip_start(two_bytes: bytes) -> bool:
    return two_bytes[:2] == b"\x1f\x8b"


def parse(document: Any, source: str = "<document>") -> LevelData:
    """Check the top-level shape of a decoded LevelData document."""
    if not isinstance(document, abc.Mapping):
        raise StructuralError(source, "Expected an object at the top level")
    entities = document.get("entities")
    if entities is None:
        raise StructuralError(source, 'Missing "entities" array')
    if not isinstance(entities, list):
        raise StructuralError(source, '"entities" should be an array')
    bgm_offset = document.get("bgmOffset", 0)
    if isinstance(bgm_offset, bool) or not isinstance(bgm_offset, (int, float)):
        bgm_offset = 0
    return LevelData(entities=entities, bgmOffset=bgm_offset)


def loads(data: Union[str, bytes, bytearray], source: str = "<document>") -> LevelData:
    if isinstance(data, (bytes, bytearray)):
        if _is_gzip_start(data):
            try:
                data = gzip.decompress(data)
            except (gzip.BadGzipFile, EOFError, zlib.error) as e:
                raise StructuralError(source, f"Corrupt gzip data: {e}") from e
        try:
            data = bytes(data).decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise StructuralError(source, f"Not UTF-8 text: {e}") from e
    try:
        document = json.loads(data)
    except json.JSONDecodeError as e:
        raise StructuralError(source, f"Invalid JSON: {e}") from e
    return parse(document, source)


def load(fp: IO, source: str = "<stream>") -> LevelData:
    return loads(fp.read(), source)


def load_path(path: Union[str, Path]) -> LevelData:
    path = Path(path)
    with path.open("rb") as f:
        return load(f, source=path.name)

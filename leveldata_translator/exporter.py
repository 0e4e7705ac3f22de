import io
import json
from pathlib import Path
from typing import Iterable, List, Union

from .notes import TranslatedNote
from .utils import SinglePrecisionFloatEncoder


def _remove_none(data):
    if isinstance(data, dict):
        for key, val in list(data.items()):
            if val is None:
                del data[key]
            else:
                _remove_none(val)
    elif isinstance(data, list):
        for obj in data:
            _remove_none(obj)


def to_dicts(notes: Iterable[Union[TranslatedNote, dict]]) -> List[dict]:
    out = [note if isinstance(note, dict) else note.to_dict() for note in notes]
    _remove_none(out)
    return out


def export(
    path: Union[str, Path, io.BytesIO, io.StringIO, io.TextIOBase],
    notes: Iterable[Union[TranslatedNote, dict]],
    minified: bool = False,
    single_precision: bool = False,
):
    """Write translated notes as a JSON array."""
    data = to_dicts(notes)
    kwargs = dict(
        indent=None if minified else 4,
        ensure_ascii=False,
        cls=SinglePrecisionFloatEncoder if single_precision else json.JSONEncoder,
    )

    if isinstance(path, (str, Path)):
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            json.dump(data, f, **kwargs)
    elif isinstance(path, (io.StringIO, io.TextIOBase)):
        json.dump(data, path, **kwargs)
        path.seek(0)
    elif isinstance(path, io.BytesIO):
        path.write(json.dumps(data, **kwargs).encode("utf-8"))
        path.seek(0)
    else:
        raise TypeError(f"Unsupported path type: {type(path)}")

import json
from pathlib import Path
from typing import Union

import numpy as np

LEVEL_SUFFIXES = (".json", ".json.gz")


def to_single_precision(o):
    """Round every float through float32, e.g. -3.200000047683716 -> -3.2."""
    if isinstance(o, float):
        return float(str(np.float32(o)))
    if isinstance(o, dict):
        return {k: to_single_precision(v) for k, v in o.items()}
    if isinstance(o, (list, tuple)):
        return [to_single_precision(v) for v in o]
    return o


class SinglePrecisionFloatEncoder(json.JSONEncoder):
    def iterencode(self, o, _one_shot=False):
        return super().iterencode(to_single_precision(o), _one_shot)


def is_level_file(path: Union[str, Path]) -> bool:
    path = Path(path)
    return path.is_file() and path.name.lower().endswith(LEVEL_SUFFIXES)


def output_path_for(input_path: Union[str, Path], output_dir: Union[str, Path]) -> Path:
    name = Path(input_path).name
    if name.lower().endswith(".gz"):
        name = name[:-3]
    if not name.lower().endswith(".json"):
        name += ".json"
    return Path(output_dir) / name

from dataclasses import field

from dataclasses_json.cfg import config


def exclude_none():
    return field(default=None, metadata=config(exclude=lambda x: x is None))

# -*- coding: utf-8 -*-
"""Constants."""
from enum import Enum, EnumMeta

# board geometry

GRID_SIZE = 9
BOX_SIZE = 3
CELL_COUNT = GRID_SIZE * GRID_SIZE
EMPTY = 0
SYMBOLS = tuple(range(1, GRID_SIZE + 1))

# value -> (pet name, icon)
PETS = {
    1: ("Golden Retriever", "🐕"),
    2: ("Poodle", "🐩"),
    3: ("German Shepherd", "🐕‍🦺"),
    4: ("Labrador", "🦮"),
    5: ("Tabby Cat", "🐱"),
    6: ("Black Cat", "🐈‍⬛"),
    7: ("Persian Cat", "🐈"),
    8: ("Siamese Cat", "😺"),
    9: ("Maine Coon", "🦁"),
}

# petdoku env var names
LOG_LEVEL_ENV_VAR = "PETDOKU_LOG_LEVEL"  # global log level

# defaults

DEFAULT_FILL_PERCENTAGE = 30
DEFAULT_TICK_INTERVAL = 1.0  # seconds


# enumerate types


class CaseInsensitiveEnumMeta(EnumMeta):
    name_aliases = {}

    def __getitem__(cls, name):
        name = cls.name_aliases.get(name.lower(), name)
        return super().__getitem__(name.upper())

    def __getattr__(cls, name):
        if not name.startswith("_"):
            return cls[name.upper()]
        return super().__getattr__(name)

    def __call__(cls, value, *args, **kwargs):
        if isinstance(value, str):
            value = cls.name_aliases.get(value.lower(), value).lower()
        return super().__call__(value, *args, **kwargs)


class CaseInsensitiveEnum(Enum, metaclass=CaseInsensitiveEnumMeta):
    pass


class OverwritePolicyEnumMeta(CaseInsensitiveEnumMeta):
    name_aliases = {
        "strict": "reject",
        "overwrite": "permissive",
    }


class OverwritePolicy(CaseInsensitiveEnum, metaclass=OverwritePolicyEnumMeta):
    """How a click on a cell holding a different symbol is handled."""

    VALIDATED = "validated"  # overwrite only if the new symbol fits the peers
    PERMISSIVE = "permissive"  # always overwrite
    REJECT = "reject"  # never overwrite


class MoveResult(Enum):
    """Outcome of a cell interaction."""

    PLACED = "placed"
    OVERWRITTEN = "overwritten"
    CLEARED = "cleared"
    REJECTED = "rejected"
    IGNORED = "ignored"

    @property
    def accepted(self) -> bool:
        return self in (MoveResult.PLACED, MoveResult.OVERWRITTEN)

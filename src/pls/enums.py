from __future__ import annotations

import stat
from dataclasses import dataclass
from enum import Enum


class Typ(str, Enum):
    """Node type, in the order used when sorting by type."""

    DIR = "dir"
    SYMLINK = "symlink"
    FIFO = "fifo"
    SOCKET = "socket"
    BLOCK_DEVICE = "block_device"
    CHAR_DEVICE = "char_device"
    FILE = "file"
    UNKNOWN = "unknown"

    @classmethod
    def from_mode(cls, st_mode: int) -> Typ:
        if stat.S_ISDIR(st_mode):
            return cls.DIR
        if stat.S_ISLNK(st_mode):
            return cls.SYMLINK
        if stat.S_ISFIFO(st_mode):
            return cls.FIFO
        if stat.S_ISSOCK(st_mode):
            return cls.SOCKET
        if stat.S_ISBLK(st_mode):
            return cls.BLOCK_DEVICE
        if stat.S_ISCHR(st_mode):
            return cls.CHAR_DEVICE
        if stat.S_ISREG(st_mode):
            return cls.FILE
        return cls.UNKNOWN

    @property
    def rank(self) -> int:
        return _TYP_RANK[self]

    @property
    def cat(self) -> Cat:
        return Cat.DIR if self == Typ.DIR else Cat.FILE


_TYP_RANK = {typ: idx for idx, typ in enumerate(Typ)}


class Cat(int, Enum):
    """Coarse node category; directories sort before everything else."""

    DIR = 0
    FILE = 1


class Appearance(str, Enum):
    NORMAL = "normal"
    # display text is the symlink destination, not a name from the path
    SYMLINK = "symlink"
    TREE_CHILD = "tree_child"
    TREE_PARENT = "tree_parent"
    # an individual file passed on the command line, shown as given
    SOLO_FILE = "solo_file"


class CollapseKind(str, Enum):
    NAME = "name"
    EXT = "ext"


@dataclass(frozen=True)
class Collapse:
    """Collapse a node under the sibling with this exact name or extension."""

    kind: CollapseKind
    value: str


class SymState(str, Enum):
    OK = "ok"
    BROKEN = "broken"
    CYCLIC = "cyclic"
    ERROR = "error"


class Unit(str, Enum):
    BINARY = "binary"
    DECIMAL = "decimal"
    NONE = "none"


class SortField(str, Enum):
    """Bases for comparing two nodes.

    Every natural field has a reversed twin whose value carries a trailing
    underscore. ``none`` discards all fields listed before it.
    """

    DEV = "dev"
    INO = "ino"
    NLINK = "nlink"
    TYP = "typ"
    CAT = "cat"
    USER = "user"
    UID = "uid"
    GROUP = "group"
    GID = "gid"
    SIZE = "size"
    BLOCKS = "blocks"
    BTIME = "btime"
    CTIME = "ctime"
    MTIME = "mtime"
    ATIME = "atime"
    NAME = "name"
    CNAME = "cname"
    EXT = "ext"

    DEV_ = "dev_"
    INO_ = "ino_"
    NLINK_ = "nlink_"
    TYP_ = "typ_"
    CAT_ = "cat_"
    USER_ = "user_"
    UID_ = "uid_"
    GROUP_ = "group_"
    GID_ = "gid_"
    SIZE_ = "size_"
    BLOCKS_ = "blocks_"
    BTIME_ = "btime_"
    CTIME_ = "ctime_"
    MTIME_ = "mtime_"
    ATIME_ = "atime_"
    NAME_ = "name_"
    CNAME_ = "cname_"
    EXT_ = "ext_"

    NONE = "none"

    def simplify(self) -> tuple[SortField, bool]:
        """Split into the natural field and whether the direction is reversed."""
        if self.value.endswith("_"):
            return SortField(self.value.rstrip("_")), True
        return self, False

    @classmethod
    def clean(cls, fields: list[SortField]) -> list[SortField]:
        cleaned: list[SortField] = []
        for field in fields:
            if field == cls.NONE:
                cleaned.clear()
            else:
                cleaned.append(field)
        return list(dict.fromkeys(cleaned))


class DetailField(str, Enum):
    DEV = "dev"
    INO = "ino"
    NLINK = "nlink"
    TYP = "typ"
    PERM = "perm"
    OCT = "oct"
    USER = "user"
    UID = "uid"
    GROUP = "group"
    GID = "gid"
    SIZE = "size"
    BLOCKS = "blocks"
    BTIME = "btime"
    CTIME = "ctime"
    MTIME = "mtime"
    ATIME = "atime"
    NAME = "name"

    # shorthands, expanded by `clean`
    NONE = "none"
    STD = "std"
    ALL = "all"

    @property
    def is_timestamp(self) -> bool:
        return self in _TIMESTAMPS

    @property
    def uniformly_wide(self) -> bool:
        """Whether every cell of this column is equally wide by construction."""
        return self in _UNIFORM

    @property
    def right_aligned(self) -> bool:
        return self in _NUMERIC

    @classmethod
    def clean(cls, fields: list[DetailField]) -> list[DetailField]:
        cleaned: list[DetailField] = []
        for field in fields:
            if field == cls.NONE:
                cleaned.clear()
            elif field == cls.STD:
                cleaned.extend(_STD)
            elif field == cls.ALL:
                cleaned.extend(f for f in cls if f not in _SHORTHANDS)
            else:
                cleaned.append(field)
        return list(dict.fromkeys(cleaned)) or [cls.NAME]


_TIMESTAMPS = frozenset(
    {DetailField.BTIME, DetailField.CTIME, DetailField.MTIME, DetailField.ATIME}
)
_UNIFORM = _TIMESTAMPS | {DetailField.TYP, DetailField.PERM, DetailField.OCT}
_NUMERIC = frozenset(
    {
        DetailField.DEV,
        DetailField.INO,
        DetailField.NLINK,
        DetailField.UID,
        DetailField.GID,
        DetailField.SIZE,
        DetailField.BLOCKS,
    }
)
_SHORTHANDS = frozenset({DetailField.NONE, DetailField.STD, DetailField.ALL})
_STD = (
    DetailField.TYP,
    DetailField.PERM,
    DetailField.USER,
    DetailField.GROUP,
    DetailField.SIZE,
    DetailField.MTIME,
    DetailField.NAME,
)

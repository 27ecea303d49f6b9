from __future__ import annotations

import stat
from datetime import datetime

from .args import Args
from .config import Conf
from .enums import DetailField, Typ, Unit
from .fmt import escape, styled
from .models import Node
from .owner import OwnerMan

_BINARY_PREFIXES = ("Ki", "Mi", "Gi", "Ti", "Pi", "Ei")
_DECIMAL_PREFIXES = ("k", "M", "G", "T", "P", "E")


def user_val(node: Node, owner_man: OwnerMan) -> str:
    """Sort value for the owner: user name, else the numeric uid."""
    if node.meta is None:
        return ""
    uid = node.meta.st_uid
    return owner_man.user_name(uid) or str(uid)


def group_val(node: Node, owner_man: OwnerMan) -> str:
    if node.meta is None:
        return ""
    gid = node.meta.st_gid
    return owner_man.group_name(gid) or str(gid)


def typ_ch(node: Node, conf: Conf) -> str:
    info = conf.constants.typ[node.typ]
    return styled(info.ch, info.style)


def _dev(node: Node, conf: Conf) -> str:
    if node.meta is None:
        return ""
    return styled(str(node.meta.st_dev), conf.constants.dev_style)


def _ino(node: Node, conf: Conf) -> str:
    if node.meta is None:
        return ""
    return styled(str(node.meta.st_ino), conf.constants.inode_style)


def _nlink(node: Node, conf: Conf) -> str:
    if node.meta is None:
        return ""
    count = node.meta.st_nlink
    styles = conf.constants.nlink_styles
    if node.typ == Typ.DIR:
        style = styles.dir_sing if count == 1 else styles.dir_plur
    else:
        style = styles.file_sing if count == 1 else styles.file_plur
    return styled(str(count), style)


# (read, write, execute, special, special char) per permission class
_PERM_CLASSES = (
    (stat.S_IRUSR, stat.S_IWUSR, stat.S_IXUSR, stat.S_ISUID, "s"),
    (stat.S_IRGRP, stat.S_IWGRP, stat.S_IXGRP, stat.S_ISGID, "s"),
    (stat.S_IROTH, stat.S_IWOTH, stat.S_IXOTH, stat.S_ISVTX, "t"),
)


def _perm_bits(mode: int) -> list[tuple[str, str]]:
    bits: list[tuple[str, str]] = []
    for read, write, execute, special, special_ch in _PERM_CLASSES:
        bits.append(("r", "read") if mode & read else ("-", "none"))
        bits.append(("w", "write") if mode & write else ("-", "none"))
        if mode & special:
            ch = special_ch if mode & execute else special_ch.upper()
            bits.append((ch, "special"))
        elif mode & execute:
            bits.append(("x", "execute"))
        else:
            bits.append(("-", "none"))
    return bits


def _perm(node: Node, conf: Conf) -> str:
    if node.meta is None:
        return ""
    bits = _perm_bits(node.meta.st_mode)
    styles = conf.constants.perm_styles
    return "".join(styled(ch, styles.get(kind)) for ch, kind in bits)


def _oct(node: Node, conf: Conf) -> str:
    if node.meta is None:
        return ""
    digits = f"{stat.S_IMODE(node.meta.st_mode):04o}"
    styles = conf.constants.oct_styles
    return "".join(
        styled(digit, styles.get(kind))
        for digit, kind in zip(digits, ("special", "user", "group", "other"))
    )


def _user(node: Node, owner_man: OwnerMan, conf: Conf, *, numeric: bool) -> str:
    if node.meta is None:
        return ""
    uid = node.meta.st_uid
    text = str(uid) if numeric else user_val(node, owner_man)
    styles = conf.constants.user_styles
    style = styles.curr if owner_man.is_curr_user(uid) else styles.other
    return styled(escape(text), style)


def _group(node: Node, owner_man: OwnerMan, conf: Conf, *, numeric: bool) -> str:
    if node.meta is None:
        return ""
    gid = node.meta.st_gid
    text = str(gid) if numeric else group_val(node, owner_man)
    styles = conf.constants.group_styles
    style = styles.curr if owner_man.is_curr_group(gid) else styles.other
    return styled(escape(text), style)


def format_size(size: int, unit: Unit, conf: Conf) -> str:
    styles = conf.constants.size_styles
    base = styled("B", styles.base)
    if unit == Unit.NONE:
        return f"{styled(str(size), styles.mag)}{base}"

    step, prefixes = (
        (1024, _BINARY_PREFIXES) if unit == Unit.BINARY else (1000, _DECIMAL_PREFIXES)
    )
    if size < step:
        return f"{styled(str(size), styles.mag)}{base}"

    value = float(size)
    prefix = ""
    for prefix in prefixes:
        value /= step
        if value < step:
            break
    return f"{styled(f'{value:.1f}', styles.mag)}{styled(prefix, styles.prefix)}{base}"


def _size(node: Node, conf: Conf, args: Args) -> str:
    if node.meta is None or node.typ == Typ.DIR:
        return ""
    return format_size(node.meta.st_size, args.unit, conf)


def _blocks(node: Node) -> str:
    if node.meta is None:
        return ""
    blocks = getattr(node.meta, "st_blocks", None)
    return str(blocks) if blocks is not None else ""


def _time(node: Node, detail: DetailField, conf: Conf) -> str:
    value = node.time_ns(detail)
    if value is None:
        return ""
    moment = datetime.fromtimestamp(value / 1_000_000_000)
    return moment.strftime(conf.constants.timestamp_formats[detail])


def detail_value(
    detail: DetailField, node: Node, owner_man: OwnerMan, conf: Conf, args: Args
) -> str:
    """Render the markup for one non-name column of a node's row."""
    if detail == DetailField.DEV:
        return _dev(node, conf)
    if detail == DetailField.INO:
        return _ino(node, conf)
    if detail == DetailField.NLINK:
        return _nlink(node, conf)
    if detail == DetailField.TYP:
        return typ_ch(node, conf)
    if detail == DetailField.PERM:
        return _perm(node, conf)
    if detail == DetailField.OCT:
        return _oct(node, conf)
    if detail == DetailField.USER:
        return _user(node, owner_man, conf, numeric=False)
    if detail == DetailField.UID:
        return _user(node, owner_man, conf, numeric=True)
    if detail == DetailField.GROUP:
        return _group(node, owner_man, conf, numeric=False)
    if detail == DetailField.GID:
        return _group(node, owner_man, conf, numeric=True)
    if detail == DetailField.SIZE:
        return _size(node, conf, args)
    if detail == DetailField.BLOCKS:
        return _blocks(node)
    if detail.is_timestamp:
        return _time(node, detail, conf)
    return ""

from __future__ import annotations

import logging
import os
import re
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from .enums import Collapse, CollapseKind, DetailField, SymState, Typ
from .exc import ConfigError
from .models import Node, Spec

LOGGER = logging.getLogger(__name__)

CONF_FILE_NAME = ".pls.toml"


@dataclass(frozen=True)
class TypInfo:
    ch: str  # shown in the `typ` column
    suffix: str  # placed after the node name
    icon: str | None  # fallback when no spec provides an icon
    style: str  # applies to name, ch, suffix and icon


@dataclass(frozen=True)
class SymlinkInfo:
    sep: str
    style: str


@dataclass(frozen=True)
class OwnerStyles:
    curr: str
    other: str


@dataclass(frozen=True)
class NlinkStyles:
    file_sing: str = ""
    file_plur: str = "yellow"
    dir_sing: str = "yellow"
    dir_plur: str = ""


@dataclass(frozen=True)
class SizeStyles:
    mag: str = "bold"
    prefix: str = ""
    base: str = "dim"


@dataclass(frozen=True)
class TreeShapes:
    pipe_space: str = "│  "
    space_space: str = "   "
    tee_dash: str = "├─ "
    bend_dash: str = "└─ "


def _default_typ() -> dict[Typ, TypInfo]:
    return {
        Typ.DIR: TypInfo("d", "[dim]/[/]", "dir", "blue"),
        Typ.SYMLINK: TypInfo("l", "[dim]@[/]", "symlink", ""),
        Typ.FIFO: TypInfo("p", "[dim]|[/]", "fifo", ""),
        Typ.SOCKET: TypInfo("s", "[dim]=[/]", "socket", ""),
        Typ.BLOCK_DEVICE: TypInfo("b", "", "block_device", ""),
        Typ.CHAR_DEVICE: TypInfo("c", "", "char_device", ""),
        Typ.FILE: TypInfo("[dim]f[/]", "", None, ""),
        Typ.UNKNOWN: TypInfo("[red]?[/]", "", None, ""),
    }


def _default_timestamp_formats() -> dict[DetailField, str]:
    colors = {
        DetailField.BTIME: "green",
        DetailField.CTIME: "yellow",
        DetailField.MTIME: "yellow",
        DetailField.ATIME: "blue",
    }
    return {
        detail: f"[bold {color}]%Y-%b-%d[/] %I:%M%p"
        for detail, color in colors.items()
    }


def _default_symlink() -> dict[SymState, SymlinkInfo]:
    return {
        SymState.OK: SymlinkInfo("\U000f0054", "magenta"),  # nf-md-arrow_right
        SymState.BROKEN: SymlinkInfo("\U000f17a3", "red"),  # nf-md-arrow_down_right
        SymState.CYCLIC: SymlinkInfo("\U000f0459", "yellow"),  # nf-md-replay
        SymState.ERROR: SymlinkInfo("\U000f073a", "red"),  # nf-md-cancel
    }


def _default_column_names() -> dict[DetailField, str]:
    return {
        DetailField.DEV: "Device",
        DetailField.INO: "inode",
        DetailField.NLINK: "Link#",
        DetailField.TYP: "T",
        DetailField.PERM: "Permissions",
        DetailField.OCT: "SUGO",
        DetailField.USER: "User",
        DetailField.UID: "UID",
        DetailField.GROUP: "Group",
        DetailField.GID: "GID",
        DetailField.SIZE: "Size",
        DetailField.BLOCKS: "Blocks",
        DetailField.BTIME: "Created",
        DetailField.CTIME: "Changed",
        DetailField.MTIME: "Modified",
        DetailField.ATIME: "Accessed",
        DetailField.NAME: "Name",
    }


@dataclass
class Constants:
    dev_style: str = ""
    inode_style: str = ""
    nlink_styles: NlinkStyles = field(default_factory=NlinkStyles)
    typ: dict[Typ, TypInfo] = field(default_factory=_default_typ)
    perm_styles: dict[str, str] = field(
        default_factory=lambda: {
            "none": "dim",
            "read": "yellow",
            "write": "red",
            "execute": "green",
            "special": "magenta",
        }
    )
    oct_styles: dict[str, str] = field(
        default_factory=lambda: {
            "special": "magenta",
            "user": "blue",
            "group": "blue dim",
            "other": "dim",
        }
    )
    user_styles: OwnerStyles = field(
        default_factory=lambda: OwnerStyles(curr="blue bold", other="dim")
    )
    group_styles: OwnerStyles = field(
        default_factory=lambda: OwnerStyles(curr="blue", other="dim")
    )
    size_styles: SizeStyles = field(default_factory=SizeStyles)
    imp_styles: dict[int, str] = field(
        default_factory=lambda: {-1: "dim", 1: "italic", 2: "underline"}
    )
    timestamp_formats: dict[DetailField, str] = field(
        default_factory=_default_timestamp_formats
    )
    symlink: dict[SymState, SymlinkInfo] = field(default_factory=_default_symlink)
    tree: TreeShapes = field(default_factory=TreeShapes)
    header_style: str = "bold italic"
    column_names: dict[DetailField, str] = field(
        default_factory=_default_column_names
    )
    # edge length of image icons, in pixels
    icon_size: int = 16


def _default_icons() -> dict[str, str]:
    return {
        # pls
        "pls": "",  # nf-oct-dot_fill
        "missing": "",  # nf-cod-error
        # Node types
        "file": "",  # nf-oct-file
        "dir": "",  # nf-fa-folder
        "dir_open": "",  # nf-fa-folder_open
        "symlink": "\U000f0339",  # nf-md-link_variant
        "fifo": "\U000f07e5",  # nf-md-pipe
        "socket": "\U000f07e8",  # nf-md-power_socket_uk
        "char_device": "",  # nf-fa-paragraph
        "block_device": "\U000f02ca",  # nf-md-harddisk
        # Generic
        "audio": "\U000f04c3",  # nf-md-speaker
        "book": "",  # nf-fa-book
        "broom": "\U000f00e2",  # nf-md-broom
        "config": "",  # nf-seti-config
        "container": "",  # nf-oct-container
        "env": "",  # nf-fae-plant
        "image": "\U000f02e9",  # nf-md-image
        "json": "",  # nf-seti-json
        "law": "",  # nf-oct-law
        "lock": "",  # nf-oct-lock
        "package": "",  # nf-oct-package
        "runner": "\U000f070e",  # nf-md-run
        "shell": "",  # nf-oct-terminal
        "source": "",  # nf-oct-file_code
        "test": "\U000f0668",  # nf-md-test_tube
        "text": "",  # nf-fa-file_text
        "video": "\U000f0567",  # nf-md-video
        # Brands
        "apple": "",  # nf-fa-apple
        "git": "\U000f02a2",  # nf-md-git
        "github": "",  # nf-oct-mark_github
        "markdown": "",  # nf-oct-markdown
        "python": "",  # nf-seti-python
        "rust": "",  # nf-dev-rust
    }


def _default_specs() -> list[Spec]:
    # ascending order of specificity
    return [
        # Extensions
        Spec.build(r"\.sh$", "shell"),
        Spec.build(r"\.py$", "python"),
        Spec.build(r"\.rs$", "rust", style="rgb(247,76,0)"),
        Spec.build(r"\.(txt|rtf)$", "text"),
        Spec.build(r"\.mdx?$", "markdown"),
        Spec.build(r"\.ini$", "config"),
        Spec.build(r"\.(json|toml|yml|yaml)$", "json"),
        Spec.build(r"\.(jpg|jpeg|png|svg|webp|gif|ico)$", "image"),
        Spec.build(r"\.(mov|mp4|mkv|webm|avi|flv)$", "video"),
        Spec.build(r"\.(mp3|flac|ogg|wav)$", "audio"),
        # Partial names
        Spec.build(r"^\.env\b", "env"),
        Spec.build(r"^README\b", "book", importance=2),
        Spec.build(r"^LICENSE\b", "law"),
        Spec.build(r"docker-compose.*\.yml$", "container"),
        Spec.build(r"Dockerfile", "container"),
        # Exact names
        Spec.build(r"^\.DS_Store$", "apple", importance=-2),
        Spec.build(r"^\.pls\.toml$", "pls", importance=0),
        Spec.build(r"^\.git$", "git", importance=-2),
        Spec.build(r"^\.gitignore$", "git"),
        Spec.build(r"^\.github$", "github"),
        Spec.build(r"^(src|lib)$", "source", importance=1),
        Spec.build(r"^tests?$", "test"),
        Spec.build(r"^(justfile|Makefile)$", "runner"),
        Spec.build(r"^(Cargo|pyproject)\.toml$", "package"),
        Spec.build(
            r"^Cargo\.lock$",
            "lock",
            importance=-1,
            collapse=Collapse(CollapseKind.NAME, "Cargo.toml"),
        ),
        Spec.build(r"^rustfmt\.toml$", "broom"),
    ]


@dataclass
class Conf:
    """Resolved configuration for listing one path."""

    # icon names to Nerd Font glyphs or paths of image files
    icons: dict[str, str] = field(default_factory=_default_icons)
    # ascending order of specificity
    specs: list[Spec] = field(default_factory=_default_specs)
    constants: Constants = field(default_factory=Constants)

    def specs_of(self, node: Node) -> list[Spec]:
        return [self.specs[idx] for idx in node.specs]

    def apply(self, data: dict[str, object], source: str = "<memory>") -> None:
        """Layer one parsed `.pls.toml` document over this configuration."""
        icons = data.get("icons", {})
        if not isinstance(icons, dict):
            raise ConfigError(f"{source}: `icons` must be a table")
        self.icons.update({str(k): str(v) for k, v in icons.items()})

        specs = data.get("specs", [])
        if not isinstance(specs, list):
            raise ConfigError(f"{source}: `specs` must be an array of tables")
        self.specs.extend(_parse_spec(item, source) for item in specs)

        constants = data.get("constants", {})
        if not isinstance(constants, dict):
            raise ConfigError(f"{source}: `constants` must be a table")
        _apply_constants(self.constants, constants, source)


def _parse_spec(item: object, source: str) -> Spec:
    if not isinstance(item, dict) or "pattern" not in item:
        raise ConfigError(f"{source}: every spec needs a `pattern`")

    collapse = None
    raw_collapse = item.get("collapse")
    if raw_collapse is not None:
        if not isinstance(raw_collapse, dict) or len(raw_collapse) != 1:
            raise ConfigError(
                f"{source}: `collapse` must be either {{name = ...}} or {{ext = ...}}"
            )
        ((kind, value),) = raw_collapse.items()
        try:
            collapse = Collapse(CollapseKind(kind), str(value))
        except ValueError:
            raise ConfigError(f"{source}: unknown collapse kind {kind!r}") from None

    try:
        importance = int(item.get("importance", 0))
    except (TypeError, ValueError) as exc:
        raise ConfigError(
            f"{source}: `importance` must be an integer, not {item['importance']!r}"
        ) from exc

    try:
        return Spec.build(
            str(item["pattern"]),
            item.get("icon"),
            style=item.get("style"),
            importance=importance,
            collapse=collapse,
        )
    except re.error as exc:
        raise ConfigError(
            f"{source}: invalid pattern {item['pattern']!r}: {exc}"
        ) from exc


def _apply_constants(
    constants: Constants, data: dict[str, object], source: str
) -> None:
    if "header_style" in data:
        constants.header_style = str(data["header_style"])
    if "icon_size" in data:
        try:
            constants.icon_size = int(data["icon_size"])
        except (TypeError, ValueError) as exc:
            raise ConfigError(
                f"{source}: `icon_size` must be an integer, not {data['icon_size']!r}"
            ) from exc
    imp_styles = data.get("imp_styles", {})
    if isinstance(imp_styles, dict):
        try:
            constants.imp_styles.update(
                {int(k): str(v) for k, v in imp_styles.items()}
            )
        except ValueError:
            raise ConfigError(
                f"{source}: `imp_styles` keys must be integers"
            ) from None
    formats = data.get("timestamp_formats", {})
    if isinstance(formats, dict):
        for key, value in formats.items():
            try:
                detail = DetailField(key)
            except ValueError:
                raise ConfigError(
                    f"{source}: unknown timestamp field {key!r}"
                ) from None
            if not detail.is_timestamp:
                raise ConfigError(f"{source}: {key!r} is not a timestamp field")
            constants.timestamp_formats[detail] = str(value)


def find_git_root(path: Path) -> Path | None:
    for candidate in (path, *path.parents):
        # unreadable parents count as not being a repository
        if os.path.exists(candidate / ".git"):
            return candidate
    return None


class ConfMan:
    """Builds the configuration for a path from the `.pls.toml` files around it.

    Files are layered in the order home directory, Git root, listed
    directory; later files are more specific.
    """

    def __init__(self, home: Path | None = None) -> None:
        self.home = home if home is not None else Path.home()

    def _candidates(self, path: Path | None) -> list[Path]:
        dirs: list[Path] = [self.home]
        if path is not None:
            base = path if path.is_dir() else path.parent
            git_root = find_git_root(base)
            if git_root is not None:
                dirs.append(git_root)
            dirs.append(base)
        unique = list(dict.fromkeys(d.resolve() for d in dirs))
        return [d / CONF_FILE_NAME for d in unique]

    def get(self, path: Path | None = None) -> Conf:
        conf = Conf()
        for candidate in self._candidates(path):
            try:
                text = candidate.read_text(encoding="utf-8")
            except FileNotFoundError:
                continue
            except OSError as exc:
                raise ConfigError(f"{candidate}: {exc.strerror or exc}") from exc
            LOGGER.debug("Loading configuration from %s.", candidate)
            try:
                data = tomllib.loads(text)
            except tomllib.TOMLDecodeError as exc:
                raise ConfigError(f"{candidate}: {exc}") from exc
            conf.apply(data, str(candidate))
        return conf

from __future__ import annotations

import grp
import os
import pwd


class OwnerMan:
    """Caches user and group names for numeric IDs.

    One instance lives for a single listing and is shared by sorting and row
    rendering. It is not thread-safe.
    """

    def __init__(self) -> None:
        self._users: dict[int, str | None] = {}
        self._groups: dict[int, str | None] = {}
        self._curr_uid = os.getuid()
        self._curr_gids = set(os.getgroups()) | {os.getgid()}

    def user_name(self, uid: int) -> str | None:
        if uid not in self._users:
            try:
                self._users[uid] = pwd.getpwuid(uid).pw_name
            except KeyError:
                self._users[uid] = None
        return self._users[uid]

    def group_name(self, gid: int) -> str | None:
        if gid not in self._groups:
            try:
                self._groups[gid] = grp.getgrgid(gid).gr_name
            except KeyError:
                self._groups[gid] = None
        return self._groups[gid]

    def is_curr_user(self, uid: int) -> bool:
        return uid == self._curr_uid

    def is_curr_group(self, gid: int) -> bool:
        return gid in self._curr_gids

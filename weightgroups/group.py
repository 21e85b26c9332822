"""A group contract: an admin-managed set of weighted members with history."""

from __future__ import annotations

from collections.abc import Iterable

from weightgroups.core import Admin, Hooks, Response, SnapshotMap
from weightgroups.messages import Member, MemberChangedHookMsg, MemberDiff

CONTRACT_NAME = "crates.io:cw4-group"

DEFAULT_LIMIT = 10
MAX_LIMIT = 30


class GroupContract:
    """Weighted membership list that only its admin may change.

    Every change is recorded per block height, so the weights held at the
    start of any past block can be queried. Registered hooks receive a
    :class:`MemberChangedHookMsg` for every change made through
    :meth:`execute_update_members`.
    """

    def __init__(
        self,
        admin: str | None = None,
        members: Iterable[Member] = (),
        height: int = 0,
    ) -> None:
        self.contract_name = CONTRACT_NAME
        self._admin = Admin(admin)
        self._hooks = Hooks()
        self._members = SnapshotMap()
        self._total = 0
        for member in members:
            self._total += member.weight
            self._members.save(member.addr, member.weight, height)

    def update_admin(self, sender: str, admin: str | None) -> Response:
        """Hand the admin role to ``admin``, or drop it to freeze the group."""
        return self._admin.execute_update_admin(sender, admin)

    def update_members(
        self,
        sender: str,
        height: int,
        add: Iterable[Member],
        remove: Iterable[str],
    ) -> MemberChangedHookMsg:
        """Apply additions, then removals, and return the resulting diffs.

        An address both added and removed ends up removed. Removing an
        address that is not a member has no effect.
        """
        self._admin.assert_admin(sender)

        total = self._total
        diffs: list[MemberDiff] = []

        for member in add:
            old = self._members.may_load(member.addr)
            total += member.weight - (old or 0)
            diffs.append(MemberDiff(member.addr, old, member.weight))
            self._members.save(member.addr, member.weight, height)

        for addr in remove:
            old = self._members.may_load(addr)
            if old is not None:
                diffs.append(MemberDiff(addr, old, None))
                total -= old
                self._members.remove(addr, height)

        self._total = total
        return MemberChangedHookMsg(diffs)

    def execute_update_members(
        self,
        sender: str,
        height: int,
        add: Iterable[Member],
        remove: Iterable[str],
    ) -> Response:
        """Update the members and notify every registered hook."""
        add = list(add)
        remove = list(remove)
        diff = self.update_members(sender, height, add, remove)

        response = Response()
        for message in self._hooks.prepare_hooks(diff.into_message):
            response.add_message(message)
        return (
            response.add_attribute("action", "update_members")
            .add_attribute("added", len(add))
            .add_attribute("removed", len(remove))
            .add_attribute("sender", sender)
        )

    def add_hook(self, sender: str, addr: str) -> Response:
        return self._hooks.add_hook(self._admin, sender, addr)

    def remove_hook(self, sender: str, addr: str) -> Response:
        return self._hooks.remove_hook(self._admin, sender, addr)

    def member(self, addr: str, at_height: int | None = None) -> int | None:
        """Weight of ``addr`` now, or at the start of block ``at_height``."""
        if at_height is None:
            return self._members.may_load(addr)
        return self._members.may_load_at_height(addr, at_height)

    def list_members(
        self, start_after: str | None = None, limit: int | None = None
    ) -> list[Member]:
        """Current members in address order, paginated."""
        limit = min(DEFAULT_LIMIT if limit is None else limit, MAX_LIMIT)
        return [
            Member(addr, weight)
            for addr, weight in self._members.items(start_after, limit)
        ]

    def total_weight(self) -> int:
        return self._total

    def query_admin(self) -> str | None:
        return self._admin.get()

    def query_hooks(self) -> list[str]:
        return self._hooks.query_hooks()
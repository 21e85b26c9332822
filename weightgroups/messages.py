"""Message types exchanged between contracts and their JSON encoding."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any


def _encode(payload: Any) -> bytes:
    return json.dumps(payload, separators=(",", ":")).encode("utf-8")


@dataclass(frozen=True)
class Coin:
    denom: str
    amount: int


@dataclass(frozen=True)
class Member:
    addr: str
    weight: int


@dataclass(frozen=True)
class MemberDiff:
    """A change in one member's weight; ``None`` means not a member."""

    key: str
    old: int | None
    new: int | None


@dataclass(frozen=True)
class WasmExecute:
    """A call to another contract with a JSON-encoded message."""

    contract_addr: str
    msg: bytes
    funds: tuple[Coin, ...] = ()


@dataclass(frozen=True)
class BankSend:
    """A transfer of native coins."""

    to_address: str
    amount: tuple[Coin, ...]


@dataclass
class MemberChangedHookMsg:
    """Notification sent to hooks whenever membership changes."""

    diffs: list[MemberDiff] = field(default_factory=list)

    @classmethod
    def one(cls, diff: MemberDiff) -> MemberChangedHookMsg:
        return cls([diff])

    def into_message(self, contract_addr: str) -> WasmExecute:
        payload = {
            "member_changed_hook": {
                "diffs": [{"key": d.key, "old": d.old, "new": d.new} for d in self.diffs]
            }
        }
        return WasmExecute(contract_addr=contract_addr, msg=_encode(payload))


@dataclass(frozen=True)
class GroupMessenger:
    """Builds messages addressed to a group contract."""

    addr: str

    def update_members(self, remove: list[str], add: list[Member]) -> WasmExecute:
        payload = {
            "update_members": {
                "remove": list(remove),
                "add": [{"addr": m.addr, "weight": m.weight} for m in add],
            }
        }
        return WasmExecute(contract_addr=self.addr, msg=_encode(payload))
"""Chain primitives and storage building blocks shared by the contracts."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from itertools import islice
from typing import Any, Callable

from weightgroups.errors import HookAlreadyRegistered, HookNotRegistered, NotAdmin


@dataclass(frozen=True)
class BlockInfo:
    """The block a message is processed in; time is in seconds."""

    height: int
    time: int = 0
    chain_id: str = "local"


class _ExpirationKind(Enum):
    AT_HEIGHT = "at_height"
    AT_TIME = "at_time"
    NEVER = "never"


@dataclass(frozen=True)
class Expiration:
    """A point at which something expires: a height, a time, or never."""

    kind: _ExpirationKind
    value: int = 0

    @classmethod
    def at_height(cls, height: int) -> Expiration:
        return cls(_ExpirationKind.AT_HEIGHT, height)

    @classmethod
    def at_time(cls, time: int) -> Expiration:
        return cls(_ExpirationKind.AT_TIME, time)

    @classmethod
    def never(cls) -> Expiration:
        return cls(_ExpirationKind.NEVER)

    def is_expired(self, block: BlockInfo) -> bool:
        if self.kind is _ExpirationKind.AT_HEIGHT:
            return block.height >= self.value
        if self.kind is _ExpirationKind.AT_TIME:
            return block.time >= self.value
        return False


class _DurationKind(Enum):
    HEIGHT = "height"
    TIME = "time"


@dataclass(frozen=True)
class Duration:
    """A span measured in blocks or in seconds."""

    kind: _DurationKind
    amount: int

    @classmethod
    def height(cls, blocks: int) -> Duration:
        return cls(_DurationKind.HEIGHT, blocks)

    @classmethod
    def time(cls, seconds: int) -> Duration:
        return cls(_DurationKind.TIME, seconds)

    def after(self, block: BlockInfo) -> Expiration:
        if self.kind is _DurationKind.HEIGHT:
            return Expiration.at_height(block.height + self.amount)
        return Expiration.at_time(block.time + self.amount)


@dataclass
class Response:
    """The outcome of an execution: messages to dispatch and attributes to log."""

    messages: list[Any] = field(default_factory=list)
    attributes: list[tuple[str, str]] = field(default_factory=list)

    def add_attribute(self, key: str, value: Any) -> Response:
        self.attributes.append((key, str(value)))
        return self

    def add_message(self, message: Any) -> Response:
        self.messages.append(message)
        return self


class SnapshotMap:
    """A map that remembers, for every block, the values held at its start."""

    def __init__(self) -> None:
        self._current: dict[Any, Any] = {}
        self._changelog: dict[Any, dict[int, Any]] = {}

    def _record(self, key: Any, height: int) -> None:
        log = self._changelog.setdefault(key, {})
        if height not in log:
            log[height] = self._current.get(key)

    def save(self, key: Any, value: Any, height: int) -> None:
        self._record(key, height)
        self._current[key] = value

    def remove(self, key: Any, height: int) -> None:
        self._record(key, height)
        self._current.pop(key, None)

    def may_load(self, key: Any) -> Any:
        return self._current.get(key)

    def may_load_at_height(self, key: Any, height: int) -> Any:
        """Return the value the key held at the start of block ``height``."""
        log = self._changelog.get(key, {})
        later = [h for h in log if h >= height]
        if later:
            return log[min(later)]
        return self._current.get(key)

    def items(self, start_after: Any = None, limit: int | None = None) -> list[tuple[Any, Any]]:
        """Current entries in ascending key order, after ``start_after``."""
        keys = sorted(self._current)
        if start_after is not None:
            keys = [k for k in keys if k > start_after]
        return [(k, self._current[k]) for k in islice(keys, limit)]


class Admin:
    """The single optional address allowed to change a contract's state."""

    def __init__(self, admin: str | None = None) -> None:
        self._admin = admin

    def get(self) -> str | None:
        return self._admin

    def set(self, admin: str | None) -> None:
        self._admin = admin

    def is_admin(self, addr: str) -> bool:
        return self._admin is not None and self._admin == addr

    def assert_admin(self, addr: str) -> None:
        if not self.is_admin(addr):
            raise NotAdmin()

    def execute_update_admin(self, sender: str, new_admin: str | None) -> Response:
        self.assert_admin(sender)
        self.set(new_admin)
        return (
            Response()
            .add_attribute("action", "update_admin")
            .add_attribute("admin", new_admin if new_admin is not None else "None")
            .add_attribute("sender", sender)
        )


class Hooks:
    """Addresses notified of every membership change, in registration order."""

    def __init__(self) -> None:
        self._hooks: list[str] = []

    def add_hook(self, admin: Admin, sender: str, addr: str) -> Response:
        admin.assert_admin(sender)
        if addr in self._hooks:
            raise HookAlreadyRegistered()
        self._hooks.append(addr)
        return (
            Response()
            .add_attribute("action", "add_hook")
            .add_attribute("hook", addr)
            .add_attribute("sender", sender)
        )

    def remove_hook(self, admin: Admin, sender: str, addr: str) -> Response:
        admin.assert_admin(sender)
        if addr not in self._hooks:
            raise HookNotRegistered()
        self._hooks.remove(addr)
        return (
            Response()
            .add_attribute("action", "remove_hook")
            .add_attribute("hook", addr)
            .add_attribute("sender", sender)
        )

    def query_hooks(self) -> list[str]:
        return list(self._hooks)

    def prepare_hooks(self, make_message: Callable[[str], Any]) -> list[Any]:
        return [make_message(hook) for hook in self._hooks]


@dataclass(frozen=True)
class Claim:
    """Tokens waiting to be released once ``release_at`` has passed."""

    amount: int
    release_at: Expiration


class Claims:
    """Pending unbonding claims per address."""

    def __init__(self) -> None:
        self._claims: dict[str, list[Claim]] = {}

    def create_claim(self, addr: str, amount: int, release_at: Expiration) -> None:
        self._claims.setdefault(addr, []).append(Claim(amount, release_at))

    def claim_tokens(self, addr: str, block: BlockInfo, cap: int | None = None) -> int:
        """Release every matured claim (up to ``cap``) and return the total."""
        released = 0
        waiting: list[Claim] = []
        for claim in self._claims.get(addr, []):
            fits = cap is None or released + claim.amount <= cap
            if claim.release_at.is_expired(block) and fits:
                released += claim.amount
            else:
                waiting.append(claim)
        if waiting:
            self._claims[addr] = waiting
        else:
            self._claims.pop(addr, None)
        return released

    def query_claims(self, addr: str) -> list[Claim]:
        return list(self._claims.get(addr, []))
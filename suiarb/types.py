"""Items delivered by the Shio auction feed."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

_U64_MAX = 2**64 - 1

_T = TypeVar("_T")


class _InvalidItem(ValueError):
    """Raised internally when a feed message does not match the expected shape."""


def _mapping(value: Any, what: str) -> dict:
    if not isinstance(value, dict):
        raise _InvalidItem(f"expected an object for {what}")
    return value


def _field(obj: dict, key: str) -> Any:
    try:
        return obj[key]
    except KeyError:
        raise _InvalidItem(f"missing field `{key}`") from None


def _string(obj: dict, key: str) -> str:
    value = _field(obj, key)
    if not isinstance(value, str):
        raise _InvalidItem(f"field `{key}` must be a string")
    return value


def _boolean(obj: dict, key: str) -> bool:
    value = _field(obj, key)
    if not isinstance(value, bool):
        raise _InvalidItem(f"field `{key}` must be a boolean")
    return value


def _u64(obj: dict, key: str) -> int:
    value = _field(obj, key)
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _U64_MAX:
        raise _InvalidItem(f"field `{key}` must be an unsigned 64-bit integer")
    return value


def _list_of(obj: dict, key: str, parse: Callable[[Any], _T]) -> list[_T]:
    if key not in obj:
        return []
    value = obj[key]
    if not isinstance(value, list):
        raise _InvalidItem(f"field `{key}` must be a list")
    return [parse(item) for item in value]


class ShioItemKind(enum.Enum):
    """The kinds of message the feed produces."""

    AUCTION_STARTED = "auctionStarted"
    AUCTION_ENDED = "auctionEnded"
    DUMMY = "dummy"


@dataclass(frozen=True)
class ShioEventId:
    event_seq: str
    tx_digest: str

    @classmethod
    def _from_json(cls, value: Any) -> ShioEventId:
        obj = _mapping(value, "event id")
        return cls(event_seq=_string(obj, "eventSeq"), tx_digest=_string(obj, "txDigest"))


@dataclass(frozen=True)
class ShioEvent:
    event_type: str
    bcs: str
    event_id: ShioEventId
    package_id: str
    parsed_json: Any
    sender: str
    transaction_module: str

    @classmethod
    def _from_json(cls, value: Any) -> ShioEvent:
        obj = _mapping(value, "event")
        return cls(
            event_type=_string(obj, "type"),
            bcs=_string(obj, "bcs"),
            event_id=ShioEventId._from_json(_field(obj, "id")),
            package_id=_string(obj, "packageId"),
            parsed_json=obj.get("parsedJson"),
            sender=_string(obj, "sender"),
            transaction_module=_string(obj, "transactionModule"),
        )


@dataclass(frozen=True)
class ShioObjectContent:
    data_type: str
    has_public_transfer: bool

    @classmethod
    def _from_json(cls, value: Any) -> ShioObjectContent:
        obj = _mapping(value, "object content")
        return cls(
            data_type=_string(obj, "dataType"),
            has_public_transfer=_boolean(obj, "hasPublicTransfer"),
        )


@dataclass(frozen=True)
class ShioObject:
    id: str
    object_type: str
    owner: Any
    content: ShioObjectContent
    object_bcs: str  # base64 encoded

    @classmethod
    def _from_json(cls, value: Any) -> ShioObject:
        obj = _mapping(value, "object")
        return cls(
            id=_string(obj, "id"),
            object_type=_string(obj, "objectType"),
            owner=_field(obj, "owner"),
            content=ShioObjectContent._from_json(_field(obj, "content")),
            object_bcs=_string(obj, "objectBcs"),
        )

    def data_type(self) -> str:
        return self.content.data_type

    def has_public_transfer(self) -> bool:
        return self.content.has_public_transfer


@dataclass(frozen=True)
class SideEffects:
    gas_usage: int
    created_objects: list[ShioObject] = field(default_factory=list)
    mutated_objects: list[ShioObject] = field(default_factory=list)
    events: list[ShioEvent] = field(default_factory=list)

    @classmethod
    def _from_json(cls, value: Any) -> SideEffects:
        obj = _mapping(value, "side effects")
        return cls(
            gas_usage=_u64(obj, "gasUsage"),
            created_objects=_list_of(obj, "createdObjects", ShioObject._from_json),
            mutated_objects=_list_of(obj, "mutatedObjects", ShioObject._from_json),
            events=_list_of(obj, "events", ShioEvent._from_json),
        )


@dataclass(frozen=True)
class ShioItem:
    """One feed message; unrecognised messages are kept as ``DUMMY`` with their raw value."""

    kind: ShioItemKind
    tx_digest: str = ""
    gas_price: int = 0
    deadline_timestamp_ms: int = 0
    side_effects: SideEffects | None = None
    winning_bid_amount: int = 0
    raw: Any = None

    def type_name(self) -> str:
        return self.kind.value

    def digest(self) -> str:
        if self.kind is ShioItemKind.AUCTION_STARTED:
            return self.tx_digest
        return self.kind.value

    def effective_gas_price(self) -> int:
        return self.gas_price if self.kind is ShioItemKind.AUCTION_STARTED else 0

    def deadline(self) -> int:
        return self.deadline_timestamp_ms if self.kind is ShioItemKind.AUCTION_STARTED else 0

    def events(self) -> list[ShioEvent]:
        if self.kind is ShioItemKind.AUCTION_STARTED and self.side_effects is not None:
            return list(self.side_effects.events)
        return []

    def created_mutated_objects(self) -> list[ShioObject]:
        if self.kind is ShioItemKind.AUCTION_STARTED and self.side_effects is not None:
            return [*self.side_effects.created_objects, *self.side_effects.mutated_objects]
        return []


def _parse_tagged(value: Any) -> ShioItem:
    obj = _mapping(value, "item")
    if len(obj) != 1:
        raise _InvalidItem("expected exactly one variant tag")
    ((tag, body),) = obj.items()
    body = _mapping(body, tag)
    if tag == ShioItemKind.AUCTION_STARTED.value:
        return ShioItem(
            kind=ShioItemKind.AUCTION_STARTED,
            tx_digest=_string(body, "txDigest"),
            gas_price=_u64(body, "gasPrice"),
            deadline_timestamp_ms=_u64(body, "deadlineTimestampMs"),
            side_effects=SideEffects._from_json(_field(body, "sideEffects")),
            raw=value,
        )
    if tag == ShioItemKind.AUCTION_ENDED.value:
        return ShioItem(
            kind=ShioItemKind.AUCTION_ENDED,
            tx_digest=_string(body, "txDigest"),
            winning_bid_amount=_u64(body, "winningBidAmount"),
            raw=value,
        )
    raise _InvalidItem(f"unknown variant `{tag}`")


def parse_shio_item(value: Any) -> ShioItem:
    """Turn a decoded JSON feed message into a ShioItem, falling back to a dummy item."""
    try:
        return _parse_tagged(value)
    except _InvalidItem:
        return ShioItem(kind=ShioItemKind.DUMMY, raw=value)
"""Annotated Move values and typed field extraction."""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


class MoveValueError(ValueError):
    """A struct field is missing or holds a value of the wrong kind."""


class MoveKind(enum.Enum):
    BOOL = "bool"
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    U128 = "u128"
    U256 = "u256"
    ADDRESS = "address"
    SIGNER = "signer"
    VECTOR = "vector"
    STRUCT = "struct"


@dataclass(frozen=True)
class MoveValue:
    """A Move value tagged with its kind; vectors hold MoveValues, structs a MoveStruct."""

    kind: MoveKind
    value: Any


@dataclass(frozen=True)
class MoveStruct:
    type_name: str
    fields: tuple[tuple[str, MoveValue], ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class SharedObjectArg:
    id: str
    initial_shared_version: int
    mutable: bool


def extract_field(move_struct: MoveStruct, field_name: str) -> MoveValue | None:
    return next((value for name, value in move_struct.fields if name == field_name), None)


def _require(move_struct: MoveStruct, field_name: str) -> MoveValue:
    value = extract_field(move_struct, field_name)
    if value is None:
        raise MoveValueError("field not found")
    return value


def _expect(value: MoveValue, kind: MoveKind, label: str) -> Any:
    if value.kind is not kind:
        raise MoveValueError(f"expected {label}")
    return value.value


def extract_struct(move_struct: MoveStruct, field_name: str) -> MoveStruct:
    return _expect(_require(move_struct, field_name), MoveKind.STRUCT, "struct")


def extract_vec(move_struct: MoveStruct, field_name: str) -> list[MoveValue]:
    return list(_expect(_require(move_struct, field_name), MoveKind.VECTOR, "vector"))


def extract_object_id(move_struct: MoveStruct, field_name: str) -> str:
    return _expect(_require(move_struct, field_name), MoveKind.ADDRESS, "address")


def extract_struct_array(move_struct: MoveStruct, field_name: str) -> list[MoveStruct]:
    items = _expect(_require(move_struct, field_name), MoveKind.VECTOR, "array")
    return [_expect(item, MoveKind.STRUCT, "struct") for item in items]


def extract_u128(move_struct: MoveStruct, field_name: str) -> int:
    return _expect(_require(move_struct, field_name), MoveKind.U128, "u128")


def extract_u64(move_struct: MoveStruct, field_name: str) -> int:
    return _expect(_require(move_struct, field_name), MoveKind.U64, "u64")


def extract_u32(move_struct: MoveStruct, field_name: str) -> int:
    return _expect(_require(move_struct, field_name), MoveKind.U32, "u32")


def extract_bool(move_struct: MoveStruct, field_name: str) -> bool:
    return _expect(_require(move_struct, field_name), MoveKind.BOOL, "bool")


def extract_u64_vec(move_struct: MoveStruct, field_name: str) -> list[int]:
    items = _expect(_require(move_struct, field_name), MoveKind.VECTOR, "vector")
    return [_expect(item, MoveKind.U64, "u64") for item in items]


def extract_u128_vec(move_struct: MoveStruct, field_name: str) -> list[int]:
    items = _expect(_require(move_struct, field_name), MoveKind.VECTOR, "vector")
    return [_expect(item, MoveKind.U128, "u128") for item in items]


def shared_obj_arg(object_id: str, owner: Any, mutable: bool) -> SharedObjectArg:
    """Build a shared-object argument; non-shared owners get initial version 0."""
    version = 0
    if isinstance(owner, Mapping):
        shared = owner.get("Shared")
        if isinstance(shared, Mapping) and "initial_shared_version" in shared:
            version = int(shared["initial_shared_version"])
    return SharedObjectArg(id=object_id, initial_shared_version=version, mutable=mutable)
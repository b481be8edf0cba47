import pytest

from suiarb.move_value import (
    MoveKind,
    MoveStruct,
    MoveValue,
    MoveValueError,
    SharedObjectArg,
    extract_bool,
    extract_field,
    extract_object_id,
    extract_struct,
    extract_struct_array,
    extract_u32,
    extract_u64,
    extract_u64_vec,
    extract_u128,
    extract_u128_vec,
    extract_vec,
    shared_obj_arg,
)

INNER = MoveStruct("0x1::m::Inner", (("x", MoveValue(MoveKind.U64, 3)),))

POOL = MoveStruct(
    "0x1::pool::Pool",
    (
        ("inner", MoveValue(MoveKind.STRUCT, INNER)),
        ("id", MoveValue(MoveKind.ADDRESS, "0xfeed")),
        ("liquidity", MoveValue(MoveKind.U128, 2**100)),
        ("fee", MoveValue(MoveKind.U64, 3000)),
        ("tick", MoveValue(MoveKind.U32, 60)),
        ("paused", MoveValue(MoveKind.BOOL, False)),
        ("weights", MoveValue(MoveKind.VECTOR, [MoveValue(MoveKind.U64, 1), MoveValue(MoveKind.U64, 2)])),
        ("big", MoveValue(MoveKind.VECTOR, [MoveValue(MoveKind.U128, 2**90)])),
        ("items", MoveValue(MoveKind.VECTOR, [MoveValue(MoveKind.STRUCT, INNER)])),
        ("mixed", MoveValue(MoveKind.VECTOR, [MoveValue(MoveKind.U64, 1), MoveValue(MoveKind.BOOL, True)])),
    ),
)


def test_extract_field_found_and_missing():
    assert extract_field(POOL, "fee") == MoveValue(MoveKind.U64, 3000)
    assert extract_field(POOL, "nothing") is None


def test_scalar_extraction():
    assert extract_u64(POOL, "fee") == 3000
    assert extract_u32(POOL, "tick") == 60
    assert extract_u128(POOL, "liquidity") == 2**100
    assert extract_bool(POOL, "paused") is False
    assert extract_object_id(POOL, "id") == "0xfeed"


def test_struct_and_vector_extraction():
    assert extract_struct(POOL, "inner") == INNER
    assert extract_u64(extract_struct(POOL, "inner"), "x") == 3
    assert extract_vec(POOL, "weights") == [MoveValue(MoveKind.U64, 1), MoveValue(MoveKind.U64, 2)]
    assert extract_u64_vec(POOL, "weights") == [1, 2]
    assert extract_u128_vec(POOL, "big") == [2**90]
    assert extract_struct_array(POOL, "items") == [INNER]


@pytest.mark.parametrize(
    "func",
    [extract_struct, extract_vec, extract_object_id, extract_struct_array, extract_u128,
     extract_u64, extract_u32, extract_bool, extract_u64_vec, extract_u128_vec],
)
def test_missing_field(func):
    with pytest.raises(MoveValueError, match="field not found"):
        func(POOL, "absent")


@pytest.mark.parametrize(
    "func, name, message",
    [
        (extract_struct, "fee", "expected struct"),
        (extract_vec, "fee", "expected vector"),
        (extract_object_id, "fee", "expected address"),
        (extract_struct_array, "fee", "expected array"),
        (extract_struct_array, "weights", "expected struct"),
        (extract_u128, "fee", "expected u128"),
        (extract_u64, "tick", "expected u64"),
        (extract_u32, "fee", "expected u32"),
        (extract_bool, "fee", "expected bool"),
        (extract_u64_vec, "mixed", "expected u64"),
        (extract_u64_vec, "fee", "expected vector"),
        (extract_u128_vec, "weights", "expected u128"),
    ],
)
def test_wrong_kind(func, name, message):
    with pytest.raises(MoveValueError, match=message):
        func(POOL, name)


def test_shared_obj_arg_uses_initial_shared_version():
    owner = {"Shared": {"initial_shared_version": 72869622}}
    arg = shared_obj_arg("0xc32c", owner, True)
    assert arg == SharedObjectArg("0xc32c", 72869622, True)


def test_shared_obj_arg_non_shared_owner_gets_zero():
    arg = shared_obj_arg("0xc32c", {"AddressOwner": "0xabc"}, False)
    assert arg.initial_shared_version == 0
    assert arg.mutable is False
    assert shared_obj_arg("0xc32c", "Immutable", True).initial_shared_version == 0
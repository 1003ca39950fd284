"""ScVal codec — native Python values <-> Soroban wire values.

Encoding validates locally (addresses, integer ranges) so malformed input
never reaches the network. Decoding maps the self-describing SCVal tree onto
plain Python: maps -> dict, vecs -> list, symbols/strings -> str,
integers of any width -> int, addresses -> strkey str.

Contract enums have been observed on the wire in three shapes once decoded:
  "Open"                      bare symbol
  ["Resolved", ["Yes"]]       vec with the tag first
  {"Resolved": "Yes"}         single-entry map keyed by tag
decode_enum() folds all of them into one TaggedVariant.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from stellar_sdk import Address, scval
from stellar_sdk import xdr as stellar_xdr

from src.pm_common.enums import MarketStatusTag
from src.pm_common.errors import InvalidAddressError, ValidationError, WireDecodeError
from src.pm_common.stroops import I128_MAX, U64_MAX
from src.pm_contract.domain.models import TaggedVariant

_T = stellar_xdr.SCValType

# Enum value used when a status field is missing or has an unknown shape
DEFAULT_ENUM_TAG = MarketStatusTag.OPEN.value


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def validate_address(address: str) -> str:
    """Return the address unchanged if it is a valid account (G...) or contract (C...) strkey."""
    if not isinstance(address, str):
        raise InvalidAddressError(repr(address))
    try:
        Address(address)
    except ValueError as exc:
        raise InvalidAddressError(address) from exc
    return address


def validate_account_id(address: str) -> str:
    if not validate_address(address).startswith("G"):
        raise InvalidAddressError(address)
    return address


def validate_contract_id(contract_id: str) -> str:
    if not contract_id:
        raise ValidationError("Contract id is not configured")
    if not validate_address(contract_id).startswith("C"):
        raise InvalidAddressError(contract_id)
    return contract_id


def _check_int(value: int, low: int, high: int, kind: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{kind} expects an int, got {type(value).__name__}")
    if not (low <= value <= high):
        raise ValidationError(f"{kind} out of range: {value}")
    return value


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def encode_address(address: str) -> stellar_xdr.SCVal:
    return scval.to_address(validate_address(address))


def encode_u64(value: int) -> stellar_xdr.SCVal:
    return scval.to_uint64(_check_int(value, 0, U64_MAX, "u64"))


def encode_i128(value: int) -> stellar_xdr.SCVal:
    return scval.to_int128(_check_int(value, -I128_MAX - 1, I128_MAX, "i128"))


def encode_string(value: str) -> stellar_xdr.SCVal:
    return scval.to_string(value)


def encode_bool(value: bool) -> stellar_xdr.SCVal:
    return scval.to_bool(value)


def encode_enum(tag: str, *values: stellar_xdr.SCVal) -> stellar_xdr.SCVal:
    """Enum case as Vec[Symbol(tag), *payload]: Side::Yes -> Vec[Symbol("Yes")]."""
    return scval.to_vec([scval.to_symbol(tag), *values])


def encode_record(fields: Mapping[str, stellar_xdr.SCVal]) -> stellar_xdr.SCVal:
    """Contract struct: map keyed by field-name symbols, in sorted key order."""
    entries = [
        stellar_xdr.SCMapEntry(key=scval.to_symbol(name), val=fields[name])
        for name in sorted(fields)
    ]
    return stellar_xdr.SCVal(type=_T.SCV_MAP, map=stellar_xdr.SCMap(entries))


def to_xdr(value: stellar_xdr.SCVal) -> str:
    return value.to_xdr()


def from_xdr(data: str) -> stellar_xdr.SCVal:
    try:
        return stellar_xdr.SCVal.from_xdr(data)
    except (ValueError, TypeError) as exc:
        raise WireDecodeError(f"undecodable SCVal XDR: {exc}") from exc


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def _hashable(value: Any) -> Any:
    if isinstance(value, list):
        return tuple(_hashable(v) for v in value)
    return value


def to_native(value: stellar_xdr.SCVal) -> Any:
    """Decode an SCVal tree into plain Python values."""
    kind = value.type
    if kind == _T.SCV_VOID:
        return None
    if kind == _T.SCV_BOOL:
        return scval.from_bool(value)
    if kind == _T.SCV_U32:
        return scval.from_uint32(value)
    if kind == _T.SCV_I32:
        return scval.from_int32(value)
    if kind == _T.SCV_U64:
        return scval.from_uint64(value)
    if kind == _T.SCV_I64:
        return scval.from_int64(value)
    if kind == _T.SCV_U128:
        return scval.from_uint128(value)
    if kind == _T.SCV_I128:
        return scval.from_int128(value)
    if kind == _T.SCV_SYMBOL:
        return scval.from_symbol(value)
    if kind == _T.SCV_STRING:
        raw = scval.from_string(value)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise WireDecodeError("string is not valid UTF-8") from exc
    if kind == _T.SCV_BYTES:
        return scval.from_bytes(value)
    if kind == _T.SCV_ADDRESS:
        return scval.from_address(value).address
    if kind == _T.SCV_VEC:
        return [to_native(item) for item in scval.from_vec(value)]
    if kind == _T.SCV_MAP:
        entries = value.map.sc_map if value.map is not None else []
        return {_hashable(to_native(e.key)): to_native(e.val) for e in entries}
    raise WireDecodeError(f"unsupported SCVal type {kind}")


def decode_record(value: stellar_xdr.SCVal | dict, fields: Iterable[str]) -> dict[str, Any]:
    """Decode a contract struct and pick the named fields; all must be present."""
    raw = to_native(value) if isinstance(value, stellar_xdr.SCVal) else value
    if not isinstance(raw, dict):
        raise WireDecodeError(f"expected a struct, got {type(raw).__name__}")
    missing = [name for name in fields if name not in raw]
    if missing:
        raise WireDecodeError(f"struct is missing fields {missing}")
    return {name: raw[name] for name in fields}


def decode_enum(raw: Any) -> TaggedVariant:
    if isinstance(raw, stellar_xdr.SCVal):
        raw = to_native(raw)
    if isinstance(raw, str):
        return TaggedVariant(raw)
    if isinstance(raw, (list, tuple)) and raw:
        return TaggedVariant(str(raw[0]), list(raw[1:]))
    if isinstance(raw, dict) and raw:
        tag, payload = next(iter(raw.items()))
        return TaggedVariant(str(tag), [payload])
    return TaggedVariant(DEFAULT_ENUM_TAG)


def decode_int(raw: Any, kind: str = "integer") -> int:
    """Check a decoded integer field; rejects bools and non-numeric payloads."""
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise WireDecodeError(f"{kind} field is not an integer: {raw!r}")
    return raw

"""
Record <-> payload encoding

A record is stored as a single object. The payload is built from one
field's value repeated end to end: once per field on insert, or as many
times as fit in the previous object's length on update. The other field
values are not stored, and reads hand the whole payload back under the
record key rather than splitting it into fields.

Existing objects depend on this layout, so it must stay as is.
"""

from typing import Dict, Mapping, Optional

from ycsb_s3.errors import InvalidRecordError


def select_unit(values: Mapping[str, bytes]) -> bytes:
    """Return the value of the first field the mapping yields"""
    for field in values:
        return bytes(values[field])
    raise InvalidRecordError("Record has no fields")


def repeat_count(
    values: Mapping[str, bytes], unit: bytes, existing_length: Optional[int] = None
) -> int:
    """
    Number of times the unit is written.

    Insert (``existing_length`` is None) uses the field count. Update keeps
    the stored length, truncated to a whole number of units.
    """
    if existing_length is None:
        return len(values)
    if not unit:
        raise InvalidRecordError(
            "Cannot derive a repeat count from an empty field value"
        )
    return existing_length // len(unit)


def encode_record(
    values: Mapping[str, bytes], existing_length: Optional[int] = None
) -> bytes:
    """Encode a record into the payload written to the object store"""
    unit = select_unit(values)
    return unit * repeat_count(values, unit, existing_length)


def decode_payload(key: str, payload: bytes) -> Dict[str, bytes]:
    """Turn a stored payload back into a record mapping"""
    return {key: payload}

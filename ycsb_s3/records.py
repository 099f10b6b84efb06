"""
Record-level read and write paths

These compose the codec with single-object operations. Update has to probe
the stored object's length before it can encode the new payload.
"""

from typing import Mapping

from ycsb_s3.codec import decode_payload, encode_record
from ycsb_s3.errors import InvalidRecordError
from ycsb_s3.objects import ErrorKind, ObjectStore, OpResult


def write_record(
    store: ObjectStore,
    bucket: str,
    key: str,
    values: Mapping[str, bytes],
    update: bool = False,
) -> OpResult:
    """Encode values and store them as bucket/key"""
    existing_length = None
    if update:
        probe = store.head(bucket, key)
        if not probe.ok:
            return probe
        existing_length = probe.value

    try:
        payload = encode_record(values, existing_length)
    except InvalidRecordError as e:
        return OpResult(ErrorKind.INVALID_RECORD, error=e)

    return store.put(bucket, key, payload)


def read_record(store: ObjectStore, bucket: str, key: str) -> OpResult:
    """Fetch bucket/key and decode it into a record mapping"""
    result = store.get(bucket, key)
    if not result.ok:
        return result
    return OpResult(ErrorKind.OK, decode_payload(key, result.value))

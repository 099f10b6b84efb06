"""
Range scan over a flat bucket

S3 has no ordered range reads, so a scan lists the whole bucket, sorts the
keys, finds the start key and then reads each selected object one by one.
The sorted key list is rebuilt on every call and reflects whatever the
listing returned at that moment.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from ycsb_s3.objects import ErrorKind, ObjectStore, OpResult
from ycsb_s3.records import read_record


@dataclass
class ScanResult:
    records: List[Dict[str, bytes]] = field(default_factory=list)
    # (key, failed read) for objects that vanished or failed mid-scan
    failures: List[Tuple[str, OpResult]] = field(default_factory=list)


def locate_start(sorted_keys: Sequence[str], start_key: str) -> int:
    """
    Position of start_key in sorted_keys.

    Counts the keys that do not match until the match is found. A key that
    is not present counts every key, so the scan starts past the end.
    """
    position = 0
    for key in sorted_keys:
        if key == start_key:
            break
        position += 1
    return position


def select_window(keys: Sequence[str], start_key: str, limit: int) -> List[str]:
    """
    Keys a scan from start_key reads, in order.

    At most min(limit, len(keys)) keys are taken starting at the start
    position; fewer come back when the start is near the end.
    """
    sorted_keys = sorted(keys)
    if limit <= 0:
        return []
    position = locate_start(sorted_keys, start_key)
    count = min(limit, len(sorted_keys))
    return sorted_keys[position : position + count]


def scan_records(
    store: ObjectStore, bucket: str, start_key: str, limit: int
) -> OpResult:
    """List, sort and read up to limit records starting at start_key"""
    listing = store.list_keys(bucket)
    if not listing.ok:
        return listing

    scan = ScanResult()
    for key in select_window(listing.value, start_key, limit):
        read = read_record(store, bucket, key)
        if read.ok:
            scan.records.append(read.value)
        else:
            scan.records.append({})
            scan.failures.append((key, read))
    return OpResult(ErrorKind.OK, scan)

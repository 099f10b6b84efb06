"""
Range scan emulation tests
"""

import pytest

from ycsb_s3.objects import ErrorKind
from ycsb_s3.scan import locate_start, scan_records, select_window


KEYS = ["user3", "user1", "user5", "user2", "user4"]


def test_locate_start_finds_position():
    assert locate_start(["a", "b", "c"], "a") == 0
    assert locate_start(["a", "b", "c"], "c") == 2


def test_locate_start_missing_key_runs_to_end():
    assert locate_start(["a", "b", "c"], "bb") == 3
    assert locate_start([], "a") == 0


def test_window_is_sorted_from_start_key():
    assert select_window(KEYS, "user2", 3) == ["user2", "user3", "user4"]


def test_window_from_smallest_key():
    assert select_window(KEYS, "user1", 10) == [
        "user1",
        "user2",
        "user3",
        "user4",
        "user5",
    ]


def test_window_truncates_near_end():
    assert select_window(KEYS, "user4", 4) == ["user4", "user5"]


def test_window_count_is_bounded_by_total_keys():
    # limit larger than the bucket: bound is the key count, not the remainder
    assert select_window(KEYS, "user3", 100) == ["user3", "user4", "user5"]


@pytest.mark.parametrize("start_key", ["user0", "user2a", "zzz"])
def test_window_for_missing_start_key_is_empty(start_key):
    assert select_window(KEYS, start_key, 5) == []


@pytest.mark.parametrize("limit", [0, -1])
def test_window_non_positive_limit(limit):
    assert select_window(KEYS, "user1", limit) == []


def test_ordering_is_lexicographic():
    keys = ["user10", "user9", "user1"]

    assert select_window(keys, "user1", 3) == ["user1", "user10", "user9"]


def test_count_decreases_as_start_key_sorts_later():
    counts = [len(select_window(KEYS, k, 5)) for k in sorted(KEYS)]

    assert counts == [5, 4, 3, 2, 1]


def test_scan_records_reads_each_key(fake_s3, store):
    for key in KEYS:
        fake_s3.put_object(Bucket="usertable", Key=key, Body=key.encode())

    result = scan_records(store, "usertable", "user2", 2)

    assert result.ok
    assert result.value.records == [{"user2": b"user2"}, {"user3": b"user3"}]
    assert result.value.failures == []


def test_scan_records_listing_failure(store):
    result = scan_records(store, "no-such-bucket", "user1", 5)

    assert result.kind is ErrorKind.NOT_FOUND


def test_scan_records_keeps_slot_for_unreadable_key(fake_s3, store):
    for key in KEYS:
        fake_s3.put_object(Bucket="usertable", Key=key, Body=b"abcd")
    fake_s3.short_reads.add("user3")

    result = scan_records(store, "usertable", "user2", 3)

    assert result.ok
    assert result.value.records == [{"user2": b"abcd"}, {}, {"user4": b"abcd"}]
    assert [key for key, _ in result.value.failures] == ["user3"]
    assert result.value.failures[0][1].kind is ErrorKind.SHORT_READ

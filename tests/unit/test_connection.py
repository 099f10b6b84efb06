"""
Shared client provider tests
"""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

from ycsb_s3.config import S3Config
from ycsb_s3.connection import ConnectionProvider, make_s3_client


def test_first_call_builds_client():
    built = []
    provider = ConnectionProvider(client_factory=lambda c: built.append(c) or object())

    client = provider.ensure_connected(S3Config())

    assert client is not None
    assert provider.client is client
    assert len(built) == 1


def test_later_calls_reuse_client_even_with_new_options():
    built = []

    def factory(config):
        built.append(config)
        return object()

    provider = ConnectionProvider(client_factory=factory)
    first = provider.ensure_connected(S3Config(region="us-east-1"))
    second = provider.ensure_connected(S3Config(region="eu-west-1"))

    assert first is second
    assert [c.region for c in built] == ["us-east-1"]


def test_concurrent_init_builds_exactly_one_client():
    calls = []

    def slow_factory(config):
        calls.append(threading.get_ident())
        time.sleep(0.05)
        return object()

    provider = ConnectionProvider(client_factory=slow_factory)
    barrier = threading.Barrier(16)

    def init():
        barrier.wait()
        return provider.ensure_connected(S3Config())

    with ThreadPoolExecutor(max_workers=16) as executor:
        clients = list(executor.map(lambda _: init(), range(16)))

    assert len(calls) == 1
    assert all(c is clients[0] for c in clients)


def test_failed_construction_leaves_client_unset(caplog):
    def broken(config):
        raise ValueError("Invalid endpoint: nowhere")

    provider = ConnectionProvider(client_factory=broken)

    assert provider.ensure_connected(S3Config()) is None
    assert provider.client is None
    assert "Could not connect to S3 storage" in caplog.text


def test_construction_is_retried_after_failure():
    attempts = []

    def flaky(config):
        attempts.append(1)
        if len(attempts) == 1:
            raise ValueError("first attempt fails")
        return object()

    provider = ConnectionProvider(client_factory=flaky)

    assert provider.ensure_connected(S3Config()) is None
    assert provider.ensure_connected(S3Config()) is not None


def test_reset_drops_shared_client():
    provider = ConnectionProvider(client_factory=lambda c: object())
    first = provider.ensure_connected(S3Config())
    provider.reset()

    assert provider.client is None
    assert provider.ensure_connected(S3Config()) is not first


def test_make_s3_client_applies_config():
    config = S3Config(
        access_key="AK",
        secret_key="SK",
        endpoint="http://localhost:9000",
        region="eu-west-1",
        max_error_retry=3,
    )

    client = make_s3_client(config)

    assert client.meta.endpoint_url == "http://localhost:9000"
    assert client.meta.region_name == "eu-west-1"
    retries = client.meta.config.retries
    # botocore may normalize max_attempts into total_max_attempts (+1)
    assert retries.get("total_max_attempts", retries.get("max_attempts", 0) + 1) == 4
    assert retries["mode"] == "standard"


def test_invalid_endpoint_fails_through_provider():
    provider = ConnectionProvider()

    assert provider.ensure_connected(S3Config(endpoint="https://bad host")) is None
    assert provider.client is None

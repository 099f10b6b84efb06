"""
Pytest configuration and fixtures for adapter tests
"""

import os

import pytest

from tests.common.fake_s3 import FakeS3
from ycsb_s3.client import S3Client
from ycsb_s3.connection import ConnectionProvider
from ycsb_s3.objects import ObjectStore


@pytest.fixture(scope="session")
def config():
    """
    Test configuration fixture

    Returns configuration for live S3 testing; live tests only run when
    S3_ENDPOINT is set.
    """
    return {
        "s3_endpoint": os.getenv("S3_ENDPOINT"),
        "s3_access_key": os.getenv("S3_ACCESS_KEY", "minioadmin"),
        "s3_secret_key": os.getenv("S3_SECRET_KEY", "minioadmin"),
        "s3_region": os.getenv("S3_REGION", "us-east-1"),
        "s3_bucket_prefix": os.getenv("S3_BUCKET_PREFIX", "ycsb-test"),
    }


@pytest.fixture
def fake_s3():
    s3 = FakeS3(page_size=2)
    s3.create_bucket(Bucket="usertable")
    return s3


@pytest.fixture
def store(fake_s3):
    return ObjectStore(fake_s3)


@pytest.fixture
def provider(fake_s3):
    return ConnectionProvider(client_factory=lambda config: fake_s3)


@pytest.fixture
def adapter(provider):
    """Initialized adapter talking to the in-memory backend"""
    db = S3Client({}, provider=provider)
    db.init()
    yield db
    db.cleanup()

"""
ycsb-s3: S3 object storage adapter for YCSB-style benchmark drivers
"""

from ycsb_s3.client import S3Client
from ycsb_s3.config import S3Config
from ycsb_s3.db import DB, Status

__all__ = ["DB", "S3Client", "S3Config", "Status"]
__version__ = "0.1.0"

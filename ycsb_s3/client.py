"""
S3 storage adapter for the workload driver.

Properties to set:

    s3.accessKeyId=access key S3 aws
    s3.secretKey=secret key S3 aws
    s3.endPoint=s3.amazonaws.com
    s3.region=us-east-1
    s3.maxErrorRetry=15

Each record is one object in the bucket named by the driver's table. See
ycsb_s3.codec for the payload layout and ycsb_s3.scan for how ranges are
emulated.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Set

from ycsb_s3.config import S3Config
from ycsb_s3.connection import ConnectionProvider, shared_provider
from ycsb_s3.db import DB, Status
from ycsb_s3.objects import ObjectStore, OpResult
from ycsb_s3.records import read_record, write_record
from ycsb_s3.scan import scan_records

logger = logging.getLogger(__name__)


class S3Client(DB):
    """One instance per driver thread; the boto3 client underneath is shared"""

    def __init__(
        self,
        properties: Optional[Mapping[str, Any]] = None,
        provider: Optional[ConnectionProvider] = None,
    ):
        super().__init__(properties)
        self._provider = provider or shared_provider
        self._store = ObjectStore(None)
        self.config: Optional[S3Config] = None

    def init(self) -> None:
        """Resolve the config and attach to the shared client"""
        self.config = S3Config.from_properties(self.properties)
        self._store = ObjectStore(self._provider.ensure_connected(self.config))

    def cleanup(self) -> None:
        # The shared client outlives every adapter instance.
        pass

    def _status(self, op: str, table: str, key: str, result: OpResult) -> Status:
        if result.ok:
            return Status.OK
        logger.error(
            "%s %s/%s failed (%s)",
            op,
            table,
            key,
            result.describe(),
            exc_info=result.error,
        )
        return Status.ERROR

    def insert(self, table: str, key: str, values: Mapping[str, bytes]) -> Status:
        """Create the object for key from the field/value pairs in values"""
        return self._status(
            "insert", table, key, write_record(self._store, table, key, values)
        )

    def read(
        self,
        table: str,
        key: str,
        fields: Optional[Set[str]],
        result: Dict[str, bytes],
    ) -> Status:
        """
        Read the object for key into result.

        The whole payload is stored under the record key; fields is ignored.
        """
        read = read_record(self._store, table, key)
        if read.ok:
            result.update(read.value)
        return self._status("read", table, key, read)

    def update(self, table: str, key: str, values: Mapping[str, bytes]) -> Status:
        """Rewrite the object for key, keeping its previous length"""
        return self._status(
            "update",
            table,
            key,
            write_record(self._store, table, key, values, update=True),
        )

    def delete(self, table: str, key: str) -> Status:
        return self._status("delete", table, key, self._store.delete(table, key))

    def scan(
        self,
        table: str,
        start_key: str,
        record_count: int,
        fields: Optional[Set[str]],
        result: List[Dict[str, bytes]],
    ) -> Status:
        """
        Append up to record_count records, in key order from start_key.

        A start key that is not in the bucket yields no records. Objects that
        cannot be read mid-scan leave an empty record in their slot.
        """
        scan = scan_records(self._store, table, start_key, record_count)
        if not scan.ok:
            return self._status("scan", table, start_key, scan)

        for key, failed in scan.value.failures:
            logger.warning(
                "scan %s/%s: could not read %s (%s)",
                table,
                start_key,
                key,
                failed.describe(),
            )
        result.extend(scan.value.records)
        return Status.OK

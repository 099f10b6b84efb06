"""
Single-object operations against an S3 bucket

Each method returns an OpResult instead of raising. Backend exceptions are
captured in the result so the adapter can log them and report a status;
nothing here logs.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

from botocore.exceptions import BotoCoreError, ClientError, IncompleteReadError

from ycsb_s3.errors import ShortReadError

NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound", "NoSuchBucket"}


class ErrorKind(Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    NOT_CONNECTED = "not_connected"
    BACKEND = "backend"
    SHORT_READ = "short_read"
    INVALID_RECORD = "invalid_record"


@dataclass
class OpResult:
    kind: ErrorKind
    value: Any = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.kind is ErrorKind.OK

    def describe(self) -> str:
        if self.error is None:
            return self.kind.value
        return f"{self.kind.value}: {self.error}"


def _success(value: Any = None) -> OpResult:
    return OpResult(ErrorKind.OK, value)


def _error_code(error: Exception) -> str:
    if isinstance(error, ClientError):
        return error.response.get("Error", {}).get("Code", "")
    return ""


def _classify(error: Exception) -> OpResult:
    if isinstance(error, IncompleteReadError):
        return OpResult(ErrorKind.SHORT_READ, error=error)
    if _error_code(error) in NOT_FOUND_CODES:
        return OpResult(ErrorKind.NOT_FOUND, error=error)
    return OpResult(ErrorKind.BACKEND, error=error)


class ObjectStore:
    """Whole-object put/get/head/delete/list on a boto3 S3 client handle"""

    def __init__(self, client: Optional[Any]):
        self._client = client

    @property
    def connected(self) -> bool:
        return self._client is not None

    def _not_connected(self) -> OpResult:
        return OpResult(
            ErrorKind.NOT_CONNECTED,
            error=RuntimeError("S3 client was not initialized"),
        )

    def put(self, bucket: str, key: str, payload: bytes) -> OpResult:
        """Write payload as the full content of bucket/key"""
        if not self.connected:
            return self._not_connected()
        try:
            self._client.put_object(
                Bucket=bucket, Key=key, Body=payload, ContentLength=len(payload)
            )
        except (ClientError, BotoCoreError) as e:
            return _classify(e)
        return _success(len(payload))

    def get(self, bucket: str, key: str) -> OpResult:
        """
        Fetch the full content of bucket/key.

        Reads until ContentLength bytes have arrived; a stream that ends
        early yields a SHORT_READ result.
        """
        if not self.connected:
            return self._not_connected()
        try:
            response = self._client.get_object(Bucket=bucket, Key=key)
            length = int(response["ContentLength"])
            body = response["Body"]
            try:
                data = _read_exactly(body, length)
            finally:
                body.close()
        except (ClientError, BotoCoreError) as e:
            return _classify(e)
        except ShortReadError as e:
            return OpResult(ErrorKind.SHORT_READ, error=e)
        return _success(data)

    def head(self, bucket: str, key: str) -> OpResult:
        """Return the stored content length of bucket/key"""
        if not self.connected:
            return self._not_connected()
        try:
            response = self._client.head_object(Bucket=bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            return _classify(e)
        return _success(int(response["ContentLength"]))

    def delete(self, bucket: str, key: str) -> OpResult:
        """Remove bucket/key; a missing key is not an error"""
        if not self.connected:
            return self._not_connected()
        try:
            self._client.delete_object(Bucket=bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            result = _classify(e)
            if result.kind is ErrorKind.NOT_FOUND and _error_code(e) != "NoSuchBucket":
                return _success()
            return result
        return _success()

    def list_keys(self, bucket: str) -> OpResult:
        """List every key in the bucket, following continuation tokens"""
        if not self.connected:
            return self._not_connected()
        keys: List[str] = []
        kwargs = {"Bucket": bucket}
        try:
            while True:
                response = self._client.list_objects_v2(**kwargs)
                keys.extend(obj["Key"] for obj in response.get("Contents", []))
                if not response.get("IsTruncated"):
                    break
                token = response.get("NextContinuationToken")
                if not token:
                    return OpResult(
                        ErrorKind.BACKEND,
                        error=RuntimeError(
                            "Truncated listing without a continuation token"
                        ),
                    )
                kwargs["ContinuationToken"] = token
        except (ClientError, BotoCoreError) as e:
            return _classify(e)
        return _success(keys)


def _read_exactly(body: Any, length: int) -> bytes:
    buf = bytearray()
    while len(buf) < length:
        chunk = body.read(length - len(buf))
        if not chunk:
            raise ShortReadError(length, len(buf))
        buf.extend(chunk)
    return bytes(buf)

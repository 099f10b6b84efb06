"""
Adapter contract consumed by the workload driver.

The driver creates one adapter instance per worker thread, calls init()
once, then issues operations. Every operation returns a Status; results
are written into caller-supplied containers.
"""

from enum import IntEnum
from typing import Any, Dict, List, Mapping, Optional, Set


class Status(IntEnum):
    """Operation outcome reported to the driver"""

    OK = 0
    ERROR = 1


class DB:
    """Base class for storage adapters"""

    def __init__(self, properties: Optional[Mapping[str, Any]] = None):
        self._properties: Dict[str, Any] = dict(properties or {})

    @property
    def properties(self) -> Dict[str, Any]:
        return self._properties

    def set_properties(self, properties: Mapping[str, Any]) -> None:
        self._properties = dict(properties)

    def init(self) -> None:
        """Initialize any state for this adapter instance"""

    def cleanup(self) -> None:
        """Release any state for this adapter instance"""

    def insert(self, table: str, key: str, values: Mapping[str, bytes]) -> Status:
        raise NotImplementedError

    def read(
        self,
        table: str,
        key: str,
        fields: Optional[Set[str]],
        result: Dict[str, bytes],
    ) -> Status:
        raise NotImplementedError

    def update(self, table: str, key: str, values: Mapping[str, bytes]) -> Status:
        raise NotImplementedError

    def delete(self, table: str, key: str) -> Status:
        raise NotImplementedError

    def scan(
        self,
        table: str,
        start_key: str,
        record_count: int,
        fields: Optional[Set[str]],
        result: List[Dict[str, bytes]],
    ) -> Status:
        raise NotImplementedError

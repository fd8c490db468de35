from __future__ import annotations
from abc import ABC, abstractmethod


class BlobStore(ABC):
    """Durable (namespace, key) -> bytes storage.

    Keys may contain '/' to group related blobs (e.g. 'person/<backup id>').
    Implementations raise StorageFailure for I/O faults; a missing key is not a fault.
    """

    @abstractmethod
    def read(self, namespace: str, key: str) -> bytes | None:
        """Return the blob, or None if no blob is stored under the key."""
        raise NotImplementedError

    @abstractmethod
    def write(self, namespace: str, key: str, data: bytes) -> None:
        """Store the blob, replacing any previous one in a single step."""
        raise NotImplementedError

    @abstractmethod
    def keys(self, namespace: str, prefix: str = "") -> list[str]:
        """Return sorted keys in the namespace starting with prefix."""
        raise NotImplementedError

    def exists(self, namespace: str, key: str) -> bool:
        return self.read(namespace, key) is not None

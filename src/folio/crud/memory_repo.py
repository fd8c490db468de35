from dataclasses import dataclass, field

from folio.crud.repo import BlobStore


@dataclass
class MemoryBlobStore(BlobStore):
    _blobs: dict[tuple[str, str], bytes] = field(default_factory=dict)

    def read(self, namespace: str, key: str) -> bytes | None:
        return self._blobs.get((namespace, key))

    def write(self, namespace: str, key: str, data: bytes) -> None:
        self._blobs[(namespace, key)] = bytes(data)

    def keys(self, namespace: str, prefix: str = "") -> list[str]:
        return sorted(k for ns, k in self._blobs if ns == namespace and k.startswith(prefix))

from dataclasses import dataclass, field

import pytest

from image_bucket.core.repositories.storage_repository import (
    ImageBlob,
    ImageBucketRepository,
)
from image_bucket.core.utils.url_builder import URLBuilder

BASE_URL = "https://cdn.example.com"


@dataclass
class StoredObject:
    data: bytes
    content_type: str


class FakeBlob(ImageBlob):
    def __init__(self, bucket: "FakeBucket", path: str) -> None:
        self._bucket = bucket
        self.path = path

    def exists(self) -> bool:
        return self.path in self._bucket.objects

    def delete(self) -> None:
        self._bucket.deleted.append(self.path)
        del self._bucket.objects[self.path]


@dataclass
class FakeBucket(ImageBucketRepository):
    """In-memory bucket recording every call."""

    objects: dict[str, StoredObject] = field(default_factory=dict)
    deleted: list[str] = field(default_factory=list)
    create_exc: Exception | None = None

    def get(self, path: str) -> FakeBlob | None:
        return FakeBlob(self, path) if path in self.objects else None

    def create(self, path: str, data: bytes, content_type: str) -> FakeBlob:
        if self.create_exc:
            raise self.create_exc
        self.objects[path] = StoredObject(data=data, content_type=content_type)
        return FakeBlob(self, path)


@pytest.fixture
def fake_bucket() -> FakeBucket:
    return FakeBucket()


@pytest.fixture
def url_builder() -> URLBuilder:
    return URLBuilder(BASE_URL)

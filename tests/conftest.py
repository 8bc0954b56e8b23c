"""Shared test fixtures and configuration."""

from __future__ import annotations

import pytest

from blobnav.application.services.blob_navigator import BlobNavigator
from tests.mocks import BUCKET, FakeContentClassifier, InMemoryObjectStore


@pytest.fixture
def object_store() -> InMemoryObjectStore:
    """Return an empty in-memory object store."""
    return InMemoryObjectStore()


@pytest.fixture
def content_classifier() -> FakeContentClassifier:
    return FakeContentClassifier()


@pytest.fixture
def navigator(
    object_store: InMemoryObjectStore,
    content_classifier: FakeContentClassifier,
) -> BlobNavigator:
    """Create a BlobNavigator over the in-memory store."""
    return BlobNavigator(BUCKET, object_store, content_classifier)


@pytest.fixture
def life_cycles(object_store: InMemoryObjectStore) -> InMemoryObjectStore:
    """Seed a dated directory tree.

    life-cycles/
    ├─ 20201231/
    │  ├─ emart.zip
    ├─ 20210129/
    │  ├─ homeplus.zip
    ├─ sample.zip
    """
    object_store.put("life-cycles/20201231/emart.zip", b"emart", "application/zip")
    object_store.put("life-cycles/20210129/homeplus.zip", b"homeplus", "application/zip")
    object_store.put("life-cycles/sample.zip", b"sample", "application/zip")
    return object_store

from __future__ import annotations

import os
import tempfile

import pytest

from tests.mocks.storage import InMemoryStorage

# ``src.studio.main`` builds an app at import time; keep its media root out of the checkout.
os.environ.setdefault("STORAGE_BACKEND", "local")
os.environ.setdefault("MEDIA_ROOT", tempfile.mkdtemp(prefix="studio-media-"))


@pytest.fixture
def store() -> InMemoryStorage:
    return InMemoryStorage()

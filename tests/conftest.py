import io
import os

import pytest
from PIL import Image


def pytest_configure(config):
    """
    Runs before test collection.
    Keeps the InfisicalManager offline so no test reaches the network
    while resolving the Gemini key.
    """
    os.environ["DISABLE_INFISICAL"] = "1"
    for key in ("INFISICAL_TOKEN", "INFISICAL_CLIENT_ID", "INFISICAL_CLIENT_SECRET", "INFISICAL_PROJECT_ID"):
        if key in os.environ:
            del os.environ[key]


class FakePreview:
    """Stands in for a PreviewHandle and counts releases."""
    def __init__(self, data):
        self.data = data
        self.image = None
        self.released = False
        self.release_calls = 0

    def release(self):
        self.release_calls += 1
        self.released = True


@pytest.fixture
def fake_preview_factory():
    created = []

    def factory(data):
        preview = FakePreview(data)
        created.append(preview)
        return preview

    factory.created = created
    return factory


@pytest.fixture
def png_bytes():
    buffer = io.BytesIO()
    Image.new("RGB", (400, 300), color=(200, 30, 60)).save(buffer, format="PNG")
    return buffer.getvalue()

import pytest

from blob_files import FileLocationContext, FileStorageAdapter
from tests.consts import TEST_ACCOUNT, TEST_CONTAINER
from tests.fakes import InMemoryBlobBackend


@pytest.fixture
def backend():
    return InMemoryBlobBackend()


@pytest.fixture
def adapter(backend):
    return FileStorageAdapter(TEST_ACCOUNT, TEST_CONTAINER, backend=backend)


@pytest.fixture
def direct_adapter(backend):
    return FileStorageAdapter(TEST_ACCOUNT, TEST_CONTAINER, direct_access=True, backend=backend)


@pytest.fixture
def location_context():
    return FileLocationContext(mount_path="http://localhost:1337/parse", application_id="app-id")

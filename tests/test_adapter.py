import io
from concurrent.futures import ThreadPoolExecutor

import pytest

from blob_files import (
    BlobDescriptor,
    ConfigurationError,
    FileStorageAdapter,
    InvalidKeyError,
    NotFoundError,
    RangeError,
)
from tests.consts import TEST_ACCOUNT, TEST_CONTAINER

TEST_DATA = b"The quick brown fox jumps over the lazy dog"


@pytest.mark.parametrize(
    "account_name, container",
    [(None, TEST_CONTAINER), ("", TEST_CONTAINER), (TEST_ACCOUNT, None), (TEST_ACCOUNT, "")],
)
def test_construction_requires_account_and_container(account_name, container, backend):
    with pytest.raises(ConfigurationError):
        FileStorageAdapter(account_name, container, backend=backend)


def test_construction_performs_no_io(adapter, backend):
    assert adapter.account_name == TEST_ACCOUNT
    assert adapter.container == TEST_CONTAINER
    assert adapter.direct_access is False
    assert backend.ensure_calls == 0
    assert backend.containers == {}


def test_create_file_returns_descriptor(adapter):
    descriptor = adapter.create_file("hello.txt", TEST_DATA)

    assert isinstance(descriptor, BlobDescriptor)
    assert descriptor.container == TEST_CONTAINER
    assert descriptor.name == "hello.txt"
    assert descriptor.length == len(TEST_DATA)


def test_create_file_ensures_container_on_every_call(adapter, backend):
    adapter.create_file("a.txt", b"a")
    adapter.create_file("b.txt", b"b")

    assert backend.ensure_calls == 2
    assert backend.public[TEST_CONTAINER] is False


def test_direct_access_creates_public_container(direct_adapter, backend):
    direct_adapter.create_file("a.txt", b"a")

    assert backend.public[TEST_CONTAINER] is True


def test_properties_report_length(adapter):
    adapter.create_file("hello.txt", TEST_DATA)

    properties = adapter.get_file_properties("hello.txt")

    assert properties["length"] == len(TEST_DATA)
    assert "content_type" in properties


def test_create_file_accepts_file_objects(adapter):
    data = io.BytesIO(b"skip:" + TEST_DATA)
    data.seek(5)

    descriptor = adapter.create_file("from-file.txt", data)

    assert descriptor.length == len(TEST_DATA)
    assert b"".join(adapter.get_file_stream("from-file.txt")) == TEST_DATA


def test_create_file_rejects_unsupported_data(adapter):
    with pytest.raises(TypeError):
        adapter.create_file("bad.txt", "not bytes")


@pytest.mark.parametrize("filename", ["", None, 42])
def test_invalid_keys_are_rejected(adapter, filename):
    with pytest.raises(InvalidKeyError):
        adapter.create_file(filename, b"data")
    with pytest.raises(ValueError):
        adapter.get_file_properties(filename)


def test_stream_round_trip(adapter):
    adapter.create_file("hello.txt", TEST_DATA)

    assert b"".join(adapter.get_file_stream("hello.txt")) == TEST_DATA


@pytest.mark.parametrize("start, end", [(0, 0), (4, 8), (10, len(TEST_DATA) - 1), (0, len(TEST_DATA) - 1)])
def test_stream_inclusive_range(adapter, start, end):
    adapter.create_file("hello.txt", TEST_DATA)

    chunks = adapter.get_file_stream("hello.txt", start=start, end=end)

    assert b"".join(chunks) == TEST_DATA[start:end + 1]


def test_stream_open_ended_ranges(adapter):
    adapter.create_file("hello.txt", TEST_DATA)

    assert b"".join(adapter.get_file_stream("hello.txt", start=35)) == TEST_DATA[35:]
    assert b"".join(adapter.get_file_stream("hello.txt", end=2)) == TEST_DATA[:3]


def test_stream_is_lazy(adapter, backend):
    stream = adapter.get_file_stream("missing.txt")

    assert backend.stream_opens == 0
    with pytest.raises(NotFoundError):
        next(stream)
    assert backend.stream_opens == 1


def test_stream_is_not_restartable(adapter):
    adapter.create_file("hello.txt", TEST_DATA)
    stream = adapter.get_file_stream("hello.txt")

    assert b"".join(stream) == TEST_DATA
    assert b"".join(stream) == b""


@pytest.mark.parametrize("start, end", [(5, 2), (-1, 3), (0, -4)])
def test_invalid_range_fails_on_consumption(adapter, start, end):
    adapter.create_file("hello.txt", TEST_DATA)
    stream = adapter.get_file_stream("hello.txt", start=start, end=end)

    with pytest.raises(RangeError) as exc_info:
        next(stream)
    assert exc_info.value.start == start
    assert exc_info.value.end == end


def test_unsatisfiable_range_fails_on_consumption(adapter):
    adapter.create_file("hello.txt", TEST_DATA)

    with pytest.raises(RangeError):
        list(adapter.get_file_stream("hello.txt", start=1000))


def test_overwrite_returns_newest_data(adapter):
    adapter.create_file("hello.txt", b"first version")
    adapter.create_file("hello.txt", b"second")

    assert b"".join(adapter.get_file_stream("hello.txt")) == b"second"
    assert adapter.get_file_properties("hello.txt")["length"] == len(b"second")


def test_delete_file(adapter):
    adapter.create_file("hello.txt", TEST_DATA)

    assert adapter.delete_file("hello.txt") is None
    with pytest.raises(NotFoundError):
        adapter.get_file_properties("hello.txt")


def test_missing_keys_raise_not_found(adapter):
    adapter.create_file("other.txt", b"x")

    with pytest.raises(NotFoundError):
        adapter.delete_file("never-created.txt")
    with pytest.raises(NotFoundError):
        adapter.get_file_properties("never-created.txt")
    with pytest.raises(NotFoundError):
        list(adapter.get_file_stream("never-created.txt"))


def test_delete_twice_raises_not_found(adapter):
    adapter.create_file("hello.txt", TEST_DATA)
    adapter.delete_file("hello.txt")

    with pytest.raises(NotFoundError) as exc_info:
        adapter.delete_file("hello.txt")
    assert exc_info.value.key == "hello.txt"


def test_proxied_location(adapter, location_context):
    location = adapter.get_file_location(location_context, "my file/ü.txt")

    assert location == "http://localhost:1337/parse/files/app-id/my%20file%2F%C3%BC.txt"


def test_proxied_location_keeps_uri_component_safe_characters(adapter, location_context):
    location = adapter.get_file_location(location_context, "a-b_c.d!~*'().txt")

    assert location == "http://localhost:1337/parse/files/app-id/a-b_c.d!~*'().txt"


def test_direct_location_uses_backend_url(direct_adapter, location_context):
    location = direct_adapter.get_file_location(location_context, "my file.txt")

    assert location == f"https://memory.example/{TEST_CONTAINER}/my%20file.txt"


def test_concurrent_creates_with_distinct_keys(adapter):
    payloads = {f"file-{index}.bin": bytes([index]) * (index + 1) for index in range(32)}

    with ThreadPoolExecutor(max_workers=8) as executor:
        descriptors = list(
            executor.map(lambda item: adapter.create_file(*item), payloads.items())
        )

    assert len(descriptors) == len(payloads)
    for filename, data in payloads.items():
        assert b"".join(adapter.get_file_stream(filename)) == data

"""Value objects exchanged with callers and storage backends."""

from datetime import datetime

from pydantic import BaseModel, model_validator


class BlobDescriptor(BaseModel, frozen=True):
    """Acknowledgment of a successful blob write."""

    container: str
    name: str
    length: int
    etag: str | None = None
    last_modified: datetime | None = None


class FileLocationContext(BaseModel, frozen=True):
    """Where the owning application serves files when access is proxied."""

    mount_path: str
    application_id: str


class ByteRange(BaseModel, frozen=True):
    """An inclusive byte range; either bound may be open."""

    start: int | None = None
    end: int | None = None

    @model_validator(mode="after")
    def _check_bounds(self) -> "ByteRange":
        if self.start is not None and self.start < 0:
            raise ValueError("start must not be negative")
        if self.end is not None and self.end < 0:
            raise ValueError("end must not be negative")
        if self.start is not None and self.end is not None and self.start > self.end:
            raise ValueError("start must not be greater than end")
        return self

    @property
    def offset(self) -> int:
        return self.start or 0

    @property
    def length(self) -> int | None:
        """Number of bytes covered, or None when the range runs to the end."""
        if self.end is None:
            return None
        return self.end - self.offset + 1

    @property
    def is_whole(self) -> bool:
        return self.start is None and self.end is None

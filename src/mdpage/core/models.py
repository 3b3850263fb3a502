"""Data model for files flowing through the render pipeline"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union


@dataclass
class SourceFile:
    """A file handed to the pipeline by its host.

    contents is raw bytes, None for a passthrough entry (e.g. a directory),
    or an unread binary stream, which the pipeline rejects.
    """
    path:     Path
    contents: Union[bytes, Any, None] = None
    data:     Optional[dict[str, Any]] = None     # sidecar data from an upstream step

    def __post_init__(self):
        self.path = Path(self.path)

    def is_null(self) -> bool:
        return self.contents is None

    def is_stream(self) -> bool:
        return self.contents is not None and not isinstance(self.contents, (bytes, bytearray, memoryview))

    def text(self) -> str:
        return bytes(self.contents).decode("utf-8")

    @classmethod
    def from_path(cls, path: Path, data: Optional[dict[str, Any]] = None) -> "SourceFile":
        """Read a file from disk into a SourceFile."""
        path = Path(path)
        return cls(path=path, contents=path.read_bytes(), data=data)


@dataclass(frozen=True)
class FrontMatter:
    """Parsed front-matter attributes and the body that followed them."""
    attributes: dict[str, Any] = field(default_factory=dict)
    body:       str = ""


@dataclass
class RenderedFile:
    """Pipeline output replacing a SourceFile on success."""
    path:     Path
    contents: bytes
    data:     Optional[dict[str, Any]] = None

    def text(self) -> str:
        return self.contents.decode("utf-8")

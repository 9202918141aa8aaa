"""
Event models delivered to the dispatcher.

These are the platform-neutral shapes of what a host captures: key presses,
toolbar clicks and drop/paste transfers. They are pydantic models so an HTTP
host can accept them as JSON bodies unchanged.
"""

from __future__ import annotations
import base64
import binascii
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from ..selection import Range


class KeyEvent(BaseModel):
    """
    A key press. `key` is the key value as reported by the host ("b", "Tab",
    "`"), modifiers are reported separately.
    """
    key: str
    shift: bool = False
    ctrl: bool = False
    meta: bool = False
    alt: bool = False


class ClickEvent(BaseModel):
    """A toolbar control invoking a named command with one value."""
    command: str
    value: Any = None


class FileBlob(BaseModel):
    name: str = ""
    mime_type: str = Field(default="application/octet-stream")
    data: bytes = b""

    @field_validator("data", mode="before")
    @classmethod
    def _decode_base64(cls, v: Any) -> Any:
        # JSON bodies carry file contents base64 encoded
        if isinstance(v, str):
            try:
                return base64.b64decode(v, validate=True)
            except binascii.Error as e:
                raise ValueError(f"File data is not valid base64: {e}") from e
        return v

    @property
    def is_image(self) -> bool:
        major, _, _ = self.mime_type.partition("/")
        return major == "image"


class DataTransfer(BaseModel):
    """
    Payload of a drop or paste, already classified by the host.

    Attributes:
        type: Kind of payload; only "files" and "text" are acted on
        text: Plain text for "text" payloads
        html: Markup for "html" payloads
        files: File blobs for "files" payloads
    """
    type: Literal["files", "text", "html", "unknown"] = "unknown"
    text: str = ""
    html: str = ""
    files: list[FileBlob] = Field(default_factory=list)

    @classmethod
    def from_text(cls, text: str) -> DataTransfer:
        return cls(type="text", text=text)

    @classmethod
    def from_files(cls, files: list[FileBlob]) -> DataTransfer:
        return cls(type="files", files=files)


class TransferEvent(BaseModel):
    """
    A drop or paste. `target` is the range under the drop point, or the
    paste location; a drop outside the document has none.
    """
    kind: Literal["drop", "paste"]
    transfer: DataTransfer
    target: Range | None = None

"""Attachment models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Attachment(BaseModel):
    """Decoded attachment owned by a single email record."""

    model_config = ConfigDict(frozen=True)

    filename: str = "unknown"
    content_type: str = "application/octet-stream"
    size: int = Field(ge=0, default=0)
    sha256: str = ""
    preview_type: str = "unknown"
    preview_error: str | None = None
    content: bytes = Field(default=b"", exclude=True, repr=False)

    @property
    def extension(self) -> str:
        if "." not in self.filename:
            return ""
        return self.filename.rsplit(".", 1)[-1].lower()


class FileHash(BaseModel):
    model_config = ConfigDict(frozen=True)

    filename: str
    sha256: str

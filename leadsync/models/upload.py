"""Models describing an uploaded spreadsheet before it is parsed."""

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
XLS_MEDIA_TYPE = "application/vnd.ms-excel"
MAX_UPLOAD_BYTES = 10 * 1024 * 1024

_MEDIA_TYPES_BY_SUFFIX = {
    ".xlsx": XLSX_MEDIA_TYPE,
    ".xls": XLS_MEDIA_TYPE,
}


class ValidationError(str, Enum):
    """Reasons a file is rejected before parsing."""

    UNSUPPORTED_TYPE = "unsupported_type"
    TOO_LARGE = "too_large"

    @property
    def message(self) -> str:
        if self is ValidationError.UNSUPPORTED_TYPE:
            return "File type not supported. Please upload an Excel file (.xlsx or .xls)."
        return "File size exceeds 10MB limit."


class UploadedFile(BaseModel):
    """A candidate input file: name, declared media type, size and content."""

    name: str = Field(..., description="Original filename")
    size: int = Field(..., ge=0, description="Size in bytes")
    content_type: str = Field("", description="Declared media type")
    data: bytes = Field(b"", repr=False, description="Raw file content")

    @classmethod
    def from_streamlit(cls, uploaded: Any) -> "UploadedFile":
        """Build from the object returned by ``st.file_uploader``."""
        data = uploaded.getvalue()
        return cls(
            name=uploaded.name,
            size=getattr(uploaded, "size", len(data)),
            content_type=uploaded.type or "",
            data=data,
        )

    @classmethod
    def from_path(cls, path: Path) -> "UploadedFile":
        """Build from a file on disk, inferring the media type from its suffix."""
        data = path.read_bytes()
        return cls(
            name=path.name,
            size=len(data),
            content_type=_MEDIA_TYPES_BY_SUFFIX.get(path.suffix.lower(), ""),
            data=data,
        )

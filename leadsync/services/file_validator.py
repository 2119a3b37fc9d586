"""Type and size checks for uploaded spreadsheets."""

from typing import Optional

from ..models.upload import MAX_UPLOAD_BYTES, UploadedFile, ValidationError, XLS_MEDIA_TYPE, XLSX_MEDIA_TYPE
from ..utils.log import get_logger

logger = get_logger("file_validator")

ACCEPTED_MEDIA_TYPES = frozenset({XLSX_MEDIA_TYPE, XLS_MEDIA_TYPE})
ACCEPTED_EXTENSIONS = (".xlsx", ".xls")


class FileValidator:
    """Rejects files that are not spreadsheets or exceed the size ceiling."""

    def __init__(self, max_bytes: int = MAX_UPLOAD_BYTES):
        self.max_bytes = max_bytes

    def validate(self, file: UploadedFile) -> Optional[ValidationError]:
        """
        Check a candidate file before parsing.

        The media type check passes when either the declared type or the
        filename extension is recognized. Size is checked second.

        Args:
            file: Candidate upload

        Returns:
            ValidationError describing the first failed check, or None
        """
        is_excel_name = file.name.lower().endswith(ACCEPTED_EXTENSIONS)
        if file.content_type not in ACCEPTED_MEDIA_TYPES and not is_excel_name:
            logger.info("Rejected %s: unsupported type '%s'", file.name, file.content_type)
            return ValidationError.UNSUPPORTED_TYPE

        if file.size > self.max_bytes:
            logger.info("Rejected %s: %d bytes exceeds %d", file.name, file.size, self.max_bytes)
            return ValidationError.TOO_LARGE

        return None

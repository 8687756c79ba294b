"""Defines constants for file upload validation and media type resolution."""

# Size and count limits for a single request (generation or chat turn)
MAX_FILE_SIZE: int = 25 * 1024 * 1024  # 25 MB per file

# Maximum number of files allowed in a single request
MAX_FILES: int = 20

MAX_TOTAL_SIZE: int = 100 * 1024 * 1024  # 100 MB total upload limit

# Media types browsers and HTTP clients send when they do not know better
GENERIC_MEDIA_TYPES: set[str] = {"", "application/octet-stream", "binary/octet-stream"}

# Extension -> media type, used when the declared type is missing or generic
MIME_MAPPING: dict[str, str] = {
    ".pdf": "application/pdf",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".xls": "application/vnd.ms-excel",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".webp": "image/webp",
    ".gif": "image/gif",
    ".txt": "text/plain",
    ".md": "text/markdown",
    ".csv": "text/csv",
}

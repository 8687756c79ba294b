import logging

from fastapi import HTTPException
from fastapi import UploadFile

from drafter.core.validation import MAX_FILE_SIZE
from drafter.core.validation import MAX_FILES
from drafter.core.validation import MAX_TOTAL_SIZE
from drafter.models.report_models import SourceFile

logger = logging.getLogger(__name__)


async def _read_single_upload(f_obj: UploadFile, request_id: str) -> SourceFile:
    filename = f_obj.filename or "upload"
    try:
        contents = await f_obj.read()
    except Exception as read_err:
        logger.error("[%s] Failed to read upload %s: %s", request_id, filename, read_err, exc_info=True)
        raise HTTPException(status_code=400, detail=f"Could not read '{filename}'.") from read_err

    size = len(contents)
    if size == 0:
        logger.warning("[%s] Rejected empty file: %s", request_id, filename)
        raise HTTPException(status_code=400, detail=f"The file '{filename}' is empty.")
    if size > MAX_FILE_SIZE:
        logger.warning("[%s] Rejected file exceeding size limit: %s (%d bytes)", request_id, filename, size)
        raise HTTPException(
            status_code=413,
            detail=f"File '{filename}' is too large ({size // (1024 * 1024)}MB). Limit per file: {MAX_FILE_SIZE // (1024 * 1024)}MB",
        )
    return SourceFile(name=filename, media_type=f_obj.content_type or "", content=contents)


async def _validate_uploads(files: list[UploadFile] | None, request_id: str) -> list[SourceFile]:
    """Read uploads in order, enforcing count, per-file and total size limits."""
    if not files:
        return []

    if len(files) > MAX_FILES:
        logger.warning("[%s] Upload rejected: too many files (%d > %d)", request_id, len(files), MAX_FILES)
        raise HTTPException(status_code=413, detail=f"At most {MAX_FILES} files can be processed at once.")

    source_files = [await _read_single_upload(f, request_id) for f in files]

    total_size = sum(len(f.content) for f in source_files)
    if total_size > MAX_TOTAL_SIZE:
        logger.warning("[%s] Total upload size exceeds limit: %d bytes > %d bytes", request_id, total_size, MAX_TOTAL_SIZE)
        raise HTTPException(
            status_code=413,
            detail=f"Total size of the files ({total_size // (1024 * 1024)}MB) exceeds the limit of {MAX_TOTAL_SIZE // (1024 * 1024)}MB.",
        )

    logger.info("[%s] %d upload(s) accepted, %d bytes total", request_id, len(source_files), total_size)
    return source_files

import asyncio
import io
import logging
from pathlib import Path

import magic
import openpyxl  # For .xlsx files
import pdfplumber
import xlrd  # For legacy .xls files

# docx for Word documents
from docx import Document

from drafter.core.config import settings
from drafter.core.validation import GENERIC_MEDIA_TYPES
from drafter.core.validation import MIME_MAPPING
from drafter.models.report_models import ProcessedPart
from drafter.models.report_models import SourceFile

# Configure module logger
logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"
DOCX_MEDIA_TYPE = MIME_MAPPING[".docx"]
XLSX_MEDIA_TYPE = MIME_MAPPING[".xlsx"]
XLS_MEDIA_TYPE = MIME_MAPPING[".xls"]

TRUNCATION_MARKER = "\n\n[TEXT TRUNCATED: INPUT LIMIT REACHED]"


class ExtractorError(Exception):
    """Base exception for extraction-related errors"""


def wrap_file_text(name: str, text: str) -> str:
    return f"[Attached File Content: {name}]\n{text}\n[End of File: {name}]"


def skipped_placeholder(name: str) -> str:
    return f"[Skipped unsupported file: {name}]"


def error_placeholder(name: str) -> str:
    return f"[Error parsing file: {name}]"


async def resolve_media_type(file: SourceFile, request_id: str) -> str:
    """Declared type first, then the extension, then content sniffing."""
    declared = file.media_type.split(";")[0].strip().lower()
    if declared not in GENERIC_MEDIA_TYPES:
        return declared

    by_extension = MIME_MAPPING.get(Path(file.name).suffix.lower())
    if by_extension:
        return by_extension

    sniffed = await asyncio.to_thread(magic.from_buffer, file.content[:4096], mime=True)
    logger.debug("[%s] MIME sniffed for '%s': %s", request_id, file.name, sniffed)
    return str(sniffed).lower()


def _sync_pdf_extraction(file_bytes: bytes, fname: str, request_id: str) -> str:
    buffer = io.BytesIO(file_bytes)
    with pdfplumber.open(buffer) as pdf:
        page_texts = []
        for p in pdf.pages:
            text_content = p.extract_text()
            if text_content is not None:
                page_texts.append(text_content)
    text = "\n".join(page_texts)
    logger.debug("[%s] PDF: pdfplumber extracted %d chars from '%s'", request_id, len(text), fname)
    return text


def _sync_docx_extraction(file_bytes: bytes, fname: str, request_id: str) -> str:
    doc = Document(io.BytesIO(file_bytes))
    text = "\n".join(p.text for p in doc.paragraphs)
    logger.debug("[%s] DOCX: Extracted %d chars from '%s'", request_id, len(text), fname)
    return text


def _sync_excel_extraction(file_bytes: bytes, fname: str, legacy: bool, request_id: str) -> str:
    """Represent every sheet of a workbook as CSV-like text, delimited by sheet markers."""
    sheets: list[str] = []

    if legacy:
        workbook = xlrd.open_workbook(file_contents=file_bytes)
        for i in range(workbook.nsheets):
            sheet = workbook.sheet_by_index(i)
            rows = [
                ",".join(str(sheet.cell_value(r, c)) for c in range(sheet.ncols))
                for r in range(sheet.nrows)
            ]
            sheets.append(_sheet_block(fname, i, sheet.name, rows))
    else:
        workbook = openpyxl.load_workbook(io.BytesIO(file_bytes), read_only=True, data_only=True)
        try:
            for i, sheet_name in enumerate(workbook.sheetnames):
                sheet = workbook[sheet_name]
                rows = [
                    ",".join("" if value is None else str(value) for value in row)
                    for row in sheet.iter_rows(values_only=True)
                ]
                sheets.append(_sheet_block(fname, i, sheet_name, rows))
        finally:
            workbook.close()

    text = "\n\n".join(sheets)
    logger.debug("[%s] EXCEL: Extracted %d chars (as CSVs) from '%s'", request_id, len(text), fname)
    return text


def _sheet_block(fname: str, index: int, sheet_name: str, rows: list[str]) -> str:
    lines = [f"--- START EXCEL SHEET (File: {fname}, Sheet Index: {index}, Sheet Name: {sheet_name}) ---"]
    lines.extend(rows or ["(Sheet is empty)"])
    lines.append(f"--- END EXCEL SHEET (Sheet Name: {sheet_name}) ---")
    return "\n".join(lines)


async def _pdf_part(file: SourceFile, request_id: str) -> ProcessedPart:
    if settings.pdf_mode == "inline":
        return ProcessedPart.binary(PDF_MEDIA_TYPE, file.content)

    try:
        text = await asyncio.to_thread(_sync_pdf_extraction, file.content, file.name, request_id)
    except Exception as e:
        raise ExtractorError(f"Failed to extract text from PDF: {file.name}") from e

    if not text.strip():
        # Scanned PDFs have no text layer; let the model read the pages instead
        logger.warning("[%s] PDF: No text layer in '%s', sending it inline.", request_id, file.name)
        return ProcessedPart.binary(PDF_MEDIA_TYPE, file.content)
    return ProcessedPart.extracted(wrap_file_text(file.name, text))


async def _extract(file: SourceFile, request_id: str) -> ProcessedPart:
    media_type = await resolve_media_type(file, request_id)
    logger.info("[%s] EXTRACT: '%s' (%d bytes, %s)", request_id, file.name, len(file.content), media_type)

    if media_type == PDF_MEDIA_TYPE:
        return await _pdf_part(file, request_id)

    if media_type.startswith("image/"):
        return ProcessedPart.binary(media_type, file.content)

    if media_type == DOCX_MEDIA_TYPE:
        try:
            text = await asyncio.to_thread(_sync_docx_extraction, file.content, file.name, request_id)
        except Exception as e:
            raise ExtractorError(f"Failed to extract text from DOCX: {file.name}") from e
        return ProcessedPart.extracted(wrap_file_text(file.name, text))

    if media_type in {XLSX_MEDIA_TYPE, XLS_MEDIA_TYPE}:
        legacy = media_type == XLS_MEDIA_TYPE
        try:
            text = await asyncio.to_thread(_sync_excel_extraction, file.content, file.name, legacy, request_id)
        except Exception as e:
            raise ExtractorError(f"Failed to extract text from Excel file: {file.name}") from e
        return ProcessedPart.extracted(wrap_file_text(file.name, text))

    if media_type.startswith("text/"):
        text = file.content.decode("utf-8", errors="replace")
        return ProcessedPart.extracted(wrap_file_text(file.name, text))

    logger.warning("[%s] EXTRACT: Unsupported file type '%s' for '%s'.", request_id, media_type, file.name)
    return ProcessedPart.placeholder(skipped_placeholder(file.name))


async def extract(file: SourceFile, request_id: str = "-") -> ProcessedPart:
    """Normalize one uploaded file into a ProcessedPart. Never raises.

    PDFs and images are passed through as inline binary data, office and text
    formats are converted to text wrapped in file markers, unsupported types
    and failures become placeholders naming the file.
    """
    try:
        return await _extract(file, request_id)
    except ExtractorError as e:
        logger.error("[%s] EXTRACT: %s", request_id, e, exc_info=e.__cause__ is not None)
    except Exception:
        logger.exception("[%s] EXTRACT: Unexpected error while processing '%s'", request_id, file.name)
    return ProcessedPart.placeholder(error_placeholder(file.name))


def guard_corpus(corpus: str, request_id: str) -> str:
    """Ensure free text doesn't exceed maximum length."""
    original_len = len(corpus)

    if original_len > settings.max_prompt_chars:
        logger.warning(
            "[%s] CORPUS_GUARD: Text exceeds max length (%d > %d), truncating",
            request_id,
            original_len,
            settings.max_prompt_chars,
        )
        return corpus[: settings.max_prompt_chars] + TRUNCATION_MARKER

    logger.debug("[%s] CORPUS_GUARD: Text length OK: %d chars", request_id, original_len)
    return corpus

import io

import openpyxl
import pytest
from docx import Document

from drafter.core.config import settings
from drafter.models.report_models import SourceFile
from drafter.services import extractor
from drafter.services.extractor import TRUNCATION_MARKER
from drafter.services.extractor import extract
from drafter.services.extractor import guard_corpus
from drafter.services.extractor import resolve_media_type

DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def _docx_bytes(*paragraphs: str) -> bytes:
    doc = Document()
    for paragraph in paragraphs:
        doc.add_paragraph(paragraph)
    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


def _xlsx_bytes() -> bytes:
    workbook = openpyxl.Workbook()
    sheet = workbook.active
    sheet.title = "Energy"
    sheet.append(["Site", "MWh"])
    sheet.append(["Milan", 1200])
    workbook.create_sheet("Empty")
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


@pytest.mark.asyncio
async def test_docx_text_is_wrapped_in_markers():
    part = await extract(SourceFile(name="policy.docx", media_type=DOCX, content=_docx_bytes("Line one", "Line two")))

    assert part.kind == "text"
    assert part.text.startswith("[Attached File Content: policy.docx]\n")
    assert "Line one\nLine two" in part.text
    assert part.text.endswith("[End of File: policy.docx]")


@pytest.mark.asyncio
async def test_xlsx_sheets_become_csv_blocks():
    part = await extract(SourceFile(name="energy.xlsx", content=_xlsx_bytes()))

    assert part.kind == "text"
    assert "--- START EXCEL SHEET (File: energy.xlsx, Sheet Index: 0, Sheet Name: Energy) ---" in part.text
    assert "Site,MWh\nMilan,1200" in part.text
    assert "Sheet Name: Empty" in part.text


@pytest.mark.asyncio
async def test_plain_text_is_decoded_leniently():
    part = await extract(SourceFile(name="notes.txt", media_type="text/plain", content=b"caf\xe9 data"))

    assert part.kind == "text"
    assert "caf\ufffd data" in part.text


@pytest.mark.asyncio
async def test_images_pass_through_inline():
    part = await extract(SourceFile(name="chart.png", media_type="image/png", content=b"\x89PNG..."))

    assert part.kind == "binary"
    assert part.media_type == "image/png"
    assert part.data == b"\x89PNG..."


@pytest.mark.asyncio
async def test_pdf_inline_mode(monkeypatch):
    monkeypatch.setattr(settings, "pdf_mode", "inline")
    part = await extract(SourceFile(name="report.pdf", content=b"%PDF-1.7"))

    assert part.kind == "binary"
    assert part.media_type == "application/pdf"


@pytest.mark.asyncio
async def test_pdf_text_mode(monkeypatch):
    monkeypatch.setattr(settings, "pdf_mode", "text")
    monkeypatch.setattr(extractor, "_sync_pdf_extraction", lambda data, name, request_id: "Page text")

    part = await extract(SourceFile(name="report.pdf", content=b"%PDF-1.7"))

    assert part.kind == "text"
    assert "Page text" in part.text


@pytest.mark.asyncio
async def test_pdf_without_text_layer_is_sent_inline(monkeypatch):
    monkeypatch.setattr(settings, "pdf_mode", "text")
    monkeypatch.setattr(extractor, "_sync_pdf_extraction", lambda data, name, request_id: "  \n")

    part = await extract(SourceFile(name="scan.pdf", content=b"%PDF-1.7"))

    assert part.kind == "binary"


@pytest.mark.asyncio
async def test_unsupported_type_becomes_skipped_placeholder():
    part = await extract(SourceFile(name="archive.zip", media_type="application/zip", content=b"PK"))

    assert part.is_placeholder
    assert part.text == "[Skipped unsupported file: archive.zip]"


@pytest.mark.asyncio
async def test_corrupt_file_becomes_error_placeholder():
    part = await extract(SourceFile(name="broken.docx", media_type=DOCX, content=b"not a zip"))

    assert part.is_placeholder
    assert part.text == "[Error parsing file: broken.docx]"


@pytest.mark.asyncio
async def test_media_type_resolution_order(monkeypatch):
    monkeypatch.setattr(extractor.magic, "from_buffer", lambda data, mime: "text/csv")

    declared = SourceFile(name="x.bin", media_type="Text/Plain; charset=utf-8", content=b"")
    by_extension = SourceFile(name="data.xlsx", media_type="application/octet-stream", content=b"")
    sniffed = SourceFile(name="export", content=b"a,b\n1,2")

    assert await resolve_media_type(declared, "req") == "text/plain"
    assert await resolve_media_type(by_extension, "req") == extractor.XLSX_MEDIA_TYPE
    assert await resolve_media_type(sniffed, "req") == "text/csv"


def test_guard_corpus(monkeypatch):
    monkeypatch.setattr(settings, "max_prompt_chars", 5)

    assert guard_corpus("abc", "req") == "abc"
    assert guard_corpus("abcdefgh", "req") == "abcde" + TRUNCATION_MARKER

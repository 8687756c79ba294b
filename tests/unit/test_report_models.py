import pytest
from pydantic import ValidationError

from drafter.models.report_models import BinarySegment
from drafter.models.report_models import ProcessedPart
from drafter.models.report_models import ReportParameters
from drafter.models.report_models import SourceMaterial
from drafter.models.report_models import TextSegment
from drafter.models.report_models import Tone


def test_unknown_tone_falls_back():
    assert ReportParameters(standards=["GRI 2-1"], tone="Brand").tone is Tone.BRAND
    assert ReportParameters(standards=["GRI 2-1"], tone="poetic").tone is Tone.PROFESSIONAL


def test_parameters_require_a_standard_and_positive_length():
    with pytest.raises(ValidationError):
        ReportParameters(standards=[])
    with pytest.raises(ValidationError):
        ReportParameters(standards=["GRI 2-1"], target_length=0)


def test_blank_urls_dropped_duplicates_kept():
    source = SourceMaterial(urls=[" https://a ", "", "https://a", "   "])
    assert source.urls == ["https://a", "https://a"]


def test_processed_part_segments():
    assert ProcessedPart.extracted("text").as_segment() == TextSegment(text="text")
    assert ProcessedPart.placeholder("[Skipped unsupported file: x]").as_segment().text.startswith("[Skipped")
    binary = ProcessedPart.binary("image/png", b"abc").as_segment()
    assert isinstance(binary, BinarySegment)
    assert binary.to_data_uri() == "data:image/png;base64,YWJj"

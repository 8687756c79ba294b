import pytest

from drafter.core.exceptions import ConfigurationError
from drafter.models.report_models import ReportParameters
from drafter.models.report_models import Tone
from drafter.services import prompts
from drafter.services.prompts import TONE_INSTRUCTIONS
from drafter.services.prompts import build_chat_system_prompt
from drafter.services.prompts import build_report_prompt
from drafter.services.prompts import tone_instruction


def _params(**overrides) -> ReportParameters:
    values = {"company_name": "Acme", "reporting_period": "FY2024", "standards": ["GRI 305-1", "GRI 305-2"]}
    values.update(overrides)
    return ReportParameters(**values)


def test_tone_instruction_falls_back_to_professional():
    assert tone_instruction(Tone.BRAND) == TONE_INSTRUCTIONS[Tone.BRAND]
    assert tone_instruction("unknown") == TONE_INSTRUCTIONS[Tone.PROFESSIONAL]


def test_report_prompt_contains_parameters():
    prompt = build_report_prompt(_params(target_length=800, tone="analytical"), "REFERENCE BLOCK", "raw facts", [])

    assert "Company: Acme | Reporting period: FY2024 | Target length: about 800 characters" in prompt
    assert "Standards: GRI 305-1, GRI 305-2" in prompt
    assert "REFERENCE BLOCK" in prompt
    assert TONE_INSTRUCTIONS[Tone.ANALYTICAL] in prompt
    assert prompt.endswith("raw facts")
    assert "### Missing Information" in prompt


def test_report_prompt_placeholders_for_missing_company():
    prompt = build_report_prompt(_params(company_name="", reporting_period=""), "", "", [])
    assert "[Company name]" in prompt
    assert "[Reporting period]" in prompt


def test_report_prompt_toggles():
    plain = build_report_prompt(_params(), "", "", [])
    rich = build_report_prompt(_params(include_tables=True, include_charts=True, use_web_search=True), "", "", [])

    assert "do not use Markdown tables" in plain
    assert "do not produce any Mermaid charts" in plain
    assert "web search" not in plain
    assert "present key figures as Markdown tables" in rich
    assert "Mermaid.js charts" in rich
    assert "web search" in rich


def test_report_prompt_lists_urls():
    prompt = build_report_prompt(_params(), "", "", ["https://a.example", "https://b.example"])
    assert prompt.endswith("# Reference URLs\n- https://a.example\n- https://b.example")


def test_chat_system_prompt():
    prompt = build_chat_system_prompt("Acme", "update_report", "REFERENCE BLOCK")
    assert "Company: Acme" in prompt
    assert "`update_report`" in prompt
    assert prompt.endswith("REFERENCE BLOCK")

    assert "# Reference standards" not in build_chat_system_prompt("Acme", "update_report")


def test_missing_template_is_configuration_error(monkeypatch):
    monkeypatch.setattr(prompts.env, "loader", prompts.jinja2.DictLoader({}))
    with pytest.raises(ConfigurationError):
        build_chat_system_prompt("Acme", "update_report")

import pytest

from drafter.core.config import settings
from drafter.core.exceptions import PromptTooLargeError
from drafter.generation_logic.generation import generate_document
from drafter.models.report_models import ReportParameters
from drafter.models.report_models import SourceFile
from drafter.models.report_models import SourceMaterial
from drafter.services.llm import CredentialInvalidError
from drafter.services.llm import GenerationError
from drafter.services.llm import ProviderError
from drafter.services.llm import QuotaExhaustedError
from tests.fakes import Scripted
from tests.fakes import api_status_error

PARAMS = ReportParameters(company_name="Acme", reporting_period="2024", standards=["GRI 305-1", "GRI 305-2"])
SOURCE = SourceMaterial(raw_text="Scope 1: 120 tCO2e. Scope 2: 80 tCO2e.")


@pytest.mark.asyncio
async def test_partials_grow_and_end_with_sources(gateway, completions, partials):
    completions.queue(
        Scripted(
            text="### Emissions [GRI 305-1]()\nAcme emitted 120 tCO2e.",
            citations=[("GHG Protocol", "https://ghgprotocol.org"), ("dup", "https://ghgprotocol.org")],
            pieces=4,
        )
    )

    document = await generate_document(gateway, PARAMS, SOURCE, partials)

    assert len(partials) >= 2
    for earlier, later in zip(partials, partials[1:]):
        assert later.startswith(earlier)
        assert len(later) > len(earlier)
    assert partials[-1] == document
    assert document.endswith("\n\n### Sources\n- [GHG Protocol](https://ghgprotocol.org)")
    assert completions.calls[0]["stream"] is True


@pytest.mark.asyncio
async def test_without_citations_no_sources_section(gateway, completions, partials):
    completions.queue(Scripted(text="Plain draft"))

    document = await generate_document(gateway, PARAMS, SOURCE, partials)

    assert document == "Plain draft"
    assert partials[-1] == "Plain draft"
    assert "### Sources" not in document


@pytest.mark.asyncio
async def test_without_callback_uses_single_completion(gateway, completions):
    completions.queue(Scripted(text="Whole draft", citations=[("Site", "https://site")]))

    document = await generate_document(gateway, PARAMS, SOURCE)

    assert completions.calls[0]["stream"] is False
    assert document == "Whole draft\n\n### Sources\n- [Site](https://site)"


@pytest.mark.asyncio
async def test_request_carries_instruction_and_files(gateway, completions):
    completions.queue(Scripted(text="ok"))
    source = SourceMaterial(
        raw_text="data",
        files=[SourceFile(name="notes.txt", media_type="text/plain", content=b"water use 10 ML")],
        urls=["https://acme.example/esg"],
    )

    await generate_document(gateway, PARAMS, source, request_id="req-1")

    payload = completions.calls[0]
    parts = payload["messages"][0]["content"]
    assert len(parts) == 2
    assert "GRI 305-2" in parts[0]["text"]
    assert "water use 10 ML" in parts[1]["text"]
    assert payload["extra_body"] == {"plugins": [{"id": "web"}]}


@pytest.mark.asyncio
async def test_credential_failure_propagates(gateway, completions):
    completions.queue(api_status_error(401, "No auth credentials found"))

    with pytest.raises(CredentialInvalidError):
        await generate_document(gateway, PARAMS, SOURCE)


@pytest.mark.asyncio
async def test_quota_failure_propagates(gateway, completions):
    completions.queue(*(api_status_error(429, "Too many requests") for _ in range(3)))

    with pytest.raises(QuotaExhaustedError):
        await generate_document(gateway, PARAMS, SOURCE)


@pytest.mark.asyncio
async def test_other_failures_are_wrapped(gateway, completions):
    completions.queue(api_status_error(400, "Invalid request"))

    with pytest.raises(GenerationError) as exc:
        await generate_document(gateway, PARAMS, SOURCE)

    assert str(exc.value).startswith("Failed to generate report:")
    assert isinstance(exc.value.__cause__, ProviderError)


@pytest.mark.asyncio
async def test_failure_midway_is_wrapped(gateway, completions, partials):
    completions.queue(Scripted(text="Half a draft", fail_midway=api_status_error(500, "connection reset")))

    with pytest.raises(GenerationError):
        await generate_document(gateway, PARAMS, SOURCE, partials)
    assert partials


@pytest.mark.asyncio
async def test_prompt_too_large_is_rejected_before_calling(gateway, completions, monkeypatch):
    monkeypatch.setattr(settings, "max_total_prompt_chars", 50)

    with pytest.raises(PromptTooLargeError):
        await generate_document(gateway, PARAMS, SOURCE)
    assert completions.calls == []

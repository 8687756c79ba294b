import logging
import pathlib
from typing import Any

import jinja2

from drafter.core.exceptions import ConfigurationError
from drafter.models.report_models import ReportParameters
from drafter.models.report_models import Tone

logger = logging.getLogger(__name__)

# --- Reusable Jinja2 Environment ---
PROMPT_DIR = pathlib.Path(__file__).parent / "prompt_templates"
env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(PROMPT_DIR),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=False,
)

TONE_INSTRUCTIONS: dict[Tone, str] = {
    Tone.PROFESSIONAL: "Tone: professional and compliance-oriented. Stress precision and adherence to the standards, use formal terminology, stay objective and rigorous.",
    Tone.ANALYTICAL: "Tone: management analysis. Stress the insights behind the data, trend analysis, and the assessment of risks and opportunities. Keep the content concise and forceful.",
    Tone.BRAND: "Tone: brand communication. Stress sustainability commitments and value creation in accessible, engaging language, while strictly avoiding greenwashing.",
}


def tone_instruction(tone: Tone | str) -> str:
    try:
        return TONE_INSTRUCTIONS[Tone(tone)]
    except ValueError:
        return TONE_INSTRUCTIONS[Tone.PROFESSIONAL]


def _render(template_name: str, context: dict[str, Any]) -> str:
    try:
        template = env.get_template(template_name)
    except jinja2.TemplateNotFound:
        logger.error("Template not found: %s", template_name)
        raise ConfigurationError(f"Internal configuration error: Template '{template_name}' not found.") from None
    return template.render(**context).strip()


def build_report_prompt(
    params: ReportParameters,
    reference_context: str,
    raw_text: str,
    urls: list[str],
) -> str:
    """Instruction text for the initial generation request."""
    return _render(
        "report_prompt.jinja2",
        {
            "company_name": params.company_name,
            "reporting_period": params.reporting_period,
            "target_length": params.target_length,
            "standards": params.standards,
            "reference_context": reference_context,
            "tone_instruction": tone_instruction(params.tone),
            "include_tables": params.include_tables,
            "include_charts": params.include_charts,
            "use_web_search": params.use_web_search,
            "raw_text": raw_text,
            "urls": urls,
        },
    )


def build_chat_system_prompt(company_name: str, tool_name: str, reference_context: str = "") -> str:
    return _render(
        "chat_system_prompt.jinja2",
        {
            "company_name": company_name,
            "reference_context": reference_context,
            "tool_name": tool_name,
        },
    )

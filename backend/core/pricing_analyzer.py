"""
Pricing analyzer: builds the analysis prompt, calls the vision model,
and validates its JSON reply against the AIAnalysis schema.
A reply that cannot be validated is an error; no placeholder price is ever produced.
"""
import json
import logging
import re
from typing import Optional

from pydantic import ValidationError

from integrations.llm_client import LLMClient, LLMError
from models.analysis import AIAnalysis
from prompts.pricing_analysis import price_analysis_prompt, renovation_preview_prompt
from prompts.pricing_document import COMPANY_PRICING_DOCUMENT

logger = logging.getLogger(__name__)

_JSON_BLOCK = re.compile(r"\{[\s\S]*\}")
_FENCE = re.compile(r"```(?:json)?\s*([\s\S]*?)```", re.IGNORECASE)


class AnalysisError(Exception):
    """The model's reply did not contain a valid price analysis."""


def build_analysis_prompt(service_type_name: str) -> str:
    return price_analysis_prompt.format(
        pricing_document=COMPANY_PRICING_DOCUMENT,
        service_type=service_type_name,
    )


def extract_json_block(text: str) -> Optional[str]:
    """Return the outermost {...} span, preferring a fenced ```json block when present."""
    fenced = _FENCE.search(text)
    if fenced:
        m = _JSON_BLOCK.search(fenced.group(1))
        if m:
            return m.group(0)
    m = _JSON_BLOCK.search(text)
    return m.group(0) if m else None


def parse_analysis(text: str) -> AIAnalysis:
    block = extract_json_block(text)
    if block is None:
        raise AnalysisError("No JSON object found in AI response")
    try:
        raw = json.loads(block)
    except json.JSONDecodeError as e:
        raise AnalysisError(f"AI response JSON is malformed: {e.msg}") from e
    if not isinstance(raw, dict):
        raise AnalysisError("AI response JSON is not an object")
    try:
        return AIAnalysis.model_validate(raw)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise AnalysisError(f"AI response failed validation ({fields})") from e


def _preview_description(client: LLMClient, analysis: AIAnalysis) -> Optional[str]:
    prompt = renovation_preview_prompt.format(
        existing_finish=analysis.condition_assessment.existing_finish,
        complexity=analysis.complexity,
        recommendations=", ".join(analysis.recommendations) or "standard refinishing",
    )
    try:
        return client.generate(prompt)
    except LLMError as e:
        logger.warning("Renovation preview generation failed: %s", e)
        return None


def analyze_image(
    client: LLMClient,
    image_b64: str,
    service_type_name: str,
    mime_type: str = "image/jpeg",
    with_preview: bool = False,
) -> AIAnalysis:
    """Price one photo. Raises LLMError when the provider fails, AnalysisError on a bad reply."""
    prompt = build_analysis_prompt(service_type_name)
    raw = client.generate(prompt, image_b64=image_b64, mime_type=mime_type)
    analysis = parse_analysis(raw)
    logger.info(
        "AI pricing for %s: total=%s complexity=%s area=%s",
        service_type_name, analysis.total_price, analysis.complexity, analysis.surface_area,
    )
    if with_preview:
        analysis.preview_description = _preview_description(client, analysis)
    return analysis

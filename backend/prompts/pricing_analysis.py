"""
LangChain prompt templates for RefineAI.
"""
from langchain_core.prompts import PromptTemplate

# ── Photo price analysis ──────────────────────────────────────────────────────

PRICE_ANALYSIS_TEMPLATE = """\
IMPORTANT: Read this company pricing document COMPLETELY before analysing the image.

{pricing_document}

---

TASK: Analyse the attached bathroom photo and price the refinishing work using ONLY
the information in the document above.

Service category: {service_type}

Base every number on what is visible in the photo: condition, size and complexity.
Never fall back to generic or default values.

Respond with exactly one JSON object in this shape and nothing else:

{{
  "complexity": <integer 1-10 from the visual assessment>,
  "surfaceArea": <estimated area in sq ft>,
  "conditionAssessment": {{
    "damage": [<specific damage visible in the photo>],
    "cleanability": "poor|fair|good|excellent",
    "existingFinish": "<description of the current finish>"
  }},
  "breakdown": {{
    "basePrice": <base price from the document>,
    "complexityMultiplier": <multiplier 1.0-3.0>,
    "additionalFees": <repairs, preparation and other extras>,
    "laborHours": <estimated hours>
  }},
  "recommendations": [<specific recommendations>],
  "totalPrice": <final price in USD>
}}
"""

price_analysis_prompt = PromptTemplate(
    input_variables=["pricing_document", "service_type"],
    template=PRICE_ANALYSIS_TEMPLATE,
)

# ── Renovation preview ────────────────────────────────────────────────────────

RENOVATION_PREVIEW_TEMPLATE = """\
Describe, in one short paragraph suitable for a customer, how this bathroom will
look once professionally refinished.

Current finish: {existing_finish}
Complexity: {complexity}/10
Recommended work: {recommendations}

Focus on the refinished surfaces: smooth, durable, like-new coating in fresh modern
colours. Do not mention prices.
"""

renovation_preview_prompt = PromptTemplate(
    input_variables=["existing_finish", "complexity", "recommendations"],
    template=RENOVATION_PREVIEW_TEMPLATE,
)

# ── Chat ──────────────────────────────────────────────────────────────────────

CANNED_CHAT_REPLY = (
    'I received your message: "{content}". '
    "I'm here to help with your bathroom refinishing needs!"
)

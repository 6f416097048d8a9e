"""Public/private classification lookup."""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from university_enricher.lookups.base import LookupDescriptor
from university_enricher.models import UniversityType

PROMPT = """Determine if the university is public or private. Based on your knowledge:
1. Determine the university's ownership/funding model
2. Public universities are primarily funded by government and have public oversight
3. Private universities are funded by private sources (tuition, endowments, etc.)
4. Return the result as a JSON string with format: {"type": "public"} or {"type": "private"}
5. If you're not confident about the type, return {"type": null}

For reference:
- Public universities in Latin America often have "Nacional" in their name
- Public universities typically have lower tuition fees
- Public universities are usually larger in student population
- Private universities often have religious affiliations (e.g., "Católica", "Pontificia")

University: {university.name}
Domain: {university.domain}"""


class UniversityTypeResponse(BaseModel):
    model_config = ConfigDict(strict=True)

    type: Optional[UniversityType]


UNIVERSITY_TYPE_LOOKUP = LookupDescriptor(
    name="University Type",
    field="university_type",
    prompt=PROMPT,
    output_schema=UniversityTypeResponse,
    transform=lambda response: response.type,
)

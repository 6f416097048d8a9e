"""Language centre presence lookup."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from university_enricher.lookups.base import LookupDescriptor

PROMPT = """Determine if the university has a language center/centre. Based on your knowledge:
1. Check if the university has a dedicated language learning facility
2. This could be called:
   - Language Center/Centre
   - Language School
   - Language Institute
   - Centro de Idiomas
   - Instituto de Lenguas
   - Escuela de Idiomas
3. Return the result as a JSON string with format: {"hasLanguageCentre": true/false}
4. If you're not confident about the existence of a language centre, return {"hasLanguageCentre": null}

For reference:
- Most large universities in Latin America have language centers
- They often offer courses in English and other foreign languages
- They may also offer Spanish/Portuguese courses for international students
- The center might be part of a larger faculty (e.g., Faculty of Languages)

University: {university.name}
Domain: {university.domain}"""


class LanguageCentreResponse(BaseModel):
    model_config = ConfigDict(strict=True)

    has_language_centre: Optional[bool] = Field(..., alias="hasLanguageCentre")


LANGUAGE_CENTRE_LOOKUP = LookupDescriptor(
    name="Language Centre",
    field="language_centre",
    prompt=PROMPT,
    output_schema=LanguageCentreResponse,
    transform=lambda response: response.has_language_centre,
)

"""LinkedIn profile URL lookup."""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from university_enricher.lookups.base import LookupDescriptor

PROMPT = """Find the LinkedIn URL for the university. Based on your knowledge:
1. Determine if the university has an official LinkedIn profile
2. The URL should be in the format "https://www.linkedin.com/school/..."
3. Return the result as a JSON string with format: {"url": "linkedin_url_here"}
4. If you're not confident about the LinkedIn URL or can't find it, return {"url": null}

For reference:
- Official university LinkedIn profiles are usually verified
- They typically have thousands of followers
- The URL usually contains the university name in English or local language

University: {university.name}
Domain: {university.domain}"""


class LinkedInResponse(BaseModel):
    model_config = ConfigDict(strict=True)

    url: Optional[str]


def _transform(response: LinkedInResponse) -> Optional[str]:
    if response.url is None:
        return None
    # A blank string is the model's way of not knowing too
    return response.url.strip() or None


LINKEDIN_LOOKUP = LookupDescriptor(
    name="LinkedIn",
    field="linkedin_url",
    prompt=PROMPT,
    output_schema=LinkedInResponse,
    transform=_transform,
)

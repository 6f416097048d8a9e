"""Total student population lookup."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from university_enricher.lookups.base import LookupDescriptor

PROMPT = """Find the total student population for the university. Based on your knowledge:
1. Determine the total number of enrolled students (undergraduate + graduate)
2. Use the most recent available data
3. Return the result as a JSON string with format: {"population": number}
4. If you're not confident about the number or can't find it, return {"population": null}

For reference:
- Large public universities in Latin America often have 50,000+ students
- Private universities typically have 10,000-30,000 students
- Include both undergraduate and graduate students
- Round to the nearest thousand if exact number is not known

University: {university.name}
Domain: {university.domain}"""


class StudentPopulationResponse(BaseModel):
    model_config = ConfigDict(strict=True)

    population: Optional[float] = Field(..., ge=0)


def _transform(response: StudentPopulationResponse) -> Optional[int]:
    if response.population is None:
        return None
    return int(round(response.population))


STUDENT_POPULATION_LOOKUP = LookupDescriptor(
    name="Student Population",
    field="student_population",
    prompt=PROMPT,
    output_schema=StudentPopulationResponse,
    transform=_transform,
)

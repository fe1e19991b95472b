# src/strady/api/schemas.py
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class MessageResponse(BaseModel):
    message: str


# --------------------------------------------
# Generate PDF
# --------------------------------------------

class InvestmentRequest(BaseModel):
    """
    Investment model posted to /api/generate-pdf.

    Fields are typed Any so the raw JSON values reach services.validation
    unchanged (no bool -> float coercion, no 422 on odd shapes); validation
    turns bad input into a 400.
    """
    model_config = ConfigDict(extra="allow", alias_generator=to_camel, populate_by_name=True)

    property_price: Any = Field(None, description="Purchase price, EUR", examples=[300000])
    personal_contribution: Any = Field(None, description="Own funds, EUR", examples=[50000])
    region: Any = Field(None, description='"flanders" or any other region', examples=["flanders"])
    renovation_items: Any = Field(
        None,
        description="List of {surface, intensity}; intensity is light | medium | heavy",
        examples=[[{"surface": 20, "intensity": "medium"}]],
    )

    monthly_rent: Any = Field(None, examples=[1000])
    other_monthly_income: Any = Field(None, examples=[0])
    vacancy_rate: Any = Field(None, description="Percent, 10 means 10%", examples=[10])

    property_tax: Any = Field(None, examples=[600])
    insurance: Any = Field(None, examples=[300])
    maintenance: Any = Field(None, examples=[200])
    co_ownership_fees: Any = Field(None, description="Monthly, EUR", examples=[50])

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)

# src/strady/services/validation.py

import math
from typing import Any

from strady.domain.errors import InvalidInputError
from strady.domain.finance import COST_PER_SQM, InvestmentInput, RenovationItem

# Wire name -> InvestmentInput attribute
REQUIRED_NUMERIC_FIELDS = {
    "propertyPrice": "property_price",
    "personalContribution": "personal_contribution",
}

OPTIONAL_NUMERIC_FIELDS = {
    "monthlyRent": "monthly_rent",
    "otherMonthlyIncome": "other_monthly_income",
    "vacancyRate": "vacancy_rate",
    "propertyTax": "property_tax",
    "insurance": "insurance",
    "maintenance": "maintenance",
    "coOwnershipFees": "co_ownership_fees",
}


def _parse_num(val: Any, field_name: str) -> float:
    # bool is an int subclass; true/false is never a valid amount
    if isinstance(val, bool):
        raise InvalidInputError(f"Invalid type for {field_name}: bool")
    if isinstance(val, (int, float)):
        num = float(val)
    elif isinstance(val, str):
        s = val.strip()
        if s.endswith("%"):
            s = s[:-1]
        try:
            num = float(s)
        except ValueError:
            raise InvalidInputError(f"Invalid number for {field_name}: {val!r}") from None
    else:
        raise InvalidInputError(f"Invalid type for {field_name}: {type(val).__name__}")
    if not math.isfinite(num):
        raise InvalidInputError(f"Invalid number for {field_name}: {val!r}")
    return num


def _to_num(val: Any, field_name: str) -> float:
    """
    Coerce values like:
      - 250000
      - "250000"
      - "10%"
    into float. Missing values are an error.
    """
    if val is None or (isinstance(val, str) and not val.strip()):
        raise InvalidInputError(f"Missing required numeric field: {field_name}")
    return _parse_num(val, field_name)


def _to_num_optional(val: Any, field_name: str) -> float:
    """Like _to_num, but missing/blank counts as 0.0."""
    if val is None:
        return 0.0
    if isinstance(val, str) and not val.strip():
        return 0.0
    return _parse_num(val, field_name)


def _prepare_renovation_items(raw_items: Any) -> list[RenovationItem]:
    if raw_items is None:
        return []
    if not isinstance(raw_items, list):
        raise InvalidInputError("renovationItems must be a list")

    items: list[RenovationItem] = []
    for i, raw in enumerate(raw_items):
        if not isinstance(raw, dict):
            raise InvalidInputError(f"renovationItems[{i}] must be an object")

        surface = _to_num(raw.get("surface"), f"renovationItems[{i}].surface")
        if surface < 0:
            raise InvalidInputError(f"renovationItems[{i}].surface must be non-negative")

        intensity = str(raw.get("intensity") or "").strip()
        if intensity not in COST_PER_SQM:
            raise InvalidInputError(
                f"Unknown renovation intensity at renovationItems[{i}]: {raw.get('intensity')!r}"
            )
        items.append(RenovationItem(surface=surface, intensity=intensity))
    return items


def prepare_investment_input(raw: dict[str, Any]) -> InvestmentInput:
    """
    Normalize an incoming investment model into an InvestmentInput.

    Responsibilities:
      - Property price and personal contribution must be present and numeric.
      - Income/expense figures are optional and default to 0.
      - Region must be exactly "flanders" for the reduced tax rate.
      - Renovation items must carry a known (lower-case) intensity.
    """
    if not isinstance(raw, dict):
        raise InvalidInputError("Investment model must be a JSON object")

    values: dict[str, Any] = {}
    for wire, attr in REQUIRED_NUMERIC_FIELDS.items():
        values[attr] = _to_num(raw.get(wire), wire)
    for wire, attr in OPTIONAL_NUMERIC_FIELDS.items():
        values[attr] = _to_num_optional(raw.get(wire), wire)

    region = raw.get("region")
    values["region"] = str(region).strip() if region is not None else "other"

    values["renovation_items"] = _prepare_renovation_items(raw.get("renovationItems"))

    return InvestmentInput(**values)

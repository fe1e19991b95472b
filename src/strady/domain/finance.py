# src/strady/domain/finance.py
from __future__ import annotations

from dataclasses import dataclass, field

from strady.domain.errors import InvalidInputError

# Renovation cost per square meter, EUR
COST_PER_SQM: dict[str, float] = {
    "light": 250.0,
    "medium": 750.0,
    "heavy": 1500.0,
}

FLANDERS = "flanders"
REGISTRATION_TAX_RATE_FLANDERS = 0.03
REGISTRATION_TAX_RATE_OTHER = 0.125

NOTARY_FEE_RATE = 0.015
NOTARY_FIXED_FEE = 1200.0


@dataclass
class RenovationItem:
    surface: float          # square meters
    intensity: str          # light | medium | heavy


@dataclass
class InvestmentInput:
    property_price: float
    personal_contribution: float
    region: str = "other"
    renovation_items: list[RenovationItem] = field(default_factory=list)

    # Income (monthly)
    monthly_rent: float = 0.0
    other_monthly_income: float = 0.0
    vacancy_rate: float = 0.0       # percent, 10 means 10%

    # Expenses (annual, except co-ownership which is monthly)
    property_tax: float = 0.0
    insurance: float = 0.0
    maintenance: float = 0.0
    co_ownership_fees: float = 0.0


@dataclass
class SummaryFigures:
    property_price: float

    # Acquisition & renovation
    renovation_cost: float
    registration_tax_rate: float
    registration_tax: float
    notary_fees: float

    # Financing
    total_project_cost: float
    initial_cash_outlay: float

    # Rental performance (annual)
    gross_annual_income: float
    effective_gross_income: float
    total_annual_expenses: float
    net_operating_income: float


def registration_tax_rate(region: str | None) -> float:
    if region == FLANDERS:
        return REGISTRATION_TAX_RATE_FLANDERS
    return REGISTRATION_TAX_RATE_OTHER


def renovation_cost(items: list[RenovationItem]) -> float:
    total = 0.0
    for item in items:
        try:
            per_sqm = COST_PER_SQM[item.intensity]
        except KeyError:
            raise InvalidInputError(f"Unknown renovation intensity: {item.intensity!r}") from None
        total += item.surface * per_sqm
    return total


def notary_fees(property_price: float) -> float:
    return property_price * NOTARY_FEE_RATE + NOTARY_FIXED_FEE


def compute_summary(inp: InvestmentInput) -> SummaryFigures:
    """
    Derive the acquisition, financing and rental figures of a project.

    Pure arithmetic: no rounding happens here, display formatting is left
    to the renderer so derived values do not accumulate rounding error.
    """
    price = inp.property_price

    # Acquisition
    reno = renovation_cost(inp.renovation_items)
    tax_rate = registration_tax_rate(inp.region)
    reg_tax = price * tax_rate
    notary = notary_fees(price)

    total_project_cost = price + reg_tax + notary + reno
    initial_cash_outlay = inp.personal_contribution + reg_tax + notary

    # Rental
    gross_annual = (inp.monthly_rent + inp.other_monthly_income) * 12
    effective_gross = gross_annual * (1 - inp.vacancy_rate / 100)
    expenses = inp.property_tax + inp.insurance + inp.maintenance + inp.co_ownership_fees * 12
    noi = effective_gross - expenses

    return SummaryFigures(
        property_price=price,
        renovation_cost=reno,
        registration_tax_rate=tax_rate,
        registration_tax=reg_tax,
        notary_fees=notary,
        total_project_cost=total_project_cost,
        initial_cash_outlay=initial_cash_outlay,
        gross_annual_income=gross_annual,
        effective_gross_income=effective_gross,
        total_annual_expenses=expenses,
        net_operating_income=noi,
    )

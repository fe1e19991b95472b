# tests/test_finance_properties.py

from hypothesis import given, strategies as st

from strady.domain.finance import InvestmentInput, RenovationItem, compute_summary

money = st.floats(min_value=0.0, max_value=5_000_000.0, allow_nan=False, allow_infinity=False)
surfaces = st.floats(min_value=0.0, max_value=2_000.0, allow_nan=False, allow_infinity=False)

renovation_items = st.lists(
    st.builds(
        RenovationItem,
        surface=surfaces,
        intensity=st.sampled_from(["light", "medium", "heavy"]),
    ),
    max_size=8,
)


@given(price=money, contribution=money, region=st.text(max_size=12), items=renovation_items)
def test_total_project_cost_identity(price, contribution, region, items):
    f = compute_summary(
        InvestmentInput(
            property_price=price,
            personal_contribution=contribution,
            region=region,
            renovation_items=items,
        )
    )

    assert f.total_project_cost == f.property_price + f.registration_tax + f.notary_fees + f.renovation_cost
    assert f.initial_cash_outlay == contribution + f.registration_tax + f.notary_fees


@given(price=money, contribution=money, region=st.text(max_size=12))
def test_no_renovation_items_means_no_renovation_cost(price, contribution, region):
    f = compute_summary(
        InvestmentInput(property_price=price, personal_contribution=contribution, region=region)
    )
    assert f.renovation_cost == 0


@given(price=money, region=st.text(max_size=12))
def test_registration_tax_rate_only_depends_on_flanders(price, region):
    f = compute_summary(InvestmentInput(property_price=price, personal_contribution=0.0, region=region))

    expected = 0.03 if region == "flanders" else 0.125
    assert f.registration_tax_rate == expected
    assert f.registration_tax == price * expected


@given(
    rent=st.floats(min_value=0.0, max_value=20_000.0),
    vacancy=st.floats(min_value=0.0, max_value=100.0),
)
def test_vacancy_never_increases_income(rent, vacancy):
    f = compute_summary(
        InvestmentInput(
            property_price=200_000.0,
            personal_contribution=0.0,
            monthly_rent=rent,
            vacancy_rate=vacancy,
        )
    )
    assert f.effective_gross_income <= f.gross_annual_income + 1e-9

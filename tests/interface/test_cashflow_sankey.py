"""Tests for the monthly cashflow Sankey presentation module."""

from decimal import Decimal

from src.adapters.interface.streamlit.cashflow_sankey import (
    DEFICIT_LABEL,
    MIDDLE_LABEL,
    SURPLUS_LABEL,
    build_plotly_figure,
    build_sankey_model,
)
from src.domain.defaults import default_snapshot
from src.domain.models import IncomeExpense, PortfolioSnapshot, StressParameters
from src.domain.services.editing import update_income_expense
from src.domain.services.finance import compute_financial_snapshot


def _model(snapshot, stress=None, **kwargs):
    metrics = compute_financial_snapshot(snapshot, stress)
    return build_sankey_model(snapshot.income_expense, metrics, **kwargs)


def _links_by_label(model) -> dict[tuple[str, str], Decimal]:
    return {
        (model.node_labels[link.source], model.node_labels[link.target]): link.value
        for link in model.links
    }


def test_default_household_routes_surplus_to_the_right() -> None:
    """Income feeds the budget which splits into outflows and surplus."""
    model = _model(default_snapshot())

    links = _links_by_label(model)
    assert links[("Active income", MIDDLE_LABEL)] == Decimal("42000")
    assert links[("Passive income", MIDDLE_LABEL)] == Decimal("55000")
    assert links[(MIDDLE_LABEL, "Mortgage payment")] == Decimal("31000")
    assert links[(MIDDLE_LABEL, SURPLUS_LABEL)] == Decimal("33000")
    assert DEFICIT_LABEL not in model.node_labels
    assert "Rate-shock interest" not in model.node_labels


def test_rate_shock_adds_interest_outflow() -> None:
    """A rate hike adds the extra interest as its own outflow."""
    model = _model(
        default_snapshot(), StressParameters(0, Decimal("0.012"))
    )

    links = _links_by_label(model)
    assert links[(MIDDLE_LABEL, "Rate-shock interest")] == Decimal("3020")


def test_deficit_feeds_budget_from_the_left() -> None:
    """A negative net cash flow appears as a left-side deficit node."""
    snapshot = update_income_expense(
        default_snapshot(), base_living_expense=100000
    )

    model = _model(snapshot)

    links = _links_by_label(model)
    assert links[(DEFICIT_LABEL, MIDDLE_LABEL)] == Decimal("47000")
    assert model.side_by_key["L:DEFICIT"] == "L"
    assert SURPLUS_LABEL not in model.node_labels


def test_deficit_node_can_be_hidden() -> None:
    """show_deficit=False leaves the flows unbalanced."""
    snapshot = update_income_expense(
        default_snapshot(), base_living_expense=100000
    )

    model = _model(snapshot, show_deficit=False)

    assert DEFICIT_LABEL not in model.node_labels


def test_zero_flows_are_omitted() -> None:
    """Flows of zero do not create nodes."""
    model = _model(PortfolioSnapshot(income_expense=IncomeExpense()))

    assert model.node_labels == [MIDDLE_LABEL]
    assert model.links == []


def test_build_plotly_figure_places_sides() -> None:
    """Left nodes sit at x=0.02 and right nodes at x=0.98."""
    model = _model(default_snapshot())

    figure = build_plotly_figure(model)

    sankey = figure.data[0]
    xs = dict(zip(model.node_labels, sankey.node.x))
    assert xs["Active income"] == 0.02
    assert xs[MIDDLE_LABEL] == 0.5
    assert xs[SURPLUS_LABEL] == 0.98
    assert list(sankey.link.value) == [float(link.value) for link in model.links]

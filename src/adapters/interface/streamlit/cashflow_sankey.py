"""Monthly cashflow Sankey presentation logic for the Streamlit UI.

Pure transformations from the income/expense figures and computed metrics
to a Sankey model and Plotly figure. The layout has three columns:
    Income -> Monthly budget -> Outflows
with a ``Surplus`` node on the right when the net cash flow is positive and
an optional ``Deficit`` node on the left when it is negative.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Literal
from typing import TYPE_CHECKING

from src.domain.models import FinancialSnapshot, IncomeExpense

if TYPE_CHECKING:  # pragma: no cover
    import plotly.graph_objects as go


LEFT_PREFIX = "L:"
MIDDLE_PREFIX = "M:"
RIGHT_PREFIX = "R:"

MIDDLE_LABEL = "Monthly budget"
SURPLUS_LABEL = "Surplus"
DEFICIT_LABEL = "Deficit"
EXTRA_INTEREST_LABEL = "Rate-shock interest"

MIDDLE_KEY = f"{MIDDLE_PREFIX}BUDGET"
SURPLUS_KEY = f"{RIGHT_PREFIX}SURPLUS"
DEFICIT_KEY = f"{LEFT_PREFIX}DEFICIT"

Side = Literal["L", "M", "R"]


@dataclass(frozen=True)
class SankeyLink:
    """Sankey link edge."""

    source: int
    target: int
    value: Decimal


@dataclass(frozen=True)
class SankeyModel:
    """Model used by the UI to render a Sankey with stable indices."""

    node_labels: list[str]
    node_keys: list[str]
    links: list[SankeyLink]
    side_by_key: dict[str, Side]


def _flow_items(
    flows: IncomeExpense,
    metrics: FinancialSnapshot,
) -> tuple[list[tuple[str, Decimal]], list[tuple[str, Decimal]]]:
    incoming = [
        ("Active income", metrics.monthly_active_income),
        ("Passive income", metrics.monthly_passive_income),
    ]
    outgoing = [
        ("Mortgage payment", flows.mortgage_payment),
        ("Credit payment", flows.credit_payment),
        ("Living expenses", flows.base_living_expense),
        (EXTRA_INTEREST_LABEL, metrics.extra_interest_burden),
    ]
    return (
        [(label, amount) for label, amount in incoming if amount > 0],
        [(label, amount) for label, amount in outgoing if amount > 0],
    )


def build_sankey_model(
    flows: IncomeExpense,
    metrics: FinancialSnapshot,
    *,
    show_deficit: bool = True,
) -> SankeyModel:
    """Build a Sankey model of one month of income and spending.

    Args:
        flows: Income/expense figures the metrics were computed from.
        metrics: Computed snapshot (provides the stressed interest burden).
        show_deficit: Add a ``Deficit`` node feeding the budget when the
            net cash flow is negative.

    Returns:
        SankeyModel: Nodes and links in a stable order.
    """
    incoming, outgoing = _flow_items(flows, metrics)
    node_labels: list[str] = []
    node_keys: list[str] = []
    side_by_key: dict[str, Side] = {}

    def add_node(key: str, label: str, side: Side) -> int:
        node_keys.append(key)
        node_labels.append(label)
        side_by_key[key] = side
        return len(node_keys) - 1

    links: list[SankeyLink] = []
    left_indices = [
        (add_node(f"{LEFT_PREFIX}{label}", label, "L"), amount)
        for label, amount in incoming
    ]
    middle_index = add_node(MIDDLE_KEY, MIDDLE_LABEL, "M")
    for source, amount in left_indices:
        links.append(SankeyLink(source=source, target=middle_index, value=amount))
    for label, amount in outgoing:
        target = add_node(f"{RIGHT_PREFIX}{label}", label, "R")
        links.append(SankeyLink(source=middle_index, target=target, value=amount))

    net = metrics.net_cash_flow
    if net > 0:
        surplus_index = add_node(SURPLUS_KEY, SURPLUS_LABEL, "R")
        links.append(
            SankeyLink(source=middle_index, target=surplus_index, value=net)
        )
    elif net < 0 and show_deficit:
        deficit_index = add_node(DEFICIT_KEY, DEFICIT_LABEL, "L")
        links.append(
            SankeyLink(
                source=deficit_index,
                target=middle_index,
                value=abs(net),
            )
        )

    return SankeyModel(
        node_labels=node_labels,
        node_keys=node_keys,
        links=links,
        side_by_key=side_by_key,
    )


def build_plotly_figure(model: SankeyModel) -> "go.Figure":
    """Build a Plotly Sankey figure from a Sankey model.

    Args:
        model: Precomputed Sankey model.

    Returns:
        Plotly figure ready to be displayed in Streamlit.
    """
    left_count = sum(1 for side in model.side_by_key.values() if side == "L")
    right_count = sum(1 for side in model.side_by_key.values() if side == "R")

    node_x: list[float] = []
    node_y: list[float] = []
    left_seen = 0
    right_seen = 0
    for key in model.node_keys:
        side = model.side_by_key.get(key, "M")
        if side == "L":
            node_x.append(0.02)
            node_y.append((left_seen + 1) / (left_count + 1))
            left_seen += 1
        elif side == "R":
            node_x.append(0.98)
            node_y.append((right_seen + 1) / (right_count + 1))
            right_seen += 1
        else:
            node_x.append(0.5)
            node_y.append(0.5)

    import plotly.graph_objects as go

    fig = go.Figure(
        data=[
            go.Sankey(
                arrangement="snap",
                node=dict(
                    pad=10,
                    thickness=12,
                    label=model.node_labels,
                    x=node_x,
                    y=node_y,
                    line=dict(color="rgba(0,0,0,0.25)", width=0.5),
                ),
                link=dict(
                    source=[link.source for link in model.links],
                    target=[link.target for link in model.links],
                    value=[float(link.value) for link in model.links],
                ),
                textfont=dict(size=12),
            )
        ]
    )
    fig.update_layout(
        margin=dict(l=8, r=8, t=8, b=8),
        height=360,
    )
    return fig


__all__ = [
    "MIDDLE_LABEL",
    "SURPLUS_LABEL",
    "DEFICIT_LABEL",
    "SankeyLink",
    "SankeyModel",
    "build_sankey_model",
    "build_plotly_figure",
]

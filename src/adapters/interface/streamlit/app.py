"""Streamlit dashboard entry point."""

from collections.abc import Sequence
from decimal import Decimal
from uuid import uuid4

import altair as alt
import streamlit as st

from src.adapters.interface.streamlit.cashflow_sankey import (
    build_plotly_figure,
    build_sankey_model,
)
from src.application.use_cases.edit_portfolio import EditPortfolioUseCase
from src.application.use_cases.get_financial_snapshot import (
    FinancialSnapshot,
    GetFinancialSnapshotUseCase,
)
from src.application.use_cases.transfer_portfolio import (
    ExportPortfolioUseCase,
    ImportPortfolioUseCase,
)
from src.domain.constants import (
    INTEREST_HIKE_STEP,
    MARKET_CRASH_STEP,
    MAX_INTEREST_HIKE_FRACTION,
    MAX_MARKET_CRASH_FRACTION,
)
from src.domain.errors import PortfolioError
from src.domain.models import (
    AllocationSlice,
    Asset,
    BareAssetRow,
    PortfolioSnapshot,
    RiskRow,
    StressParameters,
)
from src.domain.services import editing
from src.domain.services.stress import stress_severity
from src.infrastructure.container import (
    build_autosaver,
    build_settings,
    build_snapshot_repository,
)
from src.infrastructure.logging.logger import get_usage_logger

KIND_LABELS = {
    "investment": "Investments",
    "real_estate": "Real estate",
    "cash": "Cash",
    "mortgage": "Mortgage",
    "credit_line": "Credit line",
    "policy_loan": "Policy loans",
    "share_pledge": "Share pledges",
}

TIER_LABELS = {
    "safe": "Safe",
    "warning": "Warning",
    "top_up_required": "Top-up required",
    "liquidated": "Liquidated",
}

ASSET_PALETTE = ["#10B981", "#F59E0B", "#F43F5E"]
LIABILITY_PALETTE = ["#6366f1", "#8b5cf6", "#ec4899", "#f97316"]

INCOME_EXPENSE_INPUTS = (
    ("active_income", "Monthly active income"),
    ("passive_income", "Monthly passive income"),
    ("mortgage_payment", "Mortgage payment"),
    ("credit_payment", "Credit payment"),
    ("base_living_expense", "Living expenses"),
    ("unused_credit_limit", "Unused credit limit"),
    ("fire_goal", "FIRE goal"),
)


@st.cache_resource(show_spinner=False)
def _load_services():
    """Build the repository-backed services once per server process."""
    settings = build_settings()
    repository = build_snapshot_repository(settings=settings)
    saver = build_autosaver(repository, settings=settings)
    return (
        GetFinancialSnapshotUseCase(
            repository,
            cash_reserve_asset_id=settings.cash_reserve_asset_id,
        ),
        EditPortfolioUseCase(repository, saver=saver),
        ImportPortfolioUseCase(repository, saver=saver),
        saver,
    )


def _check_altair_dependencies() -> tuple[bool, str | None]:
    """Check numpy/pandas imports used by Altair charts.

    Returns:
        tuple[bool, str | None]: Status and an error message when broken.
    """
    try:
        import numpy
        import pandas
    except ImportError as exc:
        return False, f"Chart dependencies unavailable: {exc}"
    if not hasattr(numpy, "ndarray"):
        return False, "numpy import is incomplete (missing ndarray)."
    if not hasattr(pandas, "Timestamp"):
        return False, "pandas import is incomplete (missing Timestamp)."
    return True, None


def _format_money(value: Decimal | None) -> str:
    """Format money values for display."""
    if value is None:
        return "—"
    return f"{value:,.0f}"


def _format_signed(value: Decimal) -> str:
    """Format money values with an explicit sign."""
    sign = "+" if value >= 0 else ""
    return f"{sign}{value:,.0f}"


def _format_pct(value: Decimal | None, digits: int = 1) -> str:
    """Format percentages for display."""
    if value is None:
        return "—"
    return f"{value:.{digits}f}%"


def _prepare_donut_chart_data(
    slices: Sequence[AllocationSlice],
) -> tuple[list[dict[str, str | float]], Decimal]:
    """Prepare donut chart data for an allocation breakdown.

    Args:
        slices: Amounts by asset or liability kind.

    Returns:
        Tuple with Altair-ready chart data and the total amount.
    """
    total_amount = sum((item.amount for item in slices), start=Decimal("0"))
    data: list[dict[str, str | float]] = []
    for item in slices:
        if item.amount <= 0:
            continue
        share = (
            (item.amount / total_amount) * Decimal("100")
            if total_amount
            else Decimal("0")
        )
        data.append(
            {
                "category": KIND_LABELS.get(item.kind, item.kind),
                "amount": float(item.amount),
                "amount_label": _format_money(item.amount),
                "share_label": f"{share:.0f}%",
            }
        )
    return data, total_amount


def _risk_table_data(rows: Sequence[RiskRow]) -> list[dict[str, str]]:
    """Flatten risk rows into display records."""
    data = []
    for row in rows:
        if isinstance(row, BareAssetRow):
            data.append(
                {
                    "Name": row.name,
                    "Kind": KIND_LABELS.get(row.kind, row.kind),
                    "Value": _format_money(row.current_value),
                    "Principal": "—",
                    "Ratio": "—",
                    "Top-up line": "—",
                    "Liquidation line": "—",
                    "Buffer": "—",
                    "ROI (incl. income)": _format_pct(row.total_roi_pct),
                    "Status": TIER_LABELS[row.tier],
                }
            )
            continue
        if row.maintenance_ratio is not None:
            ratio = _format_pct(row.maintenance_ratio * 100, digits=0)
        elif row.current_value is not None and row.principal > 0:
            ratio = _format_pct(row.ratio * 100)
        else:
            ratio = "—"
        has_lines = row.liquidation_line > 0
        data.append(
            {
                "Name": row.name,
                "Kind": KIND_LABELS.get(row.kind, row.kind),
                "Value": _format_money(row.current_value),
                "Principal": _format_money(row.principal),
                "Ratio": ratio,
                "Top-up line": (
                    _format_money(row.top_up_line) if has_lines else "—"
                ),
                "Liquidation line": (
                    _format_money(row.liquidation_line) if has_lines else "—"
                ),
                "Buffer": _format_money(row.liquidation_buffer),
                "ROI (incl. income)": _format_pct(row.total_roi_pct),
                "Status": TIER_LABELS[row.tier],
            }
        )
    return data


def _render_donut_chart(
    slices: Sequence[AllocationSlice],
    title: str,
    palette: Sequence[str],
    chart_size: int = 260,
) -> None:
    """Render a donut chart of amounts by kind."""
    data, total_amount = _prepare_donut_chart_data(slices)
    st.subheader(title)
    if not data:
        st.info("Nothing to chart.")
        return
    base = alt.Chart(alt.Data(values=data)).mark_arc(
        innerRadius=chart_size * 0.35,
        cornerRadius=6,
        padAngle=0.02,
    ).encode(
        theta=alt.Theta("amount:Q"),
        color=alt.Color(
            "category:N",
            scale=alt.Scale(range=list(palette)),
            legend=alt.Legend(orient="bottom", title=None),
        ),
        tooltip=[
            alt.Tooltip("category:N"),
            alt.Tooltip("amount_label:N"),
            alt.Tooltip("share_label:N"),
        ],
    ).properties(width=chart_size, height=chart_size)
    st.altair_chart(base, width="stretch")
    st.caption(f"Total {_format_money(total_amount)}")


def _current_snapshot(reader: GetFinancialSnapshotUseCase) -> PortfolioSnapshot:
    """Return the working snapshot kept in the session."""
    if "snapshot" not in st.session_state:
        st.session_state["snapshot"] = reader.load_snapshot()
    return st.session_state["snapshot"]


def _apply_edit(editor: EditPortfolioUseCase, edit, *args, **kwargs) -> bool:
    """Apply an edit to the session snapshot and report domain errors."""
    try:
        st.session_state["snapshot"] = editor.apply(
            st.session_state["snapshot"], edit, *args, **kwargs
        )
    except PortfolioError as exc:
        st.error(str(exc))
        return False
    return True


def _render_stress_controls() -> StressParameters:
    """Render the stress sliders and return the selected scenario."""
    st.sidebar.header("Stress test")
    crash = st.sidebar.slider(
        "Market crash",
        min_value=0.0,
        max_value=float(MAX_MARKET_CRASH_FRACTION),
        step=float(MARKET_CRASH_STEP),
        value=0.0,
        format="%.2f",
    )
    hike = st.sidebar.slider(
        "Interest rate hike",
        min_value=0.0,
        max_value=float(MAX_INTEREST_HIKE_FRACTION),
        step=float(INTEREST_HIKE_STEP),
        value=0.0,
        format="%.3f",
    )
    stress = StressParameters(crash, hike).clamped()
    market, rate = stress_severity(stress)
    st.sidebar.caption(f"Market: {market} · Rates: {rate}")
    return stress


def _render_summary(metrics: FinancialSnapshot) -> None:
    """Render the headline metric cards."""
    worth_col, flow_col, fire_col, profit_col = st.columns(4)
    worth_col.metric("Net worth", _format_money(metrics.net_worth))
    flow_col.metric(
        "Monthly cash flow",
        _format_signed(metrics.net_cash_flow),
        _format_signed(-metrics.extra_interest_burden)
        if metrics.extra_interest_burden
        else None,
    )
    fire_col.metric("FIRE progress", _format_pct(metrics.fire_progress_pct))
    fire_col.progress(
        min(max(float(metrics.fire_progress_pct) / 100, 0.0), 1.0)
    )
    profit_col.metric(
        "Total profit",
        _format_money(metrics.total_profit),
        f"ROI {_format_pct(metrics.roi_pct)}",
    )


def _render_income_expense(
    editor: EditPortfolioUseCase,
    snapshot: PortfolioSnapshot,
) -> None:
    """Render income/expense inputs and save changed values."""
    st.subheader("Income & expenses")
    flows = snapshot.income_expense
    changes = {}
    columns = st.columns(len(INCOME_EXPENSE_INPUTS))
    for column, (name, label) in zip(columns, INCOME_EXPENSE_INPUTS):
        current = getattr(flows, name)
        value = column.number_input(
            label,
            min_value=0.0,
            value=float(current),
            step=1000.0,
            key=f"flows_{name}",
        )
        if Decimal(str(value)) != current:
            changes[name] = value
    if changes and _apply_edit(
        editor, editing.update_income_expense, **changes
    ):
        st.rerun()


def _render_assets(
    editor: EditPortfolioUseCase,
    snapshot: PortfolioSnapshot,
) -> None:
    """Render asset editors, delete buttons and the add form."""
    st.subheader("Assets")
    for asset in snapshot.assets:
        value_col, cost_col, income_col, delete_col = st.columns([3, 3, 3, 1])
        market_value = value_col.number_input(
            f"{asset.name} value",
            min_value=0.0,
            value=float(asset.market_value),
            step=10000.0,
            key=f"asset_value_{asset.id}",
        )
        cost_basis = cost_col.number_input(
            "Cost",
            min_value=0.0,
            value=float(asset.cost_basis),
            step=10000.0,
            key=f"asset_cost_{asset.id}",
        )
        realized = income_col.number_input(
            "Realized income",
            min_value=0.0,
            value=float(asset.realized_income),
            step=1000.0,
            key=f"asset_income_{asset.id}",
        )
        if delete_col.button("Delete", key=f"asset_delete_{asset.id}"):
            if _apply_edit(editor, editing.delete_asset, asset.id):
                get_usage_logger().info(f"Deleted asset {asset.id}")
                st.rerun()
        edited = {
            "market_value": market_value,
            "cost_basis": cost_basis,
            "realized_income": realized,
        }
        if any(
            Decimal(str(value)) != getattr(asset, name)
            for name, value in edited.items()
        ) and _apply_edit(editor, editing.update_asset, asset.id, **edited):
            st.rerun()

    with st.form("add_asset", clear_on_submit=True):
        st.caption("Add asset")
        name_col, kind_col = st.columns(2)
        name = name_col.text_input("Name")
        kind = kind_col.selectbox(
            "Kind",
            options=["investment", "real_estate", "cash"],
            format_func=lambda value: KIND_LABELS[value],
        )
        value_col, cost_col, income_col, loan_col = st.columns(4)
        market_value = value_col.number_input("Market value", min_value=0.0)
        cost_basis = cost_col.number_input("Cost", min_value=0.0)
        realized = income_col.number_input("Realized income", min_value=0.0)
        loan = loan_col.number_input("Loan against it", min_value=0.0)
        if st.form_submit_button("Add") and name.strip():
            asset_id = f"a-{uuid4().hex[:8]}"
            added = _apply_edit(
                editor,
                editing.add_asset,
                Asset(asset_id, name.strip(), kind, market_value,
                      cost_basis, realized),
                loan,
            )
            if added:
                get_usage_logger().info(f"Added asset {asset_id}")
                st.rerun()


def _render_risk_table(
    editor: EditPortfolioUseCase,
    snapshot: PortfolioSnapshot,
    metrics: FinancialSnapshot,
) -> None:
    """Render the liability risk table and its editors."""
    st.subheader("Assets & risk (with trigger lines)")
    st.dataframe(
        _risk_table_data(metrics.risk_rows),
        width="stretch",
        hide_index=True,
    )
    with st.expander("Edit liabilities"):
        for item in snapshot.liabilities:
            principal_col, rate_col = st.columns(2)
            principal = principal_col.number_input(
                f"{item.name} principal",
                min_value=0.0,
                value=float(item.principal),
                step=10000.0,
                key=f"liability_principal_{item.id}",
            )
            rate_pct = rate_col.number_input(
                "Rate (%)",
                min_value=0.0,
                value=float(item.annual_rate * 100),
                step=0.05,
                format="%.2f",
                key=f"liability_rate_{item.id}",
            )
            rate = Decimal(str(rate_pct)) / 100
            if (
                Decimal(str(principal)) != item.principal
                or rate.quantize(Decimal("0.0001"))
                != item.annual_rate.quantize(Decimal("0.0001"))
            ) and _apply_edit(
                editor,
                editing.update_liability,
                item.id,
                principal=principal,
                annual_rate=rate,
            ):
                st.rerun()


def _render_liquidity(metrics: FinancialSnapshot) -> None:
    """Render the reserve and liquidity panel."""
    st.subheader("Liquidity")
    st.metric("Cash reserve", _format_money(metrics.cash_reserve))
    st.metric("Unused credit limit", _format_money(metrics.unused_credit_limit))
    with st.expander(
        f"Net investment equity {_format_money(metrics.net_investment_equity)}"
    ):
        st.dataframe(
            [
                {"Asset": item.name, "Net value": _format_money(item.net_value)}
                for item in metrics.investment_equity_breakdown
            ],
            width="stretch",
            hide_index=True,
        )
    st.metric("Total strategic liquidity", _format_money(metrics.total_liquidity))


def _render_backup_controls(
    editor: EditPortfolioUseCase,
    importer: ImportPortfolioUseCase,
    snapshot: PortfolioSnapshot,
) -> None:
    """Render save, backup, restore and reset controls."""
    st.sidebar.header("Data")
    usage = get_usage_logger()
    if st.sidebar.button("Save now"):
        editor.save_now(snapshot)
        usage.info("Manual save")
        st.sidebar.success("Saved.")
    filename, payload = ExportPortfolioUseCase().execute(snapshot)
    st.sidebar.download_button(
        "Download backup",
        data=payload,
        file_name=filename,
        mime="application/json",
    )
    uploaded = st.sidebar.file_uploader("Restore backup", type=["json"])
    if uploaded is not None and st.sidebar.button("Import"):
        try:
            st.session_state["snapshot"] = importer.execute(uploaded.getvalue())
        except PortfolioError as exc:
            st.sidebar.error(f"Backup rejected: {exc}")
        else:
            usage.info(f"Imported backup {uploaded.name}")
            st.rerun()
    if st.sidebar.button("Reset to demo data"):
        st.session_state["snapshot"] = editor.reset()
        usage.info("Reset to defaults")
        st.rerun()


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="What-if Finance Dashboard", layout="wide")
    st.title("What-if Finance Dashboard")

    reader, editor, importer, saver = _load_services()
    snapshot = _current_snapshot(reader)
    stress = _render_stress_controls()
    show_bare = st.sidebar.toggle("Show unpledged assets", value=False)
    _render_backup_controls(editor, importer, snapshot)
    if saver.has_pending:
        st.sidebar.caption("Unsaved changes…")
    else:
        saved_at = reader.last_saved_at()
        if saved_at is not None:
            st.sidebar.caption(
                f"Last saved {saved_at.astimezone():%Y-%m-%d %H:%M:%S}"
            )

    metrics = reader.compute(snapshot, stress, include_bare_assets=show_bare)
    _render_summary(metrics)

    ok, message = _check_altair_dependencies()
    main_col, side_col = st.columns([2, 1])
    with main_col:
        if ok:
            assets_chart, liabilities_chart = st.columns(2)
            with assets_chart:
                _render_donut_chart(
                    metrics.asset_allocation, "Asset allocation", ASSET_PALETTE
                )
            with liabilities_chart:
                _render_donut_chart(
                    metrics.liability_breakdown,
                    "Liabilities",
                    LIABILITY_PALETTE,
                )
        else:
            st.warning(message)
        st.subheader("Monthly flow")
        st.plotly_chart(
            build_plotly_figure(
                build_sankey_model(snapshot.income_expense, metrics)
            ),
            width="stretch",
        )
        _render_risk_table(editor, snapshot, metrics)
        _render_assets(editor, snapshot)
    with side_col:
        _render_income_expense(editor, snapshot)
        _render_liquidity(metrics)


if __name__ == "__main__":  # pragma: no cover
    main()

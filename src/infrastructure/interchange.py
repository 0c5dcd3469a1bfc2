"""JSON interchange format for portfolio backups.

Documents use the camelCase layout of the browser dashboard backups::

    {"assets": [...], "liabilities": [...], "incomeExpense": {...},
     "exportDate": "2024-01-01T00:00:00+00:00"}

Amounts are written with their full Decimal digits and read back as
``Decimal`` so that a round trip computes exactly the same metrics as the
exported snapshot. Non-finite numbers are rejected on both sides.
"""

import json
import re
from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal
from typing import Any
from uuid import uuid4

from src.domain.defaults import DEFAULT_INCOME_EXPENSE
from src.domain.errors import InterchangeFormatError
from src.domain.models.portfolio import (
    Asset,
    IncomeExpense,
    Liability,
    PortfolioSnapshot,
)
from src.domain.services.normalization import (
    normalize_asset_kind,
    normalize_liability_kind,
)

_ASSET_KIND_LABELS = {
    "investment": "investment",
    "real_estate": "realestate",
    "cash": "cash",
}

_LIABILITY_KIND_LABELS = {
    "mortgage": "mortgage",
    "credit_line": "credit",
    "share_pledge": "pledge",
    "policy_loan": "policy",
}

_INCOME_EXPENSE_KEYS = {
    "active_income": "monthlyActiveIncome",
    "passive_income": "monthlyPassiveIncome",
    "mortgage_payment": "monthlyMortgagePayment",
    "credit_payment": "monthlyCreditPayment",
    "base_living_expense": "monthlyBaseLivingExpense",
    "fire_goal": "fireGoal",
    "unused_credit_limit": "unusedCreditLimit",
}


def snapshot_to_document(
    snapshot: PortfolioSnapshot,
    exported_at: datetime,
) -> dict[str, Any]:
    """Convert a snapshot into an interchange document.

    Args:
        snapshot: Snapshot to export.
        exported_at: Timestamp written as ``exportDate``.

    Returns:
        dict[str, Any]: JSON-ready document (amounts stay Decimal).
    """
    flows = snapshot.income_expense
    return {
        "assets": [
            {
                "id": asset.id,
                "name": asset.name,
                "type": _ASSET_KIND_LABELS[asset.kind],
                "marketValue": asset.market_value,
                "cost": asset.cost_basis,
                "realizedDividend": asset.realized_income,
            }
            for asset in snapshot.assets
        ],
        "liabilities": [
            _liability_to_dict(item) for item in snapshot.liabilities
        ],
        "incomeExpense": {
            key: getattr(flows, name)
            for name, key in _INCOME_EXPENSE_KEYS.items()
        },
        "exportDate": exported_at.isoformat(),
    }


def _liability_to_dict(item: Liability) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": item.id,
        "name": item.name,
        "type": _LIABILITY_KIND_LABELS[item.kind],
        "principal": item.principal,
        "interestRate": item.annual_rate,
    }
    if item.collateral_asset_id is not None:
        payload["relatedAssetId"] = item.collateral_asset_id
    if item.maintenance_threshold is not None:
        payload["maintenanceThreshold"] = item.maintenance_threshold
    return payload


def snapshot_from_document(document: Any) -> PortfolioSnapshot:
    """Parse an interchange document into a snapshot.

    Args:
        document: Decoded JSON document.

    Returns:
        PortfolioSnapshot: Parsed snapshot; a missing ``incomeExpense``
        falls back to the default figures.

    Raises:
        InterchangeFormatError: If required sections or fields are missing
            or hold unknown kinds.
    """
    if not isinstance(document, Mapping):
        raise InterchangeFormatError("Backup document must be a JSON object")
    raw_assets = document.get("assets")
    raw_liabilities = document.get("liabilities")
    if not isinstance(raw_assets, list) or not isinstance(
        raw_liabilities, list
    ):
        raise InterchangeFormatError(
            "Backup document must contain 'assets' and 'liabilities' lists"
        )
    raw_flows = document.get("incomeExpense")
    return PortfolioSnapshot(
        assets=tuple(_asset_from_dict(raw) for raw in raw_assets),
        liabilities=tuple(_liability_from_dict(raw) for raw in raw_liabilities),
        income_expense=(
            _income_expense_from_dict(raw_flows)
            if isinstance(raw_flows, Mapping)
            else DEFAULT_INCOME_EXPENSE
        ),
    )


def _asset_from_dict(raw: Any) -> Asset:
    _require_fields(raw, "asset", ("id", "name", "type"))
    kind = normalize_asset_kind(str(raw["type"]))
    if kind is None:
        raise InterchangeFormatError(
            f"Unknown asset type for {raw['id']}: {raw['type']}"
        )
    return Asset(
        id=str(raw["id"]),
        name=str(raw["name"]),
        kind=kind,
        market_value=_amount(raw, "marketValue"),
        cost_basis=_amount(raw, "cost"),
        realized_income=_amount(raw, "realizedDividend"),
    )


def _liability_from_dict(raw: Any) -> Liability:
    _require_fields(raw, "liability", ("id", "name", "type"))
    kind = normalize_liability_kind(str(raw["type"]))
    if kind is None:
        raise InterchangeFormatError(
            f"Unknown liability type for {raw['id']}: {raw['type']}"
        )
    related = raw.get("relatedAssetId")
    threshold = raw.get("maintenanceThreshold")
    return Liability(
        id=str(raw["id"]),
        name=str(raw["name"]),
        kind=kind,
        principal=_amount(raw, "principal"),
        annual_rate=_amount(raw, "interestRate"),
        collateral_asset_id=str(related) if related else None,
        maintenance_threshold=(
            _to_decimal(threshold, "maintenanceThreshold")
            if threshold is not None
            else None
        ),
    )


def _income_expense_from_dict(raw: Mapping) -> IncomeExpense:
    values = {
        name: _to_decimal(raw[key], key)
        for name, key in _INCOME_EXPENSE_KEYS.items()
        if raw.get(key) is not None
    }
    return IncomeExpense(**values)


def _require_fields(raw: Any, entity: str, names: tuple[str, ...]) -> None:
    if not isinstance(raw, Mapping):
        raise InterchangeFormatError(f"Each {entity} must be a JSON object")
    missing = [name for name in names if raw.get(name) in (None, "")]
    if missing:
        raise InterchangeFormatError(
            f"{entity.capitalize()} is missing fields: {', '.join(missing)}"
        )


def _amount(raw: Mapping, key: str) -> Decimal:
    value = raw.get(key)
    if value is None:
        return Decimal("0")
    return _to_decimal(value, key)


def _to_decimal(value: Any, key: str) -> Decimal:
    if isinstance(value, bool):
        raise InterchangeFormatError(f"Field {key} must be numeric")
    if isinstance(value, Decimal):
        number = value
    else:
        try:
            number = Decimal(str(value))
        except ArithmeticError as exc:
            raise InterchangeFormatError(
                f"Field {key} must be numeric, got {value!r}"
            ) from exc
    if not number.is_finite():
        raise InterchangeFormatError(
            f"Field {key} must be a finite number, got {value!r}"
        )
    return number


def _reject_constant(name: str) -> Any:
    raise InterchangeFormatError(f"Backup contains a non-finite number: {name}")


def dumps_snapshot(snapshot: PortfolioSnapshot, exported_at: datetime) -> str:
    """Serialize a snapshot to interchange JSON text.

    Decimals are emitted as JSON numbers spelled with their own digits,
    never through ``float``. Each one is first written as a marked string
    and the marker quotes are then stripped.

    Raises:
        ValueError: If an amount is NaN or infinite.
    """
    marker = f"@dec-{uuid4().hex}:"

    def encode(value: Any) -> Any:
        if isinstance(value, Decimal):
            if not value.is_finite():
                raise ValueError(f"Cannot export non-finite amount {value}")
            return f"{marker}{value}"
        raise TypeError(
            f"Object of type {type(value).__name__} is not JSON serializable"
        )

    text = json.dumps(
        snapshot_to_document(snapshot, exported_at),
        default=encode,
        ensure_ascii=False,
        indent=2,
    )
    return re.sub(rf'"{re.escape(marker)}([^"]*)"', r"\1", text)


def loads_snapshot(text: str | bytes) -> PortfolioSnapshot:
    """Parse interchange JSON text into a snapshot.

    Raises:
        InterchangeFormatError: If the text is not valid JSON or not a valid
            backup document.
    """
    try:
        document = json.loads(
            text,
            parse_float=Decimal,
            parse_int=Decimal,
            parse_constant=_reject_constant,
        )
    except ValueError as exc:
        raise InterchangeFormatError(f"Backup is not valid JSON: {exc}") from exc
    return snapshot_from_document(document)


def export_filename(today: date) -> str:
    """Return the download file name for a backup made on ``today``."""
    return f"portfolio_backup_{today.isoformat()}.json"


__all__ = [
    "snapshot_to_document",
    "snapshot_from_document",
    "dumps_snapshot",
    "loads_snapshot",
    "export_filename",
]

"""Domain validation helpers."""

from collections import Counter
from logging import Logger

from src.domain.models.portfolio import PortfolioSnapshot
from src.utils.decimal_utils import ZERO

_ASSET_AMOUNTS = ("market_value", "cost_basis", "realized_income")
_LIABILITY_AMOUNTS = ("principal", "annual_rate")


def validate_portfolio(snapshot: PortfolioSnapshot, logger: Logger) -> None:
    """Warn when a snapshot breaks the expected data invariants.

    The engine tolerates every case reported here, so nothing is raised.

    Args:
        snapshot: Snapshot about to be computed.
        logger: Logger used for warnings.
    """
    asset_ids = Counter(asset.id for asset in snapshot.assets)
    for asset_id, count in asset_ids.items():
        if count > 1:
            logger.warning(f"Asset id is used {count} times: {asset_id}")
    liability_ids = Counter(item.id for item in snapshot.liabilities)
    for liability_id, count in liability_ids.items():
        if count > 1:
            logger.warning(
                f"Liability id is used {count} times: {liability_id}"
            )

    for asset in snapshot.assets:
        for name in _ASSET_AMOUNTS:
            value = getattr(asset, name)
            if value < ZERO:
                logger.warning(
                    f"Asset {asset.id} has negative {name}: {value}"
                )

    collateral_uses: Counter[str] = Counter()
    for item in snapshot.liabilities:
        for name in _LIABILITY_AMOUNTS:
            value = getattr(item, name)
            if value < ZERO:
                logger.warning(
                    f"Liability {item.id} has negative {name}: {value}"
                )
        if item.collateral_asset_id is None:
            continue
        if item.collateral_asset_id not in asset_ids:
            logger.warning(
                f"Liability {item.id} references missing collateral "
                f"{item.collateral_asset_id}; treated as unsecured"
            )
            continue
        collateral_uses[item.collateral_asset_id] += 1

    for asset_id, count in collateral_uses.items():
        if count > 1:
            logger.warning(
                f"Asset {asset_id} secures {count} liabilities; each is "
                f"evaluated against its full value"
            )


__all__ = ["validate_portfolio"]

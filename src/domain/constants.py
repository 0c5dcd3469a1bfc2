"""Domain constants for the what-if finance engine."""

from decimal import Decimal

ASSET_KIND_INVESTMENT = "investment"
ASSET_KIND_REAL_ESTATE = "real_estate"
ASSET_KIND_CASH = "cash"

ASSET_KINDS = (
    ASSET_KIND_REAL_ESTATE,
    ASSET_KIND_CASH,
    ASSET_KIND_INVESTMENT,
)

LIABILITY_KIND_MORTGAGE = "mortgage"
LIABILITY_KIND_CREDIT_LINE = "credit_line"
LIABILITY_KIND_SHARE_PLEDGE = "share_pledge"
LIABILITY_KIND_POLICY_LOAN = "policy_loan"

LIABILITY_KINDS = (
    LIABILITY_KIND_MORTGAGE,
    LIABILITY_KIND_CREDIT_LINE,
    LIABILITY_KIND_POLICY_LOAN,
    LIABILITY_KIND_SHARE_PLEDGE,
)

# Kinds whose interest burden reacts to the rate-shock slider and whose
# principal counts against net investment equity.
RATE_SENSITIVE_LIABILITY_KINDS = (
    LIABILITY_KIND_SHARE_PLEDGE,
    LIABILITY_KIND_POLICY_LOAN,
)

RISK_TIER_SAFE = "safe"
RISK_TIER_WARNING = "warning"
RISK_TIER_TOP_UP_REQUIRED = "top_up_required"
RISK_TIER_LIQUIDATED = "liquidated"

RISK_TIERS = (
    RISK_TIER_SAFE,
    RISK_TIER_WARNING,
    RISK_TIER_TOP_UP_REQUIRED,
    RISK_TIER_LIQUIDATED,
)

# Share pledge: collateral value / principal.
PLEDGE_LIQUIDATION_RATIO = Decimal("1.3")
PLEDGE_TOP_UP_RATIO = Decimal("1.4")
PLEDGE_WARNING_RATIO = Decimal("1.5")

# Policy loan and other secured borrowing: principal / collateral value.
LOAN_LIQUIDATION_RATIO = Decimal("0.8")
LOAN_TOP_UP_RATIO = Decimal("0.7")
LOAN_WARNING_RATIO = Decimal("0.6")

MAX_MARKET_CRASH_FRACTION = Decimal("0.5")
MAX_INTEREST_HIKE_FRACTION = Decimal("0.02")
MARKET_CRASH_STEP = Decimal("0.05")
INTEREST_HIKE_STEP = Decimal("0.001")

SEVERE_CRASH_FRACTION = Decimal("0.3")
MODERATE_CRASH_FRACTION = Decimal("0.1")
ELEVATED_HIKE_FRACTION = Decimal("0.01")

MONTHS_PER_YEAR = Decimal("12")

DEFAULT_CASH_RESERVE_ASSET_ID = "c1"
DEFAULT_FIRE_GOAL = Decimal("20000000")

# Paired loan created alongside a new asset.
PAIRED_LOAN_RATE = Decimal("0.03")
PAIRED_LOAN_MAINTENANCE_THRESHOLD = Decimal("0.5")
PAIRED_LOAN_SUFFIX = " loan"


__all__ = [
    "ASSET_KIND_INVESTMENT",
    "ASSET_KIND_REAL_ESTATE",
    "ASSET_KIND_CASH",
    "ASSET_KINDS",
    "LIABILITY_KIND_MORTGAGE",
    "LIABILITY_KIND_CREDIT_LINE",
    "LIABILITY_KIND_SHARE_PLEDGE",
    "LIABILITY_KIND_POLICY_LOAN",
    "LIABILITY_KINDS",
    "RATE_SENSITIVE_LIABILITY_KINDS",
    "RISK_TIER_SAFE",
    "RISK_TIER_WARNING",
    "RISK_TIER_TOP_UP_REQUIRED",
    "RISK_TIER_LIQUIDATED",
    "RISK_TIERS",
    "PLEDGE_LIQUIDATION_RATIO",
    "PLEDGE_TOP_UP_RATIO",
    "PLEDGE_WARNING_RATIO",
    "LOAN_LIQUIDATION_RATIO",
    "LOAN_TOP_UP_RATIO",
    "LOAN_WARNING_RATIO",
    "MAX_MARKET_CRASH_FRACTION",
    "MAX_INTEREST_HIKE_FRACTION",
    "MARKET_CRASH_STEP",
    "INTEREST_HIKE_STEP",
    "SEVERE_CRASH_FRACTION",
    "MODERATE_CRASH_FRACTION",
    "ELEVATED_HIKE_FRACTION",
    "MONTHS_PER_YEAR",
    "DEFAULT_CASH_RESERVE_ASSET_ID",
    "DEFAULT_FIRE_GOAL",
    "PAIRED_LOAN_RATE",
    "PAIRED_LOAN_MAINTENANCE_THRESHOLD",
    "PAIRED_LOAN_SUFFIX",
]

"""Domain normalization helpers."""

from src.domain.constants import ASSET_KINDS, LIABILITY_KINDS

_ASSET_KIND_ALIASES = {
    "realestate": "real_estate",
    "property": "real_estate",
}

_LIABILITY_KIND_ALIASES = {
    "credit": "credit_line",
    "pledge": "share_pledge",
    "policy": "policy_loan",
}


def _clean(raw: str | None) -> str | None:
    if not raw:
        return None
    cleaned = raw.strip().lower().replace(" ", "_").replace("-", "_")
    return cleaned or None


def normalize_asset_kind(raw: str | None) -> str | None:
    """Normalize asset kind labels.

    Args:
        raw: Raw kind value, e.g. ``"realestate"`` from a backup file.

    Returns:
        str | None: Canonical asset kind, or None when unknown.
    """
    cleaned = _clean(raw)
    if cleaned is None:
        return None
    cleaned = _ASSET_KIND_ALIASES.get(cleaned, cleaned)
    return cleaned if cleaned in ASSET_KINDS else None


def normalize_liability_kind(raw: str | None) -> str | None:
    """Normalize liability kind labels.

    Args:
        raw: Raw kind value, e.g. ``"pledge"`` from a backup file.

    Returns:
        str | None: Canonical liability kind, or None when unknown.
    """
    cleaned = _clean(raw)
    if cleaned is None:
        return None
    cleaned = _LIABILITY_KIND_ALIASES.get(cleaned, cleaned)
    return cleaned if cleaned in LIABILITY_KINDS else None


__all__ = ["normalize_asset_kind", "normalize_liability_kind"]

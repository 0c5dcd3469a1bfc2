"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlparse

import dotenv

from src.domain.constants import DEFAULT_CASH_RESERVE_ASSET_ID
from src.infrastructure.logging.logger import get_app_logger
from src.utils.utils import get_project_root

DEFAULT_STORAGE_KEY = "FINANCIAL_FREEDOM_DASHBOARD_DATA_V2"
DEFAULT_AUTOSAVE_DELAY_SECONDS = 3.0


@dataclass(frozen=True)
class DashboardSettings:
    """Settings for the dashboard adapters.

    Attributes:
        db_url: SQLAlchemy URL of the snapshot store.
        storage_key: Key under which the snapshot document is saved.
        cash_reserve_asset_id: Asset counted as the cash reserve.
        autosave_delay_seconds: Debounce delay before an edit is saved.
        portfolio_file: Optional backup file read by the CLI report.
    """

    db_url: str
    storage_key: str = DEFAULT_STORAGE_KEY
    cash_reserve_asset_id: str = DEFAULT_CASH_RESERVE_ASSET_ID
    autosave_delay_seconds: float = DEFAULT_AUTOSAVE_DELAY_SECONDS
    portfolio_file: Optional[Path] = None

    @classmethod
    def from_env(cls) -> "DashboardSettings":
        """Build settings from environment variables (and ``.env``).

        Returns:
            DashboardSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        db_url = os.getenv("DASHBOARD_DB_URL") or cls._default_db_url()
        raw_file = os.getenv("PORTFOLIO_FILE")
        return cls(
            db_url=db_url,
            storage_key=(
                os.getenv("DASHBOARD_STORAGE_KEY", "").strip()
                or DEFAULT_STORAGE_KEY
            ),
            cash_reserve_asset_id=(
                os.getenv("CASH_RESERVE_ASSET_ID", "").strip()
                or DEFAULT_CASH_RESERVE_ASSET_ID
            ),
            autosave_delay_seconds=cls._parse_delay(
                os.getenv("AUTOSAVE_DELAY_SECONDS"),
                logger=logger,
            ),
            portfolio_file=(
                cls._normalize_path(raw_file, logger=logger)
                if raw_file
                else None
            ),
        )

    @staticmethod
    def _default_db_url() -> str:
        """Return a SQLite URL under ``data/`` in the project root."""
        data_dir = get_project_root() / "data"
        data_dir.mkdir(parents=True, exist_ok=True)
        return f"sqlite:///{data_dir / 'dashboard.db'}"

    @staticmethod
    def _parse_delay(raw: str | None, logger) -> float:
        """Parse the autosave delay, falling back to the default.

        Args:
            raw: Raw environment value.
            logger: Logger used for warnings.

        Returns:
            float: Non-negative delay in seconds.
        """
        if not raw:
            return DEFAULT_AUTOSAVE_DELAY_SECONDS
        try:
            delay = float(raw)
        except ValueError:
            logger.warning(
                f"Invalid AUTOSAVE_DELAY_SECONDS '{raw}'. "
                f"Using {DEFAULT_AUTOSAVE_DELAY_SECONDS}."
            )
            return DEFAULT_AUTOSAVE_DELAY_SECONDS
        if delay < 0:
            logger.warning(
                f"Negative AUTOSAVE_DELAY_SECONDS '{raw}'. "
                f"Using {DEFAULT_AUTOSAVE_DELAY_SECONDS}."
            )
            return DEFAULT_AUTOSAVE_DELAY_SECONDS
        return delay

    @staticmethod
    def _normalize_path(raw_path: str, logger) -> Path:
        """Normalize a backup file path or ``file://`` URI.

        Args:
            raw_path: Raw file path string.
            logger: Logger used for warnings.

        Returns:
            Path: Resolved filesystem path.
        """
        parsed = urlparse(raw_path)
        if parsed.scheme == "file":
            raw_path = unquote(parsed.path)
        path = Path(raw_path).expanduser().resolve()
        if not path.exists():
            logger.warning(f"Portfolio file does not exist at {path}")
        return path


__all__ = ["DashboardSettings", "DEFAULT_STORAGE_KEY"]

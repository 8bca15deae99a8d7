"""Repository for Settings database operations."""

import logging
from sqlalchemy.orm import Session

from todaylist.models.settings import Settings
from todaylist.models.constants import DEFAULT_RESET_HOUR, MIN_RESET_HOUR, MAX_RESET_HOUR
from todaylist.database.models import SettingsDB

logger = logging.getLogger(__name__)


class SettingsRepository:
    """Repository for the single settings row.

    The row is created lazily with defaults on first read. If several rows
    exist (e.g. two devices each created one before syncing), the oldest is
    kept and the rest are deleted.
    """

    def __init__(self, db: Session):
        self.db = db

    def _get_or_create(self) -> SettingsDB:
        rows = self.db.query(SettingsDB).order_by(SettingsDB.id).all()
        if rows:
            if len(rows) > 1:
                self._remove_duplicates(rows[1:])
            return rows[0]

        row = SettingsDB(reset_hour=DEFAULT_RESET_HOUR)
        try:
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
            logger.debug("Created default settings")
            return row
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create settings: {type(e).__name__}: {str(e)}")
            raise

    def _remove_duplicates(self, duplicates) -> None:
        try:
            for row in duplicates:
                self.db.delete(row)
            self.db.commit()
            logger.info(f"Removed {len(duplicates)} duplicate settings row(s)")
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to remove duplicate settings: {type(e).__name__}: {str(e)}")
            raise

    def get(self) -> Settings:
        """Get current settings (creating defaults if missing)."""
        return self._get_or_create().to_pydantic()

    def get_reset_hour(self) -> int:
        """Get the configured reset hour (0-23)."""
        return self._get_or_create().reset_hour

    def update_reset_hour(self, reset_hour: int) -> Settings:
        """Update the reset hour.

        Raises:
            ValueError: If reset_hour is outside 0-23
        """
        if not MIN_RESET_HOUR <= reset_hour <= MAX_RESET_HOUR:
            raise ValueError(f"reset_hour must be between {MIN_RESET_HOUR} and {MAX_RESET_HOUR}, got {reset_hour}")

        row = self._get_or_create()
        row.reset_hour = reset_hour
        try:
            self.db.commit()
            self.db.refresh(row)
            logger.debug(f"Updated reset hour to {reset_hour}")
            return row.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update reset hour: {type(e).__name__}: {str(e)}")
            raise

"""Option service — site-wide key-value settings backed by SQLite."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from airplane_mode.database import get_session
from airplane_mode.models.site_option import SiteOption

logger = logging.getLogger(__name__)


class OptionService:
    """Satisfies ``OptionStore``: get / set / add / delete by key."""

    def __init__(self, session: Session | None = None):
        self._session = session

    @property
    def session(self) -> Session:
        if self._session is None:
            self._session = get_session()
        return self._session

    def get(self, key: str, default: Any = None) -> Any:
        row = self.session.get(SiteOption, key)
        if row is None:
            return default
        return row.value

    def set(self, key: str, value: Any) -> None:
        """Create or overwrite an option."""
        row = self.session.get(SiteOption, key)
        if row is None:
            self.session.add(SiteOption(key=key, value=value))
        else:
            row.value = value
        self.session.commit()
        logger.debug("Option %s updated", key)

    def add(self, key: str, value: Any) -> bool:
        """Create an option only if it does not exist yet.

        Returns True if the option was created.
        """
        if self.session.get(SiteOption, key) is not None:
            return False
        self.session.add(SiteOption(key=key, value=value))
        self.session.commit()
        logger.debug("Option %s added", key)
        return True

    def delete(self, key: str) -> bool:
        row = self.session.get(SiteOption, key)
        if row is None:
            return False
        self.session.delete(row)
        self.session.commit()
        logger.debug("Option %s deleted", key)
        return True

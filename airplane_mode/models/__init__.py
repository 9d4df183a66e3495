"""ORM models package — import all models so Base.metadata sees them."""

from airplane_mode.models.site_option import SiteOption

__all__ = ["SiteOption"]

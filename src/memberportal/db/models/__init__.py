"""ORM models; importing this package registers them with Base.metadata."""

from memberportal.db.models.portal_user import PortalUserRow

__all__ = ["PortalUserRow"]

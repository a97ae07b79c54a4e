from .organization import Organization
from .site import Site, SITE_DRAFT, SITE_PUBLISHED
from .theme import Theme
from .page import Page
from .navigation import NavigationItem
from .file import File
from .audit_log import AuditLog

__all__ = [
    "Organization",
    "Site",
    "SITE_DRAFT",
    "SITE_PUBLISHED",
    "Theme",
    "Page",
    "NavigationItem",
    "File",
    "AuditLog",
]

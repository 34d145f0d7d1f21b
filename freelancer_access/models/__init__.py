from .access_grant import AccessGrant
from .access_log import AccessLogEntry
from .access_schedule import AccessSchedule
from .access_template import AccessTemplate
from .content import Content, ContentStatus
from .content_terms import content_terms
from .restriction_settings import RestrictionSettings
from .term import TaxonomyObjectType, Term
from .user import Role, User
from .user_roles import user_roles

__all__ = [
    "AccessGrant",
    "AccessLogEntry",
    "AccessSchedule",
    "AccessTemplate",
    "Content",
    "ContentStatus",
    "content_terms",
    "RestrictionSettings",
    "TaxonomyObjectType",
    "Term",
    "Role",
    "User",
    "user_roles",
]

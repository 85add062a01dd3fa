from app.models.user import User
from app.models.station import Station
from app.models.platform import Platform
from app.models.license import License
from app.models.audit_log import AuditLog

__all__ = [
    "User",
    "Station",
    "Platform",
    "License",
    "AuditLog",
]

"""aws-sessions-switcher - switch between assumed AWS role sessions."""

__version__ = "1.0.0"

from .services.config_service import ConfigStore
from .services.session_service import SessionStore
from .services.assume_service import RoleAssumer

__all__ = ["ConfigStore", "SessionStore", "RoleAssumer"]

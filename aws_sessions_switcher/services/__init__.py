"""aws-sessions-switcher services package."""

from .config_service import ConfigStore
from .session_service import SessionStore
from .assume_service import RoleAssumer
from .cli_service import CLIService

__all__ = ["ConfigStore", "SessionStore", "RoleAssumer", "CLIService"]

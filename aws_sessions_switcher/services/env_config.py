"""Environment-aware configuration for aws-sessions-switcher."""

import os
from pathlib import Path
from typing import Optional
from loguru import logger


# Prefix of the credentials file section holding a project's long-lived keys
BASE_CREDENTIALS_PREFIX = 'aws-sessions-switcher-'

# Prefix that marks a section of the store file as a session record
SESSION_PREFIX = 'session-'

ACTIVE_PROFILE = 'default'
DEFAULT_SESSION_DURATION = '3600'
DEFAULT_REGION = 'us-east-1'
DEFAULT_CONFIG_FILENAME = 'sessions_switcher'
EXPIRATION_TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S'


class SwitcherConfig:
    """
    Resolves the file locations and defaults used by every service.

    Values come from the environment when set, otherwise from the
    ``~/.aws`` directory of the given home.
    """

    def __init__(self, home: Optional[str] = None, config_file: Optional[str] = None,
                 credentials_file: Optional[str] = None, region: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            home: Home directory (if None, uses Path.home())
            config_file: Explicit store file path (overrides the environment)
            credentials_file: Explicit AWS credentials file path (overrides the environment)
            region: Region used for STS calls (overrides the environment)
        """
        self.home = Path(home) if home else Path.home()
        self.aws_dir = self.home / '.aws'

        if config_file:
            self.config_file = Path(config_file)
        else:
            filename = os.environ.get('AWS_SESSIONS_SWITCHER_CONFIG_FILENAME') or DEFAULT_CONFIG_FILENAME
            self.config_file = self.aws_dir / filename

        if credentials_file:
            self.credentials_file = Path(credentials_file)
        elif os.environ.get('AWS_SHARED_CREDENTIALS_FILE'):
            self.credentials_file = Path(os.environ['AWS_SHARED_CREDENTIALS_FILE']).expanduser()
        else:
            self.credentials_file = self.aws_dir / 'credentials'

        self.region = region or os.environ.get('AWS_SESSIONS_SWITCHER_REGION') or DEFAULT_REGION

        logger.debug(f"Using store file {self.config_file} and credentials file {self.credentials_file}")

    @staticmethod
    def debug_enabled() -> bool:
        """Return True when the DEBUG environment variable is set."""
        return bool(os.environ.get('DEBUG'))

"""Access to the AWS shared credentials file.

Holds the single active ``default`` slot and the per-project base
credentials used to request temporary ones.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional
from loguru import logger
from .env_config import ACTIVE_PROFILE, BASE_CREDENTIALS_PREFIX
from .errors import ConfigurationMissingError, MalformedStoreError
from . import record_codec


@dataclass
class BaseCredentials:
    """Long-lived keys of the IAM user that assumes the project roles."""

    access_key_id: str
    secret_access_key: str


def base_profile_for_project(project_name: str) -> str:
    """Credentials file section holding a project's base credentials."""
    return f"{BASE_CREDENTIALS_PREFIX}{project_name}"


class CredentialsManager:
    """
    Manages the AWS credentials file.

    Only the ``default`` section is ever written; other sections are read
    and written back unchanged.
    """

    def __init__(self, credentials_file: str):
        """
        Initialize CredentialsManager.

        Args:
            credentials_file: Path of the AWS shared credentials file
        """
        self.credentials_file = Path(credentials_file)

    def load(self) -> Dict[str, Dict[str, str]]:
        """
        Read every section of the credentials file.

        Returns:
            Dict: Section name -> fields (empty if the file does not exist)

        Raises:
            MalformedStoreError: If the file cannot be parsed
        """
        if not self.credentials_file.exists():
            return {}
        try:
            return record_codec.decode(self.credentials_file.read_text(encoding='utf-8'))
        except (MalformedStoreError, UnicodeDecodeError) as e:
            raise MalformedStoreError(
                f"There was a problem reading or parsing your credentials file: {self.credentials_file}. {e}"
            ) from e

    def replace_section(self, section_name: str, fields: Mapping[str, str]) -> None:
        """
        Set or replace one section and rewrite the file.

        Args:
            section_name: Section to replace
            fields: New content of the section
        """
        sections = self.load()
        sections[section_name] = dict(fields)

        self.credentials_file.parent.mkdir(parents=True, exist_ok=True)
        self.credentials_file.write_text(record_codec.encode(sections), encoding='utf-8')
        logger.debug(f"Credentials updated: [{section_name}] in {self.credentials_file}")

    def get_active(self) -> Optional[Dict[str, str]]:
        """Return the fields of the ``default`` section, or None if absent."""
        return self.load().get(ACTIVE_PROFILE)

    def set_active(self, fields: Mapping[str, str]) -> None:
        """Overwrite the ``default`` section with the given credentials."""
        self.replace_section(ACTIVE_PROFILE, fields)

    def get_base_credentials(self, project_name: str) -> BaseCredentials:
        """
        Read the base credentials configured for a project.

        Args:
            project_name: Project whose ``aws-sessions-switcher-{project}`` section is read

        Returns:
            BaseCredentials: Access key id and secret access key

        Raises:
            ConfigurationMissingError: If the section or one of its keys is missing
        """
        profile_name = base_profile_for_project(project_name)
        profile = self.load().get(profile_name)
        if profile is None:
            raise ConfigurationMissingError(
                f"Credentials for profile '[{profile_name}]' is missing. "
                f"You must add this section to your AWS credentials file."
            )

        access_key_id = profile.get('aws_access_key_id')
        secret_access_key = profile.get('aws_secret_access_key')
        if not access_key_id or not secret_access_key:
            raise ConfigurationMissingError(f"Missing required credentials in profile '[{profile_name}]'")

        return BaseCredentials(access_key_id=access_key_id, secret_access_key=secret_access_key)

"""Record types stored in the switcher and credentials files."""

from dataclasses import dataclass
from typing import Dict, Mapping, Optional
from .env_config import DEFAULT_SESSION_DURATION, SESSION_PREFIX


def project_key(project_name: str, project_environment: str) -> str:
    """Section name of a project-environment record."""
    return f"{project_name}-{project_environment}"


def session_key(project_name: str, project_environment: str) -> str:
    """Section name of the session obtained for a project-environment."""
    return f"{SESSION_PREFIX}{project_key(project_name, project_environment)}"


@dataclass
class ProjectEnvironmentRecord:
    """One assumable role definition."""

    project_name: str
    project_environment: str
    role_arn: str
    role_name: str
    mfa_required: bool = False
    mfa_device_arn: Optional[str] = None
    mfa_device_session_duration: Optional[str] = None

    @property
    def key(self) -> str:
        return project_key(self.project_name, self.project_environment)

    @property
    def duration_seconds(self) -> int:
        return int(self.mfa_device_session_duration or DEFAULT_SESSION_DURATION)

    @classmethod
    def from_section(cls, fields: Mapping[str, str]) -> 'ProjectEnvironmentRecord':
        """
        Build a record from raw section fields.

        ``mfa_required`` is True only when stored as the exact string
        ``"true"``; ``"True"`` reads as False.
        """
        return cls(
            project_name=fields.get('project_name', ''),
            project_environment=fields.get('project_environment', ''),
            role_arn=fields.get('role_arn', ''),
            role_name=fields.get('role_name', ''),
            mfa_required=fields.get('mfa_required') == 'true',
            mfa_device_arn=fields.get('mfa_device_arn') or None,
            mfa_device_session_duration=fields.get('mfa_device_session_duration') or None,
        )

    def to_section(self) -> Dict[str, str]:
        fields = {
            'project_name': self.project_name,
            'project_environment': self.project_environment,
            'role_arn': self.role_arn,
            'role_name': self.role_name,
            'mfa_required': str(self.mfa_required).lower(),
        }
        if self.mfa_device_arn:
            fields['mfa_device_arn'] = self.mfa_device_arn
        if self.mfa_device_session_duration:
            fields['mfa_device_session_duration'] = self.mfa_device_session_duration
        return fields


@dataclass
class SessionRecord:
    """Temporary credentials obtained by one role assumption."""

    aws_access_key_id: str
    aws_secret_access_key: str
    aws_session_token: str
    expiration: str
    aws_security_token: Optional[str] = None

    def __post_init__(self):
        # Older tools read the token under its historical name
        if self.aws_security_token is None:
            self.aws_security_token = self.aws_session_token

    @classmethod
    def from_section(cls, fields: Mapping[str, str]) -> 'SessionRecord':
        return cls(
            aws_access_key_id=fields.get('aws_access_key_id', ''),
            aws_secret_access_key=fields.get('aws_secret_access_key', ''),
            aws_session_token=fields.get('aws_session_token', ''),
            expiration=fields.get('expiration', ''),
            aws_security_token=fields.get('aws_security_token'),
        )

    def to_section(self) -> Dict[str, str]:
        return {
            'aws_access_key_id': self.aws_access_key_id,
            'aws_secret_access_key': self.aws_secret_access_key,
            'aws_session_token': self.aws_session_token,
            'aws_security_token': self.aws_security_token,
            'expiration': self.expiration,
        }

    def same_credentials(self, fields: Mapping[str, str]) -> bool:
        """Compare access key, secret key and session token with raw fields."""
        return (
            fields.get('aws_access_key_id') == self.aws_access_key_id
            and fields.get('aws_secret_access_key') == self.aws_secret_access_key
            and fields.get('aws_session_token') == self.aws_session_token
        )

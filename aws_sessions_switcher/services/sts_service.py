"""Credential providers that exchange base credentials for temporary ones."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional
import boto3
from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger
from .errors import RemoteCallError
from .iam import BaseCredentials, CredentialsManager


@dataclass
class AssumedCredentials:
    """Temporary credentials returned by an assume-role call."""

    access_key_id: str
    secret_access_key: str
    session_token: str
    expiration: datetime


class CredentialProvider(ABC):
    """Anything able to assume a role and return temporary credentials."""

    @abstractmethod
    def assume_role(self, role_arn: str, session_name: str, duration_seconds: int,
                    mfa_serial: Optional[str] = None, mfa_token: Optional[str] = None) -> AssumedCredentials:
        """
        Assume a role.

        Raises:
            RemoteCallError: If the call fails or returns no credentials
        """


def credentials_from_response(response: Dict[str, Any]) -> AssumedCredentials:
    """
    Extract credentials from an STS ``AssumeRole`` response.

    Raises:
        RemoteCallError: If the response lacks any credential field
    """
    creds = (response or {}).get('Credentials') or {}
    missing = [name for name in ('AccessKeyId', 'SecretAccessKey', 'SessionToken', 'Expiration') if not creds.get(name)]
    if missing:
        raise RemoteCallError(f"Failed to obtain session credentials (missing: {', '.join(missing)})")

    expiration = creds['Expiration']
    if isinstance(expiration, str):
        expiration = datetime.fromisoformat(expiration.replace('Z', '+00:00'))

    return AssumedCredentials(
        access_key_id=creds['AccessKeyId'],
        secret_access_key=creds['SecretAccessKey'],
        session_token=creds['SessionToken'],
        expiration=expiration,
    )


class StsCredentialProvider(CredentialProvider):
    """Calls AWS STS with a project's base credentials."""

    def __init__(self, base_credentials: BaseCredentials, region: str, client=None):
        """
        Initialize the provider.

        Args:
            base_credentials: Long-lived keys used to sign the call
            region: STS region
            client: Pre-built STS client (for tests)
        """
        self.base_credentials = base_credentials
        self.region = region
        self._client = client

    @classmethod
    def for_project(cls, project_name: str, credentials: CredentialsManager, region: str) -> 'StsCredentialProvider':
        """Build a provider from the project's section of the credentials file."""
        return cls(credentials.get_base_credentials(project_name), region)

    @property
    def client(self):
        if self._client is None:
            self._client = boto3.client(
                'sts',
                region_name=self.region,
                aws_access_key_id=self.base_credentials.access_key_id,
                aws_secret_access_key=self.base_credentials.secret_access_key,
            )
        return self._client

    def assume_role(self, role_arn: str, session_name: str, duration_seconds: int,
                    mfa_serial: Optional[str] = None, mfa_token: Optional[str] = None) -> AssumedCredentials:
        params = {
            'RoleArn': role_arn,
            'RoleSessionName': session_name,
            'DurationSeconds': duration_seconds,
        }
        if mfa_serial and mfa_token:
            params['SerialNumber'] = mfa_serial
            params['TokenCode'] = mfa_token

        try:
            response = self.client.assume_role(**params)
        except (BotoCoreError, ClientError) as e:
            raise RemoteCallError(f"An error occurred while calling assume role: {e}") from e

        logger.debug(f"Response from STS service: AssumedRoleUser={response.get('AssumedRoleUser')}")
        return credentials_from_response(response)

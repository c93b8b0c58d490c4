"""Role assumption: from a configured role to an active session."""

from typing import Callable, Optional, Tuple
from loguru import logger
from .config_service import ConfigStore
from .errors import ConfigurationMissingError, LookupMissError, RemoteCallError
from .expiry import format_expiration
from .models import SessionRecord, session_key
from .prompter import Prompter, numbers_only
from .session_service import SessionStore
from .sts_service import CredentialProvider, StsCredentialProvider

ProviderFactory = Callable[[str], CredentialProvider]


class RoleAssumer:
    """
    Assumes a configured role and makes the resulting session active.

    The flow is linear: look up the record, ask for an MFA token when the
    record requires one, call the credential provider, then save the
    session and copy it into the ``default`` slot. Nothing is written when
    the provider fails.
    """

    def __init__(self, config_store: ConfigStore, session_store: SessionStore, prompter: Prompter,
                 provider_factory: Optional[ProviderFactory] = None):
        """
        Initialize the role assumer.

        Args:
            config_store: Project-environment records
            session_store: Session records and the active slot
            prompter: Used to ask for MFA tokens
            provider_factory: Builds a CredentialProvider for a project name
                (if None, STS with the project's base credentials)
        """
        self.config_store = config_store
        self.session_store = session_store
        self.prompter = prompter
        self.provider_factory = provider_factory or self._sts_provider

    def _sts_provider(self, project_name: str) -> CredentialProvider:
        config = self.session_store.config
        return StsCredentialProvider.for_project(project_name, self.session_store.credentials, config.region)

    def assume(self, project_name: str, project_environment: str,
               role_name: Optional[str] = None) -> Tuple[str, SessionRecord]:
        """
        Assume the role configured for a project-environment.

        Args:
            project_name: Project name
            project_environment: Environment name
            role_name: Expected role name (checked against the record when given)

        Returns:
            Tuple[str, SessionRecord]: Session key and the stored session

        Raises:
            LookupMissError: If the project-environment or role is not configured
            ConfigurationMissingError: If the base credentials or the MFA device ARN are missing
            RemoteCallError: If the provider fails or returns incomplete credentials
        """
        record = self.config_store.get(project_name, project_environment)
        if role_name is not None and record.role_name != role_name:
            raise LookupMissError(
                f"Role '{role_name}' is not configured for project '{project_name}' environment '{project_environment}'"
            )
        if record.mfa_required and not record.mfa_device_arn:
            raise ConfigurationMissingError(
                f"MFA is required for '{record.key}' but no mfa_device_arn is configured"
            )

        logger.info(
            f'Attempting to assume role: "{record.role_name}" using ARN: "{record.role_arn}" on project: {project_name}'
        )
        key = session_key(project_name, project_environment)
        provider = self.provider_factory(project_name)

        mfa_serial = None
        mfa_token = None
        if record.mfa_required:
            mfa_serial = record.mfa_device_arn
            mfa_token = self.prompter.ask_text(f"MFA TOKEN for device {record.mfa_device_arn}", numbers_only)

        creds = provider.assume_role(record.role_arn, key, record.duration_seconds, mfa_serial, mfa_token)
        if not creds or not (creds.access_key_id and creds.secret_access_key and creds.session_token and creds.expiration):
            raise RemoteCallError('Failed to obtain session credentials')

        session = SessionRecord(
            aws_access_key_id=creds.access_key_id,
            aws_secret_access_key=creds.secret_access_key,
            aws_session_token=creds.session_token,
            expiration=format_expiration(creds.expiration),
        )
        self.session_store.save(key, session)
        self.session_store.activate(key)

        logger.success(f"Assumed {record.role_name} for {project_name}/{project_environment}, session {key}")
        return key, session

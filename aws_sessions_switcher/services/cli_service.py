"""CLI Service tying the stores, prompter and role assumption together."""

from typing import List, Optional, Tuple
from loguru import logger
from .assume_service import ProviderFactory, RoleAssumer
from .collector import ConfigCollector
from .config_service import ConfigStore
from .env_config import SwitcherConfig
from .errors import LookupMissError, SwitcherError
from .expiry import remaining_time
from .iam import CredentialsManager, base_profile_for_project
from .models import ProjectEnvironmentRecord, SessionRecord
from .prompter import ClickPrompter, Prompter
from .session_service import SessionStore

PROGRAM_NAME = 'aws-sessions-switcher'


class CLIService:
    """
    Service class for the operations behind each CLI command.
    """

    def __init__(self, config: Optional[SwitcherConfig] = None, prompter: Optional[Prompter] = None,
                 provider_factory: Optional[ProviderFactory] = None):
        """
        Initialize CLI service.

        Args:
            config: Resolved paths (if None, resolved from the environment)
            prompter: Interactive prompter (if None, click prompts)
            provider_factory: Credential provider factory (if None, AWS STS)
        """
        self.config = config or SwitcherConfig()
        self.prompter = prompter or ClickPrompter()
        self.config_store = ConfigStore(self.config)
        self.credentials = CredentialsManager(self.config.credentials_file)
        self.session_store = SessionStore(self.config, self.credentials)
        self.role_assumer = RoleAssumer(self.config_store, self.session_store, self.prompter, provider_factory)

    def configure(self, check_file_existence: bool = True) -> ProjectEnvironmentRecord:
        """
        Collect a project definition and store it.

        Args:
            check_file_existence: Refuse to run when the store file already exists

        Returns:
            ProjectEnvironmentRecord: The stored record

        Raises:
            SwitcherError: If the file exists and check_file_existence is set
        """
        if check_file_existence and self.config_store.exists():
            raise SwitcherError(
                'File already exists. '
                f'Run `{PROGRAM_NAME} projects add` if you want to add a new project configuration. '
                f"Type '{PROGRAM_NAME} -h' to see all the available sub-commands"
            )

        record = ConfigCollector(self.prompter).collect()
        self.config_store.add(record)
        logger.info(
            f'Note: Make sure to put your security credentials under '
            f'"{base_profile_for_project(record.project_name)}" section of your AWS Credentials'
        )
        return record

    def project_add(self) -> ProjectEnvironmentRecord:
        self.config_store.require_file()
        return self.configure(check_file_existence=False)

    def project_delete(self, project_name: str, exact: bool = False) -> List[str]:
        """
        Delete a project after confirmation.

        Returns:
            List[str]: Removed section keys (empty if the user declined)
        """
        self.config_store.require_file()
        if not self.prompter.ask_confirm(f"Are you sure you want to delete project: [{project_name}]?", default=False):
            return []

        removed = self.config_store.delete_by_project_substring(project_name, exact=exact)
        if removed:
            logger.success(f"Deleted {', '.join(removed)}")
        else:
            logger.warning(f"No configuration matched project '{project_name}'")
        return removed

    def projects_list(self) -> List[str]:
        self.config_store.require_file()
        return self.config_store.list_projects()

    def environments_list(self, project_name: Optional[str] = None) -> List[str]:
        self.config_store.require_file()
        if project_name:
            return self.config_store.list_environments(project_name)
        return self.config_store.list_all_environments()

    def roles_list(self, project_name: str, project_environment: str) -> List[ProjectEnvironmentRecord]:
        """
        Roles configured for a project-environment.

        Raises:
            LookupMissError: If the project or environment is unknown
        """
        self.config_store.require_file()
        roles = self.config_store.list_roles(project_name, project_environment)
        if not roles:
            raise LookupMissError(f"No roles configured for project '{project_name}' environment '{project_environment}'")
        return roles

    def assumptions(self) -> List[Tuple[str, str]]:
        """Rows of ``project/env/role`` and the command that assumes it."""
        self.config_store.require_file()
        return [
            (
                f"{record.project_name}/{record.project_environment}/{record.role_name}",
                f"{PROGRAM_NAME} {record.project_name} {record.project_environment} {record.role_name}",
            )
            for record in self.config_store.load_all().values()
        ]

    def assume(self, project_name: str, project_environment: str, role_name: Optional[str] = None) -> Tuple[str, SessionRecord]:
        self.config_store.require_file()
        return self.role_assumer.assume(project_name, project_environment, role_name)

    def sessions_list(self, project_name: Optional[str] = None) -> List[Tuple[str, str, bool]]:
        """
        Live sessions with their remaining time.

        Returns:
            List of (session key, remaining time, is the active default slot)
        """
        self.config_store.require_file()
        sessions = self.session_store.list_active(project_name=project_name)
        return [
            (key, remaining_time(record.expiration), self.session_store.is_active_slot_equal_to(record))
            for key, record in sessions.items()
        ]

    def session_switch(self, session_name: Optional[str] = None) -> str:
        """
        Make a session the active one, asking the user to pick when no name is given.

        Returns:
            str: Activated session key

        Raises:
            LookupMissError: If there is no session to switch to
        """
        self.config_store.require_file()
        if session_name is None:
            choices = list(self.session_store.list_active())
            if not choices:
                raise LookupMissError(
                    f'No active sessions present. Run `{PROGRAM_NAME} -l` to see all possible role assumptions you can make'
                )
            session_name = self.prompter.ask_select('Select a session to switch to', choices)

        self.session_store.activate(session_name)
        logger.success(f"Switched to => {session_name}")
        return session_name

    def reset(self) -> bool:
        """
        Delete the store file after confirmation.

        Returns:
            bool: True if the file was deleted
        """
        self.config_store.require_file()
        confirmed = self.prompter.ask_confirm(
            f'This file => "{self.config_store.config_file}" will be deleted. '
            f'Are you sure you want to perform a reset?',
            default=False,
        )
        if confirmed:
            self.config_store.reset()
        return confirmed

"""Collects a project-environment definition from the user."""

from .env_config import DEFAULT_SESSION_DURATION
from .models import ProjectEnvironmentRecord
from .prompter import Prompter, generic_text_validator, not_empty, numbers_only, section_name_validator


class ConfigCollector:
    """Asks the questions needed to build a ProjectEnvironmentRecord."""

    def __init__(self, prompter: Prompter):
        self.prompter = prompter

    def collect(self) -> ProjectEnvironmentRecord:
        ask = self.prompter.ask_text
        project_name = ask("What's the project name?", section_name_validator).strip()
        project_environment = ask("Type the environment identifier?", section_name_validator).strip()
        role_arn = ask("Type the ARN of the AWS Role, you want to assume?").strip()
        role_name = ask("Give a name to this role:", generic_text_validator).strip()
        mfa_required = self.prompter.ask_confirm("Is MFA Required?", default=False)

        mfa_device_arn = None
        duration = None
        if mfa_required:
            mfa_device_arn = ask("Type the ARN of the MFA device?", not_empty).strip()
            duration = ask(
                f"Session duration in seconds? (Default: {DEFAULT_SESSION_DURATION})",
                numbers_only,
                default=DEFAULT_SESSION_DURATION,
            )

        return ProjectEnvironmentRecord(
            project_name=project_name,
            project_environment=project_environment,
            role_arn=role_arn,
            role_name=role_name,
            mfa_required=mfa_required,
            mfa_device_arn=mfa_device_arn,
            mfa_device_session_duration=duration,
        )

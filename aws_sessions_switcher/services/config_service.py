"""Store of project-environment records.

Project and session records share one file. ``SwitcherFile`` is the only
place that tells them apart (by the ``session-`` section prefix) and hands
the rest of the code two separate collections.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional
from loguru import logger
from .env_config import SESSION_PREFIX, SwitcherConfig
from .errors import ConfigurationMissingError, LookupMissError, MalformedStoreError
from .models import ProjectEnvironmentRecord, project_key
from . import record_codec


@dataclass
class StoreContents:
    """Raw sections of the store file, split into projects and sessions."""

    projects: Dict[str, Dict[str, str]] = field(default_factory=dict)
    sessions: Dict[str, Dict[str, str]] = field(default_factory=dict)

    def sections(self) -> Dict[str, Dict[str, str]]:
        merged = dict(self.projects)
        merged.update(self.sessions)
        return merged


class SwitcherFile:
    """Reads and writes the store file holding project and session records."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def ensure_exists(self) -> None:
        """Create an empty store file (and its directory) if missing."""
        if not self.path.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text('')
            logger.debug(f"Created empty store file {self.path}")

    def load(self) -> StoreContents:
        """
        Read and partition the store file, creating it if absent.

        Raises:
            MalformedStoreError: If the file cannot be parsed
        """
        self.ensure_exists()
        try:
            sections = record_codec.decode(self.path.read_text(encoding='utf-8'))
        except (MalformedStoreError, UnicodeDecodeError) as e:
            raise MalformedStoreError(
                f"There was a problem reading or parsing your config file: {self.path}. {e}"
            ) from e

        contents = StoreContents()
        for name, fields in sections.items():
            if name.startswith(SESSION_PREFIX):
                contents.sessions[name] = fields
            else:
                contents.projects[name] = fields
        return contents

    def save(self, contents: StoreContents) -> None:
        """Rewrite the whole store file from the given contents."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(record_codec.encode(contents.sections()), encoding='utf-8')
        logger.debug(f"Wrote {len(contents.projects)} project(s) and {len(contents.sessions)} session(s) to {self.path}")

    def delete(self) -> None:
        self.path.unlink()


class ConfigStore:
    """
    Service class for project-environment records.

    Every operation reloads the file; nothing is cached between calls.
    Records are keyed by ``{project}-{environment}``, so one role per
    project-environment can be stored.
    """

    def __init__(self, config: Optional[SwitcherConfig] = None):
        """
        Initialize configuration store.

        Args:
            config: Resolved paths (if None, resolved from the environment)
        """
        self.config = config or SwitcherConfig()
        self.store_file = SwitcherFile(self.config.config_file)

    @property
    def config_file(self) -> Path:
        return self.store_file.path

    def exists(self) -> bool:
        return self.store_file.exists()

    def require_file(self) -> None:
        """
        Fail when the store file has not been created yet.

        Raises:
            ConfigurationMissingError: If the file does not exist
        """
        if not self.exists():
            raise ConfigurationMissingError(
                f'Could not locate configuration file at "{self.config_file}". '
                "Run `aws-sessions-switcher configure` to create one"
            )

    def load_all(self) -> Dict[str, ProjectEnvironmentRecord]:
        """
        Load every project-environment record.

        Returns:
            Dict: Section key -> record, in file order
        """
        contents = self.store_file.load()
        return {
            key: ProjectEnvironmentRecord.from_section(fields)
            for key, fields in contents.projects.items()
        }

    def get(self, project_name: str, project_environment: str) -> ProjectEnvironmentRecord:
        """
        Look up the record of a project-environment.

        Raises:
            LookupMissError: If no record exists for the pair
        """
        key = project_key(project_name, project_environment)
        record = self.load_all().get(key)
        if record is None:
            raise LookupMissError(f"No configuration found for project '{project_name}' environment '{project_environment}'")
        return record

    def upsert(self, key: str, record: ProjectEnvironmentRecord) -> None:
        """
        Set or replace one record and rewrite the store file.

        Args:
            key: Section key (normally ``record.key``)
            record: Record to store
        """
        contents = self.store_file.load()
        contents.projects[key] = record.to_section()
        self.store_file.save(contents)
        logger.debug(f"Config updated: [{key}] role={record.role_name}")

    def add(self, record: ProjectEnvironmentRecord) -> str:
        """Store a record under its own key and return the key."""
        self.upsert(record.key, record)
        return record.key

    def delete_by_project_substring(self, project_name: str, exact: bool = False) -> List[str]:
        """
        Delete the records of a project.

        By default every record whose key contains ``project_name`` is
        removed, so deleting ``foo`` also removes ``foobar-dev``. With
        ``exact=True`` only records whose ``project_name`` field equals the
        name are removed.

        Returns:
            List[str]: Keys that were removed
        """
        contents = self.store_file.load()
        if exact:
            removed = [key for key, fields in contents.projects.items() if fields.get('project_name') == project_name]
        else:
            removed = [key for key in contents.projects if project_name in key]

        for key in removed:
            del contents.projects[key]
        self.store_file.save(contents)

        logger.debug(f"Deleted project sections: {removed}")
        return removed

    def list_projects(self) -> List[str]:
        """Distinct project names in file order."""
        projects: List[str] = []
        for record in self.load_all().values():
            if record.project_name and record.project_name not in projects:
                projects.append(record.project_name)
        return projects

    def list_environments(self, project_name: str) -> List[str]:
        """Environments configured for one project."""
        environments: List[str] = []
        for record in self.load_all().values():
            if record.project_name == project_name and record.project_environment not in environments:
                environments.append(record.project_environment)
        return environments

    def list_all_environments(self, with_project_prefix: bool = True) -> List[str]:
        """Every environment, as ``project-environment`` unless the prefix is disabled."""
        environments = []
        for record in self.load_all().values():
            prefix = f"{record.project_name}-" if with_project_prefix else ''
            environments.append(f"{prefix}{record.project_environment}")
        return environments

    def list_roles(self, project_name: str, project_environment: str) -> List[ProjectEnvironmentRecord]:
        """Records (one per role) configured for a project-environment."""
        return [
            record for record in self.load_all().values()
            if record.project_name == project_name and record.project_environment == project_environment
        ]

    def reset(self) -> None:
        """
        Delete the store file.

        Raises:
            ConfigurationMissingError: If the file does not exist
        """
        if not self.exists():
            raise ConfigurationMissingError(f'The file "{self.config_file}" does not exist')
        self.store_file.delete()
        logger.info(f'The file "{self.config_file}" is deleted')

"""Session Service for temporary credentials obtained by role assumptions."""

from datetime import datetime
from typing import Dict, Optional
from loguru import logger
from .config_service import SwitcherFile
from .env_config import SwitcherConfig
from .errors import LookupMissError, MalformedStoreError
from .expiry import is_expired
from .iam import CredentialsManager
from .models import SessionRecord, session_key


class SessionStore:
    """
    Service class for session records.

    Sessions live in the store file next to the project records. Listing
    them prunes expired sessions from disk.
    """

    def __init__(self, config: Optional[SwitcherConfig] = None,
                 credentials: Optional[CredentialsManager] = None):
        """
        Initialize session store.

        Args:
            config: Resolved paths (if None, resolved from the environment)
            credentials: Credentials file manager (if None, built from config)
        """
        self.config = config or SwitcherConfig()
        self.store_file = SwitcherFile(self.config.config_file)
        self.credentials = credentials or CredentialsManager(self.config.credentials_file)

    def list_active(self, project_name: Optional[str] = None,
                    now: Optional[datetime] = None) -> Dict[str, SessionRecord]:
        """
        List live sessions, deleting expired ones from the store file.

        The file is only rewritten when at least one session expired.

        Args:
            project_name: Only return sessions of this project's configured
                environments (sessions of a deleted project are not matched)
            now: Reference time (defaults to the current local time)

        Returns:
            Dict: Session key -> record, in file order
        """
        contents = self.store_file.load()

        live: Dict[str, SessionRecord] = {}
        expired = []
        for key, fields in contents.sessions.items():
            if is_expired(fields.get('expiration'), now):
                expired.append(key)
            else:
                live[key] = SessionRecord.from_section(fields)

        if expired:
            for key in expired:
                del contents.sessions[key]
            self.store_file.save(contents)
            logger.debug(f"Removed expired sessions: {expired}")

        if project_name:
            wanted = {
                session_key(fields.get('project_name', ''), fields.get('project_environment', ''))
                for fields in contents.projects.values()
                if fields.get('project_name') == project_name
            }
            live = {key: record for key, record in live.items() if key in wanted}
        return live

    def save(self, key: str, record: SessionRecord) -> None:
        """Insert or fully replace one session and persist it."""
        contents = self.store_file.load()
        contents.sessions[key] = record.to_section()
        self.store_file.save(contents)
        logger.debug(f"Session saved: [{key}] expires {record.expiration}")

    def activate(self, key: str, now: Optional[datetime] = None) -> SessionRecord:
        """
        Copy a live session into the ``default`` credentials slot.

        Args:
            key: Session key, e.g. ``session-acme-prod``
            now: Reference time used for pruning

        Returns:
            SessionRecord: The activated session

        Raises:
            LookupMissError: If the session does not exist or has expired
        """
        if not key:
            raise LookupMissError("No session name provided")

        record = self.list_active(now=now).get(key)
        if record is None:
            raise LookupMissError(f"Session {key} unavailable")

        self.credentials.set_active(record.to_section())
        logger.debug(f"Default credentials now point to {key}")
        return record

    def is_active_slot_equal_to(self, record: SessionRecord) -> bool:
        """Check whether the ``default`` slot holds this session's credentials."""
        try:
            active = self.credentials.get_active()
        except (MalformedStoreError, OSError) as e:
            logger.debug(f"Could not read the active credentials: {e}")
            return False
        if not active:
            return False
        return record.same_credentials(active)

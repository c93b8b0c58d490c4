"""Error types raised by the aws-sessions-switcher services."""


class SwitcherError(ValueError):
    """Base class for every error the services surface to the CLI."""


class ConfigurationMissingError(SwitcherError):
    """A file or section the operation needs does not exist."""


class MalformedStoreError(SwitcherError):
    """The store file could not be parsed."""


class LookupMissError(SwitcherError):
    """A project, environment, role or session key was not found."""


class RemoteCallError(SwitcherError):
    """The remote assume-role call failed or returned unusable data."""

"""Exceptions raised while turning a secret into an env file."""
from pathlib import Path
from typing import Optional, Union


class SecretEnvError(Exception):
    """Base class for all secretenv failures."""
    pass


class FetchError(SecretEnvError):
    """The secret store call failed or returned no string payload."""

    def __init__(self, message: str, secret_id: Optional[str] = None):
        super().__init__(message)
        self.secret_id = secret_id


class InvalidSecretFormatError(SecretEnvError):
    """The payload parsed as JSON but its top-level value is not an object."""
    pass


class SerializationError(SecretEnvError):
    """A compound JSON value could not be re-serialized to a single line."""
    pass


class _PathError(SecretEnvError):
    def __init__(self, message: str, path: Union[str, Path]):
        super().__init__(f"{message}: {path}")
        self.path = Path(path)


class DirectoryCreationError(_PathError):
    """The output directory (or one of its ancestors) could not be created."""
    pass


class WriteError(_PathError):
    """The env file could not be written."""
    pass


class EnvFilePermissionError(_PathError):
    """The env file was written but could not be restricted to its owner."""
    pass

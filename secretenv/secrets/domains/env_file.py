"""Render secret payloads as env files and write them with owner-only access."""
import json
import logging
import math
import os
import tempfile
from pathlib import Path
from typing import Any, Union

from .errors import (
    DirectoryCreationError,
    EnvFilePermissionError,
    InvalidSecretFormatError,
    SerializationError,
    WriteError,
)

logger = logging.getLogger(__name__)

# Key used when the secret is a plain string rather than a JSON object
OPAQUE_VALUE_KEY = "SECRET_VALUE"

ENV_FILE_MODE = 0o600

_JSON_TYPE_NAMES = {
    list: "array",
    str: "string",
    bool: "boolean",
    int: "number",
    float: "number",
    type(None): "null",
}


def _reject_constant(name: str) -> None:
    # json accepts NaN/Infinity by default; they are not JSON.
    raise ValueError(f"{name} is not a valid JSON value")


def _parse_float(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        raise ValueError(f"{text} is out of range for a JSON number")
    return value


def env_key(key: str) -> str:
    """Normalize a JSON key into an environment variable name."""
    return key.upper().replace("-", "_").replace(" ", "_")


def env_value(value: Any) -> str:
    """
    Stringify a JSON value for the right-hand side of KEY=VALUE.

    Strings are written verbatim, null becomes empty, booleans are lowercase
    and arrays/objects are re-serialized as compact single-line JSON.

    Raises:
        SerializationError: If a compound value cannot be serialized
    """
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)

    try:
        return json.dumps(
            value,
            separators=(",", ":"),
            sort_keys=True,
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Failed to serialize complex JSON value: {e}") from e


def json_to_env_format(data: Any) -> str:
    """
    Convert a parsed JSON object into sorted KEY=VALUE lines.

    Args:
        data: Parsed JSON value; must be an object

    Returns:
        Env file text with a trailing newline

    Raises:
        InvalidSecretFormatError: If data is not a JSON object
    """
    if not isinstance(data, dict):
        json_type = _JSON_TYPE_NAMES.get(type(data), type(data).__name__)
        raise InvalidSecretFormatError(
            f"Secret value must be a JSON object with key-value pairs, got {json_type}"
        )

    lines = [f"{env_key(key)}={env_value(value)}" for key, value in data.items()]
    lines.sort()
    return "\n".join(lines) + "\n"


def render_env(payload: str) -> str:
    """
    Render a secret payload as env file text.

    A JSON object becomes one line per key. Anything that is not JSON is
    written as a single SECRET_VALUE line. JSON that is not an object
    (arrays, scalars, null) is rejected.

    Raises:
        InvalidSecretFormatError: If the payload is JSON but not an object
        SerializationError: If a nested value cannot be re-serialized
    """
    try:
        data = json.loads(payload, parse_float=_parse_float, parse_constant=_reject_constant)
        # \uD800-style escapes decode to unpaired surrogates, which are not text.
        # UnicodeEncodeError is a ValueError, so such payloads stay opaque.
        json.dumps(data, ensure_ascii=False).encode("utf-8")
    except (ValueError, RecursionError):
        logger.debug(f"Secret is not JSON, writing it as {OPAQUE_VALUE_KEY}")
        return f"{OPAQUE_VALUE_KEY}={payload}\n"

    return json_to_env_format(data)


def _restrict_permissions(file_path: Path, destination: Path) -> None:
    if os.name != "posix":
        logger.debug("Skipping chmod: file permission bits not supported on this platform")
        return

    try:
        os.chmod(file_path, ENV_FILE_MODE)
    except OSError as e:
        raise EnvFilePermissionError("Failed to set permissions on environment file", destination) from e


def _discard(file_path: Path) -> None:
    try:
        file_path.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Failed to remove temporary file {file_path}: {e}")


def write_env_file(payload: str, destination: Union[str, Path]) -> None:
    """
    Write a secret payload to destination as an env file.

    The parent directory is created if needed. Content goes to a temporary
    file next to the destination which is chmod'ed to 0600 and then renamed
    into place, so the destination is either fully written or untouched.

    Args:
        payload: Secret string as returned by the store
        destination: Path of the env file to create or overwrite

    Raises:
        DirectoryCreationError: If the parent directory cannot be created
        InvalidSecretFormatError: If the payload is JSON but not an object
        SerializationError: If a nested value cannot be re-serialized
        WriteError: If the file cannot be written
        EnvFilePermissionError: If the file mode cannot be restricted
    """
    destination = Path(destination)
    output_dir = destination.parent

    logger.info(f"Creating output directory: {output_dir}")
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DirectoryCreationError("Failed to create output directory", output_dir) from e

    content = render_env(payload)

    try:
        fd, tmp_name = tempfile.mkstemp(dir=output_dir, prefix=f".{destination.name}.", suffix=".tmp")
    except OSError as e:
        raise WriteError("Failed to write environment file", destination) from e

    tmp_path = Path(tmp_name)
    replaced = False
    try:
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
        except (OSError, UnicodeEncodeError) as e:
            raise WriteError("Failed to write environment file", destination) from e

        _restrict_permissions(tmp_path, destination)

        try:
            os.replace(tmp_path, destination)
        except OSError as e:
            raise WriteError("Failed to write environment file", destination) from e
        replaced = True
    finally:
        if not replaced:
            _discard(tmp_path)

    logger.debug(f"Wrote {len(content.splitlines())} line(s) to {destination}")

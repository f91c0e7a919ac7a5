"""Workflow for turning a stored secret into an env file."""
import logging
from pathlib import Path

from ..domains.arn import extract_stem
from ..domains.aws_client import SecretStore
from ..domains.env_file import write_env_file
from ..domains.errors import FetchError
from ..domains.models import EnvFileRequest, EnvFileResult

logger = logging.getLogger(__name__)

ENV_FILE_SUFFIX = ".env"


class SecretEnvService:
    """Fetches secrets from a store and writes them out as env files."""

    def __init__(self, client: SecretStore):
        self.client = client

    def fetch_secret(self, secret_id: str) -> str:
        """
        Fetch a secret's string value from the store.

        Raises:
            FetchError: If the store call fails for any reason
        """
        logger.info(f"Fetching secret: {secret_id}")
        try:
            return self.client.get_secret(secret_id)
        except FetchError:
            raise
        except Exception as e:
            raise FetchError(f"Failed to fetch secret {secret_id}: {e}", secret_id) from e

    def create_env_file(self, request: EnvFileRequest) -> EnvFileResult:
        """
        Fetch the requested secret and write it to <output_dir>/<stem>.env.

        The stem is request.file_name when given, otherwise it is derived
        from the secret ARN.

        Args:
            request: What to fetch and where to write it

        Returns:
            EnvFileResult with the path that was written

        Raises:
            SecretEnvError: Any fetch, format or filesystem failure
        """
        secret_value = self.fetch_secret(request.secret_id)

        stem = request.file_name or extract_stem(request.secret_id)
        env_file_path = Path(request.output_dir) / f"{stem}{ENV_FILE_SUFFIX}"

        write_env_file(secret_value, env_file_path)
        logger.info(f"Environment file created: {env_file_path}")

        return EnvFileResult(path=env_file_path, secret_id=request.secret_id)

"""AWS Secrets Manager client wrapper."""
import logging
from typing import Optional, Protocol

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .errors import FetchError

logger = logging.getLogger(__name__)

DEFAULT_REGION = "us-west-2"


class SecretStore(Protocol):
    """Anything that can return the string contents of a secret."""

    def get_secret(self, secret_id: str) -> str:
        ...


class AWSSecretClient:
    """Wrapper around the boto3 Secrets Manager client."""

    def __init__(self, region: str = DEFAULT_REGION, profile: Optional[str] = None):
        self.region = region
        self.profile = profile
        self._client = None

    @property
    def client(self):
        """Lazy-initialize client."""
        if self._client is None:
            session = boto3.session.Session(profile_name=self.profile, region_name=self.region)
            self._client = session.client("secretsmanager")
            logger.debug(f"Created secretsmanager client for region {self.region}")
        return self._client

    def get_secret(self, secret_id: str) -> str:
        """
        Fetch the string value of a secret.

        Args:
            secret_id: Secret ARN or name

        Returns:
            The secret's SecretString

        Raises:
            FetchError: If the call fails or the secret has no string value
        """
        try:
            response = self.client.get_secret_value(SecretId=secret_id)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "Unknown")
            raise FetchError(f"Failed to fetch secret {secret_id} from AWS ({code}): {e}", secret_id) from e
        except BotoCoreError as e:
            raise FetchError(f"Failed to fetch secret {secret_id} from AWS: {e}", secret_id) from e

        secret_string = response.get("SecretString")
        if secret_string is None:
            raise FetchError(f"Secret {secret_id} does not contain a string value", secret_id)
        return secret_string

"""Tests for the secret-to-env-file workflow using a fake secret store."""
import os
import stat
from pathlib import Path

import pytest

from secretenv.secrets.domains.errors import FetchError, InvalidSecretFormatError
from secretenv.secrets.domains.models import EnvFileRequest, EnvFileResult
from secretenv.secrets.workflows.secret_operations import SecretEnvService

SECRET_ARN = "arn:aws:secretsmanager:us-west-2:123456789012:secret:MySecret-AbCdEf"


class FakeSecretStore:
    """In-memory secret store."""

    def __init__(self, secrets=None, error=None):
        self.secrets = secrets or {}
        self.error = error
        self.calls = []

    def get_secret(self, secret_id):
        self.calls.append(secret_id)
        if self.error is not None:
            raise self.error
        return self.secrets[secret_id]


class TestSecretEnvService:
    """Test suite for SecretEnvService."""

    def test_creates_env_file_named_after_arn(self, tmp_path):
        """Test the file stem is derived from the ARN by default."""
        store = FakeSecretStore({SECRET_ARN: '{"port": 8080, "debug": true, "timeout": null}'})
        service = SecretEnvService(store)

        result = service.create_env_file(EnvFileRequest(secret_id=SECRET_ARN, output_dir=str(tmp_path)))

        assert result == EnvFileResult(path=tmp_path / "MySecret.env", secret_id=SECRET_ARN)
        assert result.path.read_text() == "DEBUG=true\nPORT=8080\nTIMEOUT=\n"
        assert store.calls == [SECRET_ARN]

    def test_explicit_file_name(self, tmp_path):
        """Test file_name overrides the derived stem."""
        service = SecretEnvService(FakeSecretStore({SECRET_ARN: "hunter2"}))

        result = service.create_env_file(
            EnvFileRequest(secret_id=SECRET_ARN, output_dir=str(tmp_path), file_name="app")
        )

        assert result.path == tmp_path / "app.env"
        assert result.path.read_text() == "SECRET_VALUE=hunter2\n"

    def test_creates_output_dir(self, tmp_path):
        """Test a missing output directory is created."""
        output_dir = tmp_path / "run" / "secrets"
        service = SecretEnvService(FakeSecretStore({SECRET_ARN: '{"a": 1}'}))

        result = service.create_env_file(EnvFileRequest(secret_id=SECRET_ARN, output_dir=str(output_dir)))

        assert result.path.parent == output_dir
        assert result.path.exists()

    @pytest.mark.skipif(os.name != "posix", reason="file permission bits are POSIX only")
    def test_file_is_owner_only(self, tmp_path):
        """Test the written file is mode 0600."""
        service = SecretEnvService(FakeSecretStore({SECRET_ARN: '{"a": 1}'}))

        result = service.create_env_file(EnvFileRequest(secret_id=SECRET_ARN, output_dir=str(tmp_path)))

        assert stat.S_IMODE(result.path.stat().st_mode) == 0o600

    def test_fetch_error_propagates(self, tmp_path):
        """Test a FetchError from the store is raised unchanged and nothing is written."""
        error = FetchError("access denied", SECRET_ARN)
        service = SecretEnvService(FakeSecretStore(error=error))

        with pytest.raises(FetchError) as exc_info:
            service.create_env_file(EnvFileRequest(secret_id=SECRET_ARN, output_dir=str(tmp_path)))

        assert exc_info.value is error
        assert list(tmp_path.iterdir()) == []

    def test_unexpected_store_error_wrapped(self):
        """Test other store exceptions are wrapped in FetchError."""
        service = SecretEnvService(FakeSecretStore(error=TimeoutError("timed out")))

        with pytest.raises(FetchError) as exc_info:
            service.fetch_secret(SECRET_ARN)

        assert exc_info.value.secret_id == SECRET_ARN
        assert isinstance(exc_info.value.__cause__, TimeoutError)

    def test_invalid_format_propagates(self, tmp_path):
        """Test a non-object JSON secret fails the whole request."""
        service = SecretEnvService(FakeSecretStore({SECRET_ARN: "[1, 2, 3]"}))

        with pytest.raises(InvalidSecretFormatError):
            service.create_env_file(EnvFileRequest(secret_id=SECRET_ARN, output_dir=str(tmp_path)))

        assert not (tmp_path / "MySecret.env").exists()

    def test_request_is_immutable(self):
        """Test EnvFileRequest cannot be modified after creation."""
        request = EnvFileRequest(secret_id=SECRET_ARN, output_dir="/var/run")

        with pytest.raises(AttributeError):
            request.output_dir = "/tmp"

    def test_result_path_is_path(self, tmp_path):
        """Test the result path is a pathlib.Path."""
        service = SecretEnvService(FakeSecretStore({SECRET_ARN: "x"}))

        result = service.create_env_file(EnvFileRequest(secret_id=SECRET_ARN, output_dir=str(tmp_path)))

        assert isinstance(result.path, Path)

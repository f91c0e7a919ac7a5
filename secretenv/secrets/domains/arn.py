"""Helpers for AWS Secrets Manager ARNs."""

DEFAULT_STEM = "secret"

# arn:aws:secretsmanager:<region>:<account>:secret:<name>-<suffix>
_NAME_FIELD = 6


def extract_stem(identifier: str) -> str:
    """
    Derive an env file stem from a secret ARN.

    The name field is cut at its first hyphen to drop the random suffix AWS
    appends, then any path prefix is discarded.

    Examples:
        arn:aws:secretsmanager:us-west-2:123456789012:secret:MySecret-AbCdEf -> MySecret
        arn:aws:secretsmanager:us-west-2:123456789012:secret:/my/path/db-AbCdEf -> db

    Returns:
        The stem, or "secret" if the identifier has no name field
    """
    fields = identifier.split(":")
    if len(fields) <= _NAME_FIELD:
        return DEFAULT_STEM

    # NOTE: names that contain a hyphen themselves are truncated too
    # (my-app-AbCdEf -> my).
    name = fields[_NAME_FIELD].split("-")[0]
    return name.split("/")[-1]

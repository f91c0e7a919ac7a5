"""Input validation for CLI arguments."""
import sys


def validate_secret_id(secret_id: str) -> None:
    """
    Validate the secret identifier passed on the command line.

    Accepts a full ARN or a plain secret name; only empty values and values
    containing whitespace are rejected.

    Raises:
        SystemExit with code 2 if validation fails
    """
    if not secret_id:
        print("Error: Secret identifier cannot be empty", file=sys.stderr)
        sys.exit(2)

    if any(c.isspace() for c in secret_id):
        print(f"Error: Invalid secret identifier '{secret_id}'", file=sys.stderr)
        print("\nSecret identifiers cannot contain whitespace.", file=sys.stderr)
        print("\nExample:", file=sys.stderr)
        print("  arn:aws:secretsmanager:us-west-2:123456789012:secret:MySecret-AbCdEf", file=sys.stderr)
        sys.exit(2)


def validate_file_name(name: str) -> None:
    """
    Validate an explicit env file stem.

    The stem must stay inside the output directory, so path separators and
    the special names '.' and '..' are rejected.

    Raises:
        SystemExit with code 2 if validation fails
    """
    if not name:
        print("Error: File name cannot be empty", file=sys.stderr)
        sys.exit(2)

    if "/" in name or "\\" in name or name in (".", ".."):
        print(f"Error: Invalid file name '{name}'", file=sys.stderr)
        print("\nThe name is used as <output-dir>/<name>.env and must not contain path separators.", file=sys.stderr)
        sys.exit(2)

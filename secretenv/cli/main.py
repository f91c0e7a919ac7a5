"""CLI entrypoints for secretenv."""
import os
import sys
import argparse
import logging
from pathlib import Path

from secretenv.secrets.domains.aws_client import AWSSecretClient, DEFAULT_REGION
from secretenv.secrets.domains.config_loader import (
    CONFIG_PATH_PREFERENCE,
    default_config_path,
    load_optional_config,
)
from secretenv.secrets.domains.models import EnvFileRequest
from secretenv.secrets.domains.preferences import clear_preference, get_preference, set_preference
from secretenv.secrets.workflows.secret_operations import SecretEnvService

from .validators import validate_file_name, validate_secret_id

VERSION = "0.1.0"

DEFAULT_OUTPUT_DIR = "/var/run"

# Configure logging to stderr
logging.basicConfig(
    level=logging.WARNING,
    format="%(message)s",
    stream=sys.stderr
)
logger = logging.getLogger(__name__)


def cmd_write(args):
    """Fetch a secret and write it as an env file."""
    validate_secret_id(args.secret_id)
    if args.name is not None:
        validate_file_name(args.name)

    config = load_optional_config()
    aws_config = config.get("aws", {})
    output_config = config.get("output", {})

    # Command line wins, then AWS_REGION, then the config file
    region = args.region or os.getenv("AWS_REGION") or aws_config.get("region") or DEFAULT_REGION
    profile = args.profile or aws_config.get("profile")
    output_dir = args.output_dir or output_config.get("dir") or DEFAULT_OUTPUT_DIR
    logger.debug(f"Using region={region} profile={profile} output_dir={output_dir}")

    service = SecretEnvService(AWSSecretClient(region=region, profile=profile))
    request = EnvFileRequest(
        secret_id=args.secret_id,
        output_dir=output_dir,
        file_name=args.name,
    )

    print(f"Fetching secret: {args.secret_id}")
    result = service.create_env_file(request)
    print(f"Environment file created: {result.path}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="secretenv",
        description="Fetch an AWS Secrets Manager secret and write it as an environment file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
JSON object secrets are written as one KEY=VALUE line per key (keys
uppercased, '-' and ' ' replaced by '_', lines sorted). Any other string is
written as SECRET_VALUE=<secret>. The file is created with mode 0600.

Exit codes:
  0 - Success
  1 - Runtime error (authentication, network, invalid secret, filesystem, etc.)
  2 - Usage error (invalid arguments)

Environment variables:
  AWS_REGION - Region used when --region is not given (overrides config file)

Configuration:
  Default location: ~/.config/secretenv/config.yml
  Custom path: Set with 'secretenv-config set-path <path>'
        """
    )
    parser.add_argument(
        "secret_id",
        help="The ARN (or name) of the AWS secret to fetch"
    )
    parser.add_argument(
        "-o", "--output-dir",
        help=f"Directory to write the env file to (default: config output.dir or {DEFAULT_OUTPUT_DIR})"
    )
    parser.add_argument(
        "-n", "--name",
        help="Custom name for the env file, without extension (default: derived from the ARN)"
    )
    parser.add_argument(
        "-r", "--region",
        help=f"AWS region (default: AWS_REGION, config aws.region, or {DEFAULT_REGION})"
    )
    parser.add_argument(
        "-p", "--profile",
        help="AWS profile to use (default: config aws.profile or the default credential chain)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log progress to stderr"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"secretenv {VERSION}"
    )
    return parser


def main(argv=None):
    """Main CLI entrypoint.

    Exit codes:
        0 - Success
        1 - Runtime errors (fetch, invalid secret format, filesystem, etc.)
        2 - Usage errors (invalid arguments)
    """
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.INFO)

    try:
        cmd_write(args)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def cmd_config_set_path(args):
    """Set config file path preference."""
    config_path = Path(args.path).resolve()

    if not config_path.exists():
        print(f"Error: Config file does not exist: {config_path}", file=sys.stderr)
        sys.exit(1)

    if not config_path.is_file():
        print(f"Error: Path is not a file: {config_path}", file=sys.stderr)
        sys.exit(1)

    set_preference(CONFIG_PATH_PREFERENCE, str(config_path))
    print(f"Config path set to: {config_path}")


def cmd_config_show(args):
    """Show current config file path."""
    config_path_pref = get_preference(CONFIG_PATH_PREFERENCE)

    if config_path_pref:
        config_path = Path(config_path_pref)
        if config_path.exists():
            print(f"Config path: {config_path}")
        else:
            print(f"Config path (from preference, but file not found): {config_path}")
        print("Source: preference")
    else:
        default_config = default_config_path()
        print(f"Config path: {default_config}")
        if default_config.exists():
            print("Source: default")
        else:
            print("Source: default (file not found)")


def cmd_config_clear(args):
    """Clear config path preference."""
    clear_preference(CONFIG_PATH_PREFERENCE)
    print(f"Config path preference cleared. Will use default: {default_config_path()}")


def config_main(argv=None):
    """Entrypoint for secretenv-config."""
    parser = argparse.ArgumentParser(
        prog="secretenv-config",
        description="Manage the secretenv configuration file location"
    )
    subparsers = parser.add_subparsers(dest="config_command")

    set_path_parser = subparsers.add_parser(
        "set-path",
        help="Set config file path",
        description="""
Store the absolute path to your config file in:
~/.config/secretenv/preferences.json
        """
    )
    set_path_parser.add_argument("path", help="Path to config file")

    subparsers.add_parser("show", help="Show current config path")
    subparsers.add_parser("clear", help="Clear config path preference")

    args = parser.parse_args(argv)

    handlers = {
        "set-path": cmd_config_set_path,
        "show": cmd_config_show,
        "clear": cmd_config_clear,
    }
    if args.config_command not in handlers:
        parser.print_help()
        sys.exit(2)

    try:
        handlers[args.config_command](args)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()

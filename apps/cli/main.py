import argparse
import signal
import sys
from types import ModuleType
from typing import Any

from search_repo.logging import LogLevel, setup_logging

from .commands import delete, find, ingest, setup
from .commands.connection import DEFAULTS

COMMANDS = [
    delete,
    find,
    ingest,
    setup,
]

COMMON_ARGUMENTS = [
    {
        "name": "log-level",
        "type": str,
        "required": False,
        "choices": [level.value for level in LogLevel],
        "default": DEFAULTS.log_level.value,
        "help": f"Set the logging level (default: {DEFAULTS.log_level.value})",
    },
    {
        "name": "no-timestamp",
        "action": "store_true",
        "required": False,
        "help": "Disable timestamps in log output",
    },
]

EPILOG = (
    "Connection defaults are read from OPENSEARCH_HOST, OPENSEARCH_PORT, OPENSEARCH_REGION, "
    "OPENSEARCH_PROFILE and OPENSEARCH_ASSUME_ROLE."
)


def signal_handler(sig: int, _: Any) -> None:
    """
    Handle Ctrl+C gracefully.

    Args:
        sig: Signal number
    """
    print("\n\nAborting...\n")
    sys.exit(0)


def validate_command_import(command):
    definition = getattr(command, "DEFINITION", None)
    if definition is None:
        raise ValueError(f"Command {command} does not have DEFINITION")
    if not isinstance(definition, dict):
        raise ValueError(f"Command {command} DEFINITION is not a dictionary")
    if not callable(getattr(command, "main", None)):
        raise ValueError(f"Command {command} does not have a callable main function")

    common_names = {argument["name"] for argument in COMMON_ARGUMENTS}
    for argument in definition["arguments"]:
        if "name" not in argument:
            raise ValueError(f"Command {command} DEFINITION has an argument without a 'name'")
        if argument["name"] in common_names:
            raise ValueError(
                f"Command {command} DEFINITION redefines the common argument '{argument['name']}'"
            )
    return True


def argument_names(command: ModuleType) -> set[str]:
    """Return the keyword names ``command.main`` receives."""
    return {argument["name"].replace("-", "_") for argument in command.DEFINITION["arguments"]}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Store and search entities in OpenSearch",
        epilog=EPILOG,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    for command in COMMANDS:
        validate_command_import(command)
        command_parser = subparsers.add_parser(
            command.DEFINITION["name"],
            help=command.DEFINITION["description"],
            description=command.DEFINITION["description"],
        )
        for argument in sorted(
            [*COMMON_ARGUMENTS, *command.DEFINITION["arguments"]],
            key=lambda x: x["name"],
        ):
            kwargs = {k: v for k, v in argument.items() if k != "name"}
            command_parser.add_argument(f"--{argument['name']}", **kwargs)

    return parser


def run(argv: list[str] | None = None) -> None:
    """Parse ``argv`` and run the selected command; always exits."""
    signal.signal(signal.SIGINT, signal_handler)

    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(0)

    setup_logging(level=args.log_level, include_timestamp=not args.no_timestamp)

    command = next(c for c in COMMANDS if c.DEFINITION["name"] == args.command)
    names = argument_names(command)
    command.main(**{key: value for key, value in vars(args).items() if key in names})
    sys.exit(0)


if __name__ == "__main__":
    run()

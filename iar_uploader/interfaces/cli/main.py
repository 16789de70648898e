"""
Management CLI entry point.

Every module in `commands/` that defines a `Command` class is a command, named
after the module.
"""

import importlib
import pkgutil
import sys
from typing import Dict, List, Optional, Type

from iar_uploader.core.logging import get_logger, setup_logging
from iar_uploader.interfaces.cli import commands as commands_package
from iar_uploader.interfaces.cli.commands.base import BaseCommand

logger = get_logger(__name__)


class CLIManager:
    def __init__(self):
        self.available_commands = self._discover_commands()

    def _discover_commands(self) -> Dict[str, Type[BaseCommand]]:
        commands = {}
        for module_info in pkgutil.iter_modules(commands_package.__path__):
            name = module_info.name
            if name.startswith("_") or name == "base":
                continue
            module = importlib.import_module(f"{commands_package.__name__}.{name}")
            command_class = getattr(module, "Command", None)
            if command_class is not None:
                commands[name] = command_class
        return commands

    def list_commands(self) -> None:
        print("Available commands:")
        print("=" * 40)
        for name in sorted(self.available_commands):
            print(f"  {name:<20} {self.available_commands[name].description}")

    def run_command(self, command_name: str, args: List[str]) -> int:
        if command_name not in self.available_commands:
            print(f"Unknown command: {command_name}")
            print("Use 'iar-uploader help' to see available commands.")
            return 1

        command = self.available_commands[command_name]()
        try:
            return command.run(args)
        except Exception as e:
            logger.exception("Command '%s' failed", command_name)
            print(f"Error running command '{command_name}': {e}")
            return 1


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else list(argv)
    command_name, rest = (argv[0], argv[1:]) if argv else (None, [])

    setup_logging()
    cli_manager = CLIManager()

    if not command_name or command_name in ("help", "-h", "--help"):
        if rest and rest[0] in cli_manager.available_commands:
            cli_manager.available_commands[rest[0]]().help()
            return 0
        if rest:
            print(f"Unknown command: {rest[0]}")
            return 1
        print("Usage: iar-uploader <command> [args...]")
        print()
        cli_manager.list_commands()
        print()
        print("Use 'iar-uploader help <command>' for help on a specific command.")
        return 0

    return cli_manager.run_command(command_name, rest)


if __name__ == "__main__":
    sys.exit(main())

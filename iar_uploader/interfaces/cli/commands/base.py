"""
Base class for management commands
"""

import argparse
from abc import ABC, abstractmethod
from typing import List, Optional

from iar_uploader.core.config import Settings, get_settings


class BaseCommand(ABC):
    """A management command: parses its own arguments and returns an exit code."""

    description = "No description provided"

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings
        self.parser = self._create_parser()

    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()

    def _create_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog=self.__class__.__module__.rsplit(".", 1)[-1],
            description=self.description,
        )
        self.add_arguments(parser)
        return parser

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """Override to add command arguments."""

    @abstractmethod
    def handle(self, **kwargs) -> int:
        """Run the command. Returns the process exit code."""

    def run(self, args: List[str]) -> int:
        parsed_args = self.parser.parse_args(args)
        return self.handle(**vars(parsed_args))

    def help(self) -> None:
        self.parser.print_help()

    def print_success(self, message: str) -> None:
        print(f"\033[92m✓ {message}\033[0m")

    def print_error(self, message: str) -> None:
        print(f"\033[91m✗ {message}\033[0m")

    def print_warning(self, message: str) -> None:
        print(f"\033[93m⚠ {message}\033[0m")

    def print_info(self, message: str) -> None:
        print(f"\033[94mℹ {message}\033[0m")

"""
Base classes for CLI commands.

Commands are plain classes with a name, an argparse hook and an execute
method; groups dispatch to subcommands.
"""

from abc import ABC, abstractmethod
from argparse import ArgumentParser, Namespace
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from .._client import Folio


class Command(ABC):
    """Abstract base class for CLI commands."""

    name: str = ""
    aliases: ClassVar[list[str]] = []
    description: str = ""

    def __init_subclass__(cls, **kwargs: object) -> None:
        """Validate that required attributes are defined."""
        super().__init_subclass__(**kwargs)
        # Intermediate bases define no name of their own
        if cls.__name__ in ("CommandGroup", "ListCommand"):
            return
        if not cls.name:
            raise ValueError(f"Command class {cls.__name__} must define a 'name' attribute")
        if not cls.description:
            raise ValueError(f"Command class {cls.__name__} must define a 'description' attribute")

    def add_arguments(self, parser: ArgumentParser) -> None:
        """Add command-specific arguments to the subparser."""

    @abstractmethod
    def execute(self, args: Namespace, client: "Folio") -> int:
        """
        Execute the command with the given arguments.

        Args:
            args: Parsed command arguments
            client: Folio client configured from the global options

        Returns:
            Exit code (0 for success, non-zero for error)
        """

    def get_all_names(self) -> list[str]:
        """Get all names (primary + aliases) for this command."""
        return [self.name, *self.aliases]


class CommandGroup(Command):
    """
    Base class for command groups that contain subcommands.

    Examples: auth (login, logout, status), messages (list, read)
    """

    def __init__(self) -> None:
        self.subcommands: list[Command] = []

    def add_subcommand(self, command: Command) -> None:
        self.subcommands.append(command)

    def add_arguments(self, parser: ArgumentParser) -> None:
        """Add subparser for all subcommands."""
        subparsers = parser.add_subparsers(
            dest=f"{self.name}_command", help=f"{self.description} commands"
        )
        for command in self.subcommands:
            subparser = subparsers.add_parser(
                command.name, aliases=command.aliases, help=command.description
            )
            command.add_arguments(subparser)

    def execute(self, args: Namespace, client: "Folio") -> int:
        """Execute the appropriate subcommand based on parsed arguments."""
        subcommand_name = getattr(args, f"{self.name}_command", None)
        if not subcommand_name:
            print(f"Error: No subcommand specified for '{self.name}'")
            print(f"Available subcommands: {', '.join(cmd.name for cmd in self.subcommands)}")
            return 1

        for command in self.subcommands:
            if subcommand_name in command.get_all_names():
                return command.execute(args, client)

        print(f"Error: Unknown subcommand '{subcommand_name}' for '{self.name}'")
        return 1

"""
Command registry for toolbar controls.

A control names the command it invokes ("toggle_mark", "set_block_type",
"insert_image", "save", "reset") and passes one value. CommandMeta is a
metaclass that registers Command subclasses by their name, so a new control
only needs a new subclass.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Any, Iterable

from ..document import MARK_TYPES
from ..errors import InvalidCommandValueError, UnknownCommandError
from .queries import TOOLBAR_BLOCK_TYPES

if TYPE_CHECKING:
    from ..session import EditorSession


_command_registry: dict[str, type["Command"]] = {}


class CommandMeta(type):
    """Defining a subclass with a `name` makes it reachable from run_command()."""

    def __new__(mcs, name: str, bases: tuple, attrs: dict):
        new_cls = super().__new__(mcs, name, bases, attrs)
        if command_name := attrs.get("name"):
            _command_registry[command_name] = new_cls
        return new_cls

    @classmethod
    def get_command(mcs, name: str) -> type["Command"]:
        try:
            return _command_registry[name]
        except KeyError:
            raise UnknownCommandError(f"Unknown command {name!r}") from None

    @classmethod
    def list_commands(mcs) -> list[str]:
        return list(_command_registry.keys())


class Command(metaclass=CommandMeta):
    """
    A control action bound to a session.

    run() returns True if the session changed or acted, False for a no-op.
    """
    name: str | None = None

    def __init__(self, session: "EditorSession"):
        self.session = session

    def run(self, value: Any = None) -> bool:
        raise NotImplementedError("Command.run is not implemented")


def _choice(name: str, value: Any, allowed: Iterable[str]) -> str:
    """
    Raises:
        InvalidCommandValueError: if value is missing or not one of allowed
    """
    allowed = tuple(allowed)
    if value not in allowed:
        raise InvalidCommandValueError(f"Command {name!r} expects one of {list(allowed)}, got {value!r}")
    return value


class ToggleMarkCommand(Command):
    name = "toggle_mark"

    def run(self, value: Any = None) -> bool:
        self.session.toggle_mark(_choice(self.name, value, MARK_TYPES))
        return True


class SetBlockTypeCommand(Command):
    name = "set_block_type"

    def run(self, value: Any = None) -> bool:
        allowed = (self.session.schema.default_type,) + TOOLBAR_BLOCK_TYPES
        self.session.set_block_type(_choice(self.name, value, allowed))
        return True


class InsertImageCommand(Command):
    """Insert the image URL typed into the prompt. An empty answer is a cancel."""
    name = "insert_image"

    def run(self, value: Any = None) -> bool:
        if not value:
            return False
        return self.session.insert_image(str(value))


class SaveCommand(Command):
    name = "save"

    def run(self, value: Any = None) -> bool:
        self.session.save()
        return True


class ResetCommand(Command):
    name = "reset"

    def run(self, value: Any = None) -> bool:
        self.session.reset()
        return True


def run_command(session: "EditorSession", name: str, value: Any = None) -> bool:
    """
    Raises:
        UnknownCommandError: if no command is registered under the name
        InvalidCommandValueError: if the command rejects the value
    """
    command_cls = CommandMeta.get_command(name)
    return command_cls(session).run(value)

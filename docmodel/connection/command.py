"""Sending single commands over an established connection.

The connection owns framing and the document encoding; this module only
builds the command message, sends it and checks the ``ok`` field of the
reply.

Example (sync):
    reply = execute_command("admin", {"ping": 1}, connection)

Example (async):
    reply = await execute_command("admin", {"ping": 1}, connection, async_=True)
"""

import logging
from collections.abc import Coroutine, Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from numbers import Real
from typing import Any, Literal, Protocol, overload

logger = logging.getLogger(__name__)

COMMAND_COLLECTION_NAME = "$cmd"

Document = dict[str, Any]


class CommandFailureError(RuntimeError):
    """Raised when a command reply is not ok."""

    def __init__(self, response: Mapping[str, Any]) -> None:
        self.response = dict(response)
        message = self.response.get("errmsg", "command failed")
        code = self.response.get("code")
        super().__init__(f"{message} (code {code})" if code is not None else str(message))


@dataclass(frozen=True)
class CommandMessage:
    """A command addressed to the command namespace of a database."""

    namespace: str
    command: Document = field(default_factory=dict)
    read_preference: str = "primary"

    @classmethod
    def for_database(cls, database: str, command: Mapping[str, Any]) -> "CommandMessage":
        return cls(namespace=f"{database}.{COMMAND_COLLECTION_NAME}", command=dict(command))


class InternalConnection(Protocol):
    """The part of a connection the command helper relies on."""

    def send_and_receive(self, message: CommandMessage) -> Document: ...

    async def send_and_receive_async(self, message: CommandMessage) -> Document: ...


def is_command_ok(response: Mapping[str, Any]) -> bool:
    """Check the ``ok`` field of a command reply.

    A boolean is taken as is, a number must truncate to 1 and anything
    else, including a missing field, NaN or an infinity, is not ok.
    """
    if "ok" not in response:
        return False
    ok = response["ok"]
    if isinstance(ok, bool):
        return ok
    if isinstance(ok, (Real, Decimal)):
        try:
            return int(ok) == 1
        except (ValueError, OverflowError):
            # NaN and infinities have no integer value
            return False
    return False


def _check(response: Document) -> Document:
    if not is_command_ok(response):
        raise CommandFailureError(response)
    return response


@overload
def execute_command(
    database: str,
    command: Mapping[str, Any],
    connection: InternalConnection,
    *,
    async_: Literal[False] = False,
) -> Document: ...


@overload
def execute_command(
    database: str,
    command: Mapping[str, Any],
    connection: InternalConnection,
    *,
    async_: Literal[True],
) -> Coroutine[Any, Any, Document]: ...


def execute_command(
    database: str,
    command: Mapping[str, Any],
    connection: InternalConnection,
    *,
    async_: bool = False,
) -> Document | Coroutine[Any, Any, Document]:
    """Send a command and return its reply.

    Args:
        database: Database whose command namespace receives the command.
        command: The command document.
        connection: An established connection.
        async_: If True, returns a coroutine for async sending.

    Raises:
        CommandFailureError: if the reply is not ok.
    """
    message = CommandMessage.for_database(database, command)
    if async_:
        return _execute_command_async(message, connection)

    logger.debug("Sending command %s to %s", next(iter(message.command), None), message.namespace)
    return _check(connection.send_and_receive(message))


async def _execute_command_async(
    message: CommandMessage, connection: InternalConnection
) -> Document:
    """Async implementation of execute_command."""
    logger.debug("Sending command %s to %s", next(iter(message.command), None), message.namespace)
    return _check(await connection.send_and_receive_async(message))


def execute_command_without_checking_for_failure(
    database: str, command: Mapping[str, Any], connection: InternalConnection
) -> Document:
    """Send a command, returning an empty document when it fails."""
    try:
        return execute_command(database, command, connection)
    except CommandFailureError as exc:
        logger.debug("Ignoring failed command reply: %s", exc)
        return {}

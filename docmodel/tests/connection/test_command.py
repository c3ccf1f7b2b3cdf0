"""Tests for the command helper."""

import asyncio
from decimal import Decimal

import pytest

from docmodel.connection import (
    CommandFailureError,
    CommandMessage,
    execute_command,
    execute_command_without_checking_for_failure,
    is_command_ok,
)


class FakeConnection:
    """Replies with a fixed document and records what was sent."""

    def __init__(self, reply):
        self.reply = reply
        self.sent: list[CommandMessage] = []

    def send_and_receive(self, message):
        self.sent.append(message)
        return self.reply

    async def send_and_receive_async(self, message):
        self.sent.append(message)
        return self.reply


def describe_is_command_ok():
    def accepts_boolean_true(expect):
        expect(is_command_ok({"ok": True})) == True
        expect(is_command_ok({"ok": False})) == False

    def accepts_numeric_one(expect):
        expect(is_command_ok({"ok": 1})) == True
        expect(is_command_ok({"ok": 1.0})) == True
        expect(is_command_ok({"ok": Decimal("1")})) == True

    def rejects_other_numbers(expect):
        expect(is_command_ok({"ok": 0})) == False
        expect(is_command_ok({"ok": 0.0})) == False
        expect(is_command_ok({"ok": 2})) == False

    def rejects_non_finite_numbers(expect):
        expect(is_command_ok({"ok": float("nan")})) == False
        expect(is_command_ok({"ok": float("inf")})) == False
        expect(is_command_ok({"ok": float("-inf")})) == False
        expect(is_command_ok({"ok": Decimal("NaN")})) == False
        expect(is_command_ok({"ok": Decimal("Infinity")})) == False

    def rejects_missing_field(expect):
        expect(is_command_ok({})) == False

    def rejects_other_types(expect):
        expect(is_command_ok({"ok": "1"})) == False
        expect(is_command_ok({"ok": None})) == False


def describe_command_message():
    def addresses_command_namespace(expect):
        message = CommandMessage.for_database("admin", {"ping": 1})

        expect(message.namespace) == "admin.$cmd"
        expect(message.command) == {"ping": 1}
        expect(message.read_preference) == "primary"


def describe_execute_command():
    def returns_ok_reply(expect):
        connection = FakeConnection({"ok": 1, "n": 3})

        reply = execute_command("app", {"count": "people"}, connection)

        expect(reply) == {"ok": 1, "n": 3}
        (message,) = connection.sent
        expect(message.namespace) == "app.$cmd"
        expect(message.command) == {"count": "people"}

    def raises_on_failed_reply(expect):
        connection = FakeConnection({"ok": 0, "errmsg": "no such command", "code": 59})

        with pytest.raises(CommandFailureError) as exc:
            execute_command("app", {"bogus": 1}, connection)
        expect(str(exc.value)) == "no such command (code 59)"
        expect(exc.value.response["code"]) == 59

    def returns_coroutine_when_async(expect):
        connection = FakeConnection({"ok": True})

        reply = asyncio.run(execute_command("app", {"ping": 1}, connection, async_=True))

        expect(reply) == {"ok": True}
        expect(connection.sent[0].namespace) == "app.$cmd"

    def treats_non_finite_ok_as_failure(expect):
        connection = FakeConnection({"ok": float("nan")})

        with pytest.raises(CommandFailureError):
            execute_command("app", {"ping": 1}, connection)

    def checks_async_replies(expect):
        connection = FakeConnection({"ok": 0})

        with pytest.raises(CommandFailureError) as exc:
            asyncio.run(execute_command("app", {"ping": 1}, connection, async_=True))
        expect(str(exc.value)) == "command failed"


def describe_execute_command_without_checking_for_failure():
    def returns_ok_reply(expect):
        connection = FakeConnection({"ok": 1, "version": "7.0"})

        reply = execute_command_without_checking_for_failure("admin", {"buildInfo": 1}, connection)

        expect(reply) == {"ok": 1, "version": "7.0"}

    def returns_empty_document_on_failure(expect):
        connection = FakeConnection({"ok": 0, "errmsg": "unauthorized"})

        reply = execute_command_without_checking_for_failure("admin", {"buildInfo": 1}, connection)

        expect(reply) == {}

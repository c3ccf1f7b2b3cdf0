"""Command helpers for established connections."""

from .command import CommandFailureError as CommandFailureError
from .command import CommandMessage as CommandMessage
from .command import InternalConnection as InternalConnection
from .command import execute_command as execute_command
from .command import (
    execute_command_without_checking_for_failure as execute_command_without_checking_for_failure,
)
from .command import is_command_ok as is_command_ok

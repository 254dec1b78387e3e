# Config Store - Password Prompts
#
# Password entry is a collaborator: the store only calls read_password().

import getpass
from typing import Iterable, List, Protocol, Union

from ..core.log import get_logger
from ..exceptions import ValidationError

logger = get_logger(__name__)

NEW_PASSWORD_MESSAGE = "Please provide a password to encrypt your private key: "
REPEAT_PASSWORD_MESSAGE = "Please repeat your password: "
UNLOCK_PASSWORD_MESSAGE = "Please provide your password to unlock your ethereum account: "


class PasswordPrompt(Protocol):
    def read_password(self, message: str) -> bytes:
        ...


class GetpassPrompt:
    """Reads passwords from the terminal without echo."""

    def read_password(self, message: str) -> bytes:
        try:
            return getpass.getpass(message).encode("utf-8")
        except EOFError as e:
            raise ValidationError("Failed to retrieve password") from e


class StaticPasswordPrompt:
    """Replays a fixed sequence of answers (tests, non-interactive setup)."""

    def __init__(self, answers: Iterable[Union[bytes, str]]):
        self._answers: List[bytes] = [
            a.encode("utf-8") if isinstance(a, str) else bytes(a) for a in answers
        ]
        self.messages: List[str] = []

    def read_password(self, message: str) -> bytes:
        self.messages.append(message)
        if not self._answers:
            raise ValidationError("Failed to retrieve password")
        return self._answers.pop(0)


def read_new_password(prompt: PasswordPrompt, attempts: int = 3) -> bytes:
    """
    Ask for a new password twice until both entries match and are non-empty.

    Args:
        prompt: Source of password entries
        attempts: How many confirmation rounds to allow

    Returns:
        The confirmed password

    Raises:
        ValidationError: Still mismatched or empty after the last attempt
    """
    reason = "Password can't be empty"
    for attempt in range(1, attempts + 1):
        password = prompt.read_password(NEW_PASSWORD_MESSAGE)
        repeated = prompt.read_password(REPEAT_PASSWORD_MESSAGE)

        if password != repeated:
            reason = "Passwords didn't match"
        elif len(password) == 0:
            reason = "Password can't be empty"
        else:
            return password

        logger.warning("password.rejected", reason=reason, attempt=attempt, attempts=attempts)

    raise ValidationError(reason)

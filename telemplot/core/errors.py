# telemplot/core/errors.py
from __future__ import annotations

import logging
from typing import Iterator

logger = logging.getLogger(__name__)


class ErrorSink:
    """
    Append-only, user-visible list of non-fatal problems.

    Callers that start a new user operation (dataset add, config apply)
    call `clear()`; render passes only `append`.
    """

    def __init__(self) -> None:
        self._messages: tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[str]:
        return iter(self._messages)

    def __bool__(self) -> bool:
        return bool(self._messages)

    @property
    def messages(self) -> tuple[str, ...]:
        return self._messages

    def append(self, message: str | BaseException) -> None:
        text = str(message)
        logger.warning(text)
        self._messages = self._messages + (text,)

    def extend(self, messages) -> None:
        for message in messages:
            self.append(message)

    def clear(self) -> None:
        self._messages = ()

"""表单校验错误集合."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from activeform.forms.base import ActiveForm

BASE = "base"


class Errors:
    """按字段聚合的校验错误.

    ``base`` 用于记录不属于任何字段的错误,生成完整文案时不拼接字段名.
    """

    def __init__(self, record: ActiveForm) -> None:
        self._record = record
        self._messages: dict[str, list[str]] = {}

    def add(self, attribute: str, message: str) -> None:
        self._messages.setdefault(attribute, []).append(message)

    def __getitem__(self, attribute: str) -> list[str]:
        return list(self._messages.get(attribute, []))

    def __contains__(self, attribute: object) -> bool:
        return attribute in self._messages

    def __iter__(self) -> Iterator[tuple[str, str]]:
        for attribute, messages in self._messages.items():
            for message in messages:
                yield attribute, message

    def __len__(self) -> int:
        return sum(len(messages) for messages in self._messages.values())

    def __bool__(self) -> bool:
        return bool(self._messages)

    def __repr__(self) -> str:
        return f"Errors({self._messages!r})"

    def clear(self) -> None:
        self._messages.clear()

    def attributes(self) -> list[str]:
        return list(self._messages)

    def full_message(self, attribute: str, message: str) -> str:
        """拼接字段显示名与错误文案."""
        if attribute == BASE:
            return message
        label = type(self._record).human_attribute_name(attribute)
        return f"{label}{message}"

    def full_messages(self) -> list[str]:
        return [self.full_message(attribute, message) for attribute, message in self]

    def full_messages_for(self, attribute: str) -> list[str]:
        return [self.full_message(attribute, message) for message in self._messages.get(attribute, [])]

    def to_dict(self) -> dict[str, list[str]]:
        return {attribute: list(messages) for attribute, messages in self._messages.items()}

"""表单生命周期回调.

支持的阶段: validation / save / create.每个阶段分为 before 与 after 两组回调,
回调可以是接收表单实例的可调用对象,也可以是表单上的方法名.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, ClassVar, TypeVar, Union

from activeform.constants import ErrorMessages
from activeform.core.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from activeform.forms.base import ActiveForm

PHASES = ("validation", "save", "create")
KINDS = ("before", "after")

Callback = Union[Callable[["ActiveForm"], object], str]
CallbackT = TypeVar("CallbackT", bound=Callback)
ResultT = TypeVar("ResultT")


class CallbackChain:
    """按 ``{kind}_{phase}`` 分组保存回调的注册表."""

    __slots__ = ("_callbacks",)

    def __init__(self, callbacks: dict[str, list[Callback]] | None = None) -> None:
        self._callbacks: dict[str, list[Callback]] = {
            key: list(value) for key, value in (callbacks or {}).items()
        }

    def copy(self) -> CallbackChain:
        return CallbackChain(self._callbacks)

    def register(self, kind: str, phase: str, callback: Callback) -> None:
        if kind not in KINDS or phase not in PHASES:
            raise InvalidArgumentError(
                f"{ErrorMessages.INVALID_ARGUMENT}: {kind}_{phase}",
                extra={"kind": kind, "phase": phase},
            )
        self._callbacks.setdefault(f"{kind}_{phase}", []).append(callback)

    def get(self, kind: str, phase: str) -> list[Callback]:
        return list(self._callbacks.get(f"{kind}_{phase}", []))


def _invoke(record: ActiveForm, callback: Callback) -> None:
    if isinstance(callback, str):
        getattr(record, callback)()
    else:
        callback(record)


class CallbacksMixin:
    """为表单类提供回调注册与分发."""

    _callback_chain: ClassVar[CallbackChain] = CallbackChain()

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        cls._callback_chain = cls._callback_chain.copy()

    @classmethod
    def set_callback(cls, kind: str, phase: str, callback: CallbackT) -> CallbackT:
        """注册回调并原样返回,便于作为装饰器使用."""
        cls._callback_chain.register(kind, phase, callback)
        return callback

    @classmethod
    def before_validation(cls, callback: CallbackT) -> CallbackT:
        return cls.set_callback("before", "validation", callback)

    @classmethod
    def after_validation(cls, callback: CallbackT) -> CallbackT:
        return cls.set_callback("after", "validation", callback)

    @classmethod
    def before_save(cls, callback: CallbackT) -> CallbackT:
        return cls.set_callback("before", "save", callback)

    @classmethod
    def after_save(cls, callback: CallbackT) -> CallbackT:
        return cls.set_callback("after", "save", callback)

    @classmethod
    def before_create(cls, callback: CallbackT) -> CallbackT:
        return cls.set_callback("before", "create", callback)

    @classmethod
    def after_create(cls, callback: CallbackT) -> CallbackT:
        return cls.set_callback("after", "create", callback)

    def run_callbacks(self, phase: str, block: Callable[[], ResultT] | None = None) -> ResultT | None:
        """依次执行 before 回调、``block`` 与 after 回调.

        Args:
            phase: 生命周期阶段,取值见 ``PHASES``.
            block: 夹在 before 与 after 之间执行的主体逻辑,可选.

        Returns:
            ``block`` 的返回值,未提供时返回 None.

        """
        chain = type(self)._callback_chain
        record: ActiveForm = self  # type: ignore[assignment]
        for callback in chain.get("before", phase):
            _invoke(record, callback)
        result = block() if block is not None else None
        for callback in chain.get("after", phase):
            _invoke(record, callback)
        return result

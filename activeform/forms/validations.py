"""表单校验规则与校验流程.

规则按类注册,子类在创建时复制父类的规则列表;``valid()`` 依次执行字段类型检查与
已注册规则,并把失败信息写入 ``errors``.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Collection, Sized
from typing import TYPE_CHECKING, ClassVar, TypeVar

from pydantic import ValidationError as PydanticValidationError

from activeform.constants import ErrorMessages, ValidationMessages
from activeform.core.exceptions import InvalidArgumentError
from activeform.utils.structlog_config import get_form_logger

if TYPE_CHECKING:
    from activeform.forms.base import ActiveForm

logger = get_form_logger()

ValidatorFuncT = TypeVar("ValidatorFuncT", bound="Callable[[ActiveForm], object] | str")


def is_blank(value: object) -> bool:
    """None、空白字符串与空集合视为空."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, Sized):
        return len(value) == 0
    return False


class Validator:
    """字段级校验规则基类."""

    default_message = ValidationMessages.INVALID

    def __init__(
        self,
        attributes: tuple[str, ...],
        *,
        message: str | None = None,
        allow_blank: bool = False,
    ) -> None:
        if not attributes:
            raise InvalidArgumentError(
                f"{ErrorMessages.INVALID_ARGUMENT}: 至少需要一个字段",
                extra={"validator": type(self).__name__},
            )
        self.attributes = attributes
        self.message = message
        self.allow_blank = allow_blank

    def validate(self, record: ActiveForm) -> None:
        for attribute in self.attributes:
            value = record.read_attribute(attribute)
            if self.allow_blank and is_blank(value):
                continue
            self.validate_each(record, attribute, value)

    def validate_each(self, record: ActiveForm, attribute: str, value: object) -> None:
        raise NotImplementedError

    def error_message(self, **kwargs: object) -> str:
        template = self.message or self.default_message
        return template.format(**kwargs) if kwargs else template


class PresenceValidator(Validator):
    default_message = ValidationMessages.BLANK

    def validate_each(self, record: ActiveForm, attribute: str, value: object) -> None:
        if is_blank(value):
            record.errors.add(attribute, self.error_message())


class FormatValidator(Validator):
    """取值转为字符串后需匹配 ``with_`` 正则."""

    def __init__(self, attributes: tuple[str, ...], *, with_: str | re.Pattern[str], **kwargs: object) -> None:
        super().__init__(attributes, **kwargs)  # type: ignore[arg-type]
        self.pattern = re.compile(with_) if isinstance(with_, str) else with_

    def validate_each(self, record: ActiveForm, attribute: str, value: object) -> None:
        text = "" if value is None else str(value)
        if not self.pattern.search(text):
            record.errors.add(attribute, self.error_message())


class LengthValidator(Validator):
    def __init__(
        self,
        attributes: tuple[str, ...],
        *,
        minimum: int | None = None,
        maximum: int | None = None,
        **kwargs: object,
    ) -> None:
        super().__init__(attributes, **kwargs)  # type: ignore[arg-type]
        if minimum is None and maximum is None:
            raise InvalidArgumentError(
                f"{ErrorMessages.INVALID_ARGUMENT}: minimum 与 maximum 至少提供一个",
                extra={"attributes": list(attributes)},
            )
        self.minimum = minimum
        self.maximum = maximum

    def validate_each(self, record: ActiveForm, attribute: str, value: object) -> None:
        if value is None:
            length = 0
        elif isinstance(value, Sized):
            length = len(value)
        else:
            length = len(str(value))

        if self.minimum is not None and length < self.minimum:
            template = self.message or ValidationMessages.TOO_SHORT
            record.errors.add(attribute, template.format(count=self.minimum))
        elif self.maximum is not None and length > self.maximum:
            template = self.message or ValidationMessages.TOO_LONG
            record.errors.add(attribute, template.format(count=self.maximum))


class InclusionValidator(Validator):
    default_message = ValidationMessages.INCLUSION

    def __init__(self, attributes: tuple[str, ...], *, in_: Collection[object], **kwargs: object) -> None:
        super().__init__(attributes, **kwargs)  # type: ignore[arg-type]
        self.choices = in_

    def validate_each(self, record: ActiveForm, attribute: str, value: object) -> None:
        if value not in self.choices:
            record.errors.add(attribute, self.error_message())


class CallableValidator:
    """自定义校验: 可调用对象或表单方法名,自行调用 ``errors.add``."""

    def __init__(self, func: Callable[[ActiveForm], object] | str) -> None:
        self.func = func

    def validate(self, record: ActiveForm) -> None:
        if isinstance(self.func, str):
            getattr(record, self.func)()
        else:
            self.func(record)


def check_column_types(record: ActiveForm) -> None:
    """已知类型的字段若当前取值无法转换,记录类型错误."""
    for column in type(record).columns_hash().values():
        if column.python_type is None:
            continue
        value = record.read_attribute(column.name)
        if value is None:
            continue
        try:
            column.cast(value)
        except PydanticValidationError:
            record.errors.add(column.name, ValidationMessages.TYPE_MISMATCH.format(type=column.type))


class ValidationsMixin:
    """为表单类提供声明式校验."""

    _validators: ClassVar[list[Validator | CallableValidator]] = []

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        cls._validators = list(cls._validators)

    @classmethod
    def validators(cls) -> list[Validator | CallableValidator]:
        return list(cls._validators)

    @classmethod
    def validates_with(cls, validator: Validator | CallableValidator) -> None:
        cls._validators.append(validator)

    @classmethod
    def validates_presence_of(cls, *attributes: str, message: str | None = None) -> None:
        cls.validates_with(PresenceValidator(attributes, message=message))

    @classmethod
    def validates_format_of(
        cls,
        *attributes: str,
        with_: str | re.Pattern[str],
        message: str | None = None,
        allow_blank: bool = False,
    ) -> None:
        cls.validates_with(FormatValidator(attributes, with_=with_, message=message, allow_blank=allow_blank))

    @classmethod
    def validates_length_of(
        cls,
        *attributes: str,
        minimum: int | None = None,
        maximum: int | None = None,
        message: str | None = None,
        allow_blank: bool = False,
    ) -> None:
        cls.validates_with(
            LengthValidator(
                attributes,
                minimum=minimum,
                maximum=maximum,
                message=message,
                allow_blank=allow_blank,
            )
        )

    @classmethod
    def validates_inclusion_of(
        cls,
        *attributes: str,
        in_: Collection[object],
        message: str | None = None,
        allow_blank: bool = False,
    ) -> None:
        cls.validates_with(InclusionValidator(attributes, in_=in_, message=message, allow_blank=allow_blank))

    @classmethod
    def validate(cls, func: ValidatorFuncT) -> ValidatorFuncT:
        """注册自定义校验,可作为装饰器使用."""
        cls.validates_with(CallableValidator(func))
        return func

    def valid(self) -> bool:
        """执行校验并返回是否通过.

        会先清空 ``errors``,再依次执行 before_validation 回调、字段类型检查、
        已注册规则与 after_validation 回调.

        Returns:
            bool: 没有任何错误时为 True.

        """
        record: ActiveForm = self  # type: ignore[assignment]
        record.errors.clear()
        record.run_callbacks("validation", lambda: self._run_validations(record))
        result = not record.errors
        logger.debug(
            "表单校验完成",
            form=type(self).__name__,
            valid=result,
            errors=record.errors.to_dict(),
        )
        return result

    def invalid(self) -> bool:
        return not self.valid()

    @staticmethod
    def _run_validations(record: ActiveForm) -> None:
        check_column_types(record)
        for validator in type(record)._validators:
            validator.validate(record)

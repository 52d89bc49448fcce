"""非持久化表单基类.

``ActiveForm`` 复用模型风格的字段声明、类型转换、校验与生命周期回调,
但没有对应的数据表: ``save()`` 只做校验并触发回调,不写入任何存储.

Example:
    >>> class FeedbackForm(ActiveForm, columns=["email", {"message": {"type": "text"}}]):
    ...     pass
    >>> FeedbackForm.validates_presence_of("email", "message")
    >>> FeedbackForm(email="a@example.com", message="hi").save()
    True

"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping
from typing import Any, ClassVar, TypeVar

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import Column

from activeform.constants import ErrorMessages
from activeform.core.exceptions import InvalidArgumentError, RecordInvalid, UnknownAttributeError
from activeform.forms.callbacks import CallbacksMixin
from activeform.forms.columns import ColumnRegistry, FormColumn, build_column, coerce_name
from activeform.forms.errors import Errors
from activeform.forms.validations import ValidationsMixin
from activeform.utils.inflection import humanize
from activeform.utils.structlog_config import get_form_logger

logger = get_form_logger()

INSTANCE_ATTRIBUTES = frozenset({"errors", "_attributes"})

FormT = TypeVar("FormT", bound="ActiveForm")

ColumnSpec = str | Mapping[Any, Mapping[Any, object] | None]


def split_column_spec(spec: object) -> tuple[object, Mapping[Any, object]]:
    """把字段定义拆成 (字段名, 配置).

    Args:
        spec: 字段名,或仅含一个键值对的映射 ``{name: options}``.

    Raises:
        InvalidArgumentError: 映射不是恰好一个键值对.

    """
    if isinstance(spec, Mapping):
        if len(spec) != 1:
            raise InvalidArgumentError(
                ErrorMessages.INVALID_COLUMN_SPEC.format(spec=dict(spec)),
                message_key="INVALID_COLUMN_SPEC",
            )
        name, options = next(iter(spec.items()))
        return name, options or {}
    return spec, {}


class ColumnAttribute:
    """把字段取值暴露为实例属性的描述符."""

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def __get__(self, instance: ActiveForm | None, owner: type[ActiveForm]) -> object:
        if instance is None:
            return self
        return instance.read_attribute(self.name)

    def __set__(self, instance: ActiveForm, value: object) -> None:
        instance.write_attribute(self.name, value)


class ActiveForm(ValidationsMixin, CallbacksMixin):
    """没有数据表的表单对象基类.

    子类在创建时复制父类的字段注册表、校验规则与回调,之后的声明互不影响.
    也可以通过类关键字 ``columns`` 在定义时批量声明字段.
    """

    abstract_class: ClassVar[bool] = True
    __abstract__: ClassVar[bool] = True
    __table__: ClassVar[None] = None

    _columns: ClassVar[ColumnRegistry] = ColumnRegistry()

    def __init_subclass__(cls, columns: Iterable[ColumnSpec] = (), **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        cls._columns = cls._columns.copy()
        for spec in columns:
            name, options = split_column_spec(spec)
            cls.column(name, options)

    def __init__(self, **attributes: object) -> None:
        self._attributes: dict[str, object] = {}
        for column in type(self).columns_hash().values():
            self.write_attribute(column.name, copy.deepcopy(column.default))
        self.errors = Errors(self)
        self.assign_attributes(**attributes)

    def __repr__(self) -> str:
        pairs = " ".join(f"{name}={value!r}" for name, value in self._attributes.items())
        return f"<{type(self).__name__} {pairs}>" if pairs else f"<{type(self).__name__}>"

    # ---- 字段注册表 -------------------------------------------------

    @classmethod
    def columns(cls) -> ColumnRegistry:
        """返回当前类按声明顺序排列的字段注册表."""
        return cls._columns

    @classmethod
    def column_names(cls) -> list[str]:
        return cls._columns.names()

    @classmethod
    def columns_hash(cls) -> dict[str, FormColumn]:
        return cls._columns.by_name()

    @classmethod
    def human_attribute_name(cls, name: str) -> str:
        column = cls._columns.get(name)
        if column is not None and column.display_name is not None:
            return column.display_name
        return humanize(name)

    @classmethod
    def sqlalchemy_columns(cls) -> list[Column[Any]]:
        return [column.to_sqlalchemy() for column in cls._columns]

    @classmethod
    def column(cls, name: object, options: Mapping[Any, object] | None = None, **kwargs: object) -> FormColumn:
        """声明一个字段.

        支持的选项: ``type``、``default``、``null``(缺省为 True)、``human_name``.
        出现其他选项时抛出 ``InvalidArgumentError``,注册表保持不变.

        Args:
            name: 字段名,会被转换为字符串.
            options: 选项映射.
            **kwargs: 以关键字形式给出的选项,与 ``options`` 合并.

        Returns:
            FormColumn: 新追加的字段描述.

        """
        merged: dict[Any, object] = dict(options or {})
        merged.update(kwargs)
        try:
            column = build_column(name, merged)
        except InvalidArgumentError as exc:
            logger.warning(
                "字段声明被拒绝",
                form=cls.__name__,
                column=coerce_name(name),
                error=exc.message,
            )
            raise

        if cls._is_reserved_name(column.name):
            logger.warning("字段声明被拒绝", form=cls.__name__, column=column.name, error="reserved")
            raise InvalidArgumentError(
                ErrorMessages.DANGEROUS_ATTRIBUTE.format(attribute=column.name),
                message_key="DANGEROUS_ATTRIBUTE",
                extra={"attribute": column.name},
            )

        cls._columns.append(column)
        setattr(cls, column.name, ColumnAttribute(column.name))
        logger.debug(
            "注册表单字段",
            form=cls.__name__,
            column=column.name,
            column_type=column.type,
            nullable=column.nullable,
        )
        return column

    @classmethod
    def _is_reserved_name(cls, name: str) -> bool:
        """字段名不能是双下划线名称,也不能覆盖类上已有的非字段成员."""
        if name in INSTANCE_ATTRIBUTES or (name.startswith("__") and name.endswith("__")):
            return True
        existing = getattr(cls, name, None)
        return hasattr(cls, name) and not isinstance(existing, ColumnAttribute)

    # ---- 属性读写 ---------------------------------------------------

    @property
    def attributes(self) -> dict[str, object]:
        return dict(self._attributes)

    def read_attribute(self, name: str) -> object:
        return self._attributes.get(name)

    def write_attribute(self, name: str, value: object) -> None:
        """按字段类型转换后写入;无法转换时保留原值,由校验报告类型错误."""
        column = type(self).columns_hash().get(name)
        if column is None:
            raise UnknownAttributeError(name)
        try:
            self._attributes[name] = column.cast(value)
        except PydanticValidationError:
            self._attributes[name] = value

    def assign_attributes(self, **attributes: object) -> None:
        known = type(self).columns_hash()
        for name, value in attributes.items():
            if name not in known:
                raise UnknownAttributeError(name)
            self.write_attribute(name, value)

    # ---- 持久化拦截 -------------------------------------------------

    @property
    def new_record(self) -> bool:
        return True

    @property
    def persisted(self) -> bool:
        return False

    def save(self) -> bool:
        """校验通过时依次触发 save 与 create 回调,不写入任何存储.

        Returns:
            bool: 校验结果.

        """
        result = self.valid()
        if result:
            self.run_callbacks("save")
            self.run_callbacks("create")
            logger.debug("表单保存回调已触发", form=type(self).__name__)
        return result

    def save_or_raise(self) -> bool:
        """同 ``save``,校验失败时抛出 ``RecordInvalid``."""
        if not self.save():
            raise RecordInvalid(self)
        return True

    def update_attributes(self, **attributes: object) -> bool:
        self.assign_attributes(**attributes)
        return self.save()

    @classmethod
    def create(cls: type[FormT], **attributes: object) -> FormT:
        record = cls(**attributes)
        record.save()
        return record

    @classmethod
    def create_or_raise(cls: type[FormT], **attributes: object) -> FormT:
        record = cls(**attributes)
        record.save_or_raise()
        return record


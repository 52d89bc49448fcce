"""表单字段描述与字段注册表.

字段类型标签通过 SQLAlchemy 的类型系统映射到 Python 类型,
赋值时使用 pydantic ``TypeAdapter`` 做宽松转换.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any, Callable, overload

from pydantic import TypeAdapter
from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    Integer,
    LargeBinary,
    Numeric,
    String,
    Text,
    Time,
)
from sqlalchemy.types import TypeEngine

from activeform.constants import ColumnType, ErrorMessages
from activeform.core.exceptions import InvalidArgumentError

HUMAN_NAME_ALIASES = {"humanName": "human_name"}

_SQL_TYPE_FACTORIES: dict[str, Callable[[], TypeEngine[Any]]] = {
    ColumnType.STRING.value: String,
    ColumnType.TEXT.value: Text,
    ColumnType.INTEGER.value: Integer,
    ColumnType.FLOAT.value: Float,
    ColumnType.DECIMAL.value: lambda: Numeric(asdecimal=True),
    ColumnType.BOOLEAN.value: Boolean,
    ColumnType.DATE.value: Date,
    ColumnType.DATETIME.value: DateTime,
    ColumnType.TIMESTAMP.value: DateTime,
    ColumnType.TIME.value: Time,
    ColumnType.BINARY.value: LargeBinary,
}


def coerce_symbol(value: object) -> object:
    """把枚举成员转换为字符串,其余值原样返回."""
    if isinstance(value, Enum):
        return str(value.value)
    return value


def coerce_name(name: object) -> str:
    return str(coerce_symbol(name))


@lru_cache(maxsize=None)
def _type_adapter(python_type: type) -> TypeAdapter[Any]:
    return TypeAdapter(python_type)


@dataclass(frozen=True, slots=True)
class FormColumn:
    """单个字段的元数据.

    Attributes:
        name: 字段名.
        type: 语义类型标签(如 text),未知标签原样保存且不做类型转换.
        default: 未赋值时的默认值.
        nullable: 是否允许为空.
        display_name: 显示名覆盖,为空时使用默认的人性化名称.

    """

    name: str
    type: str | None = None
    default: object | None = None
    nullable: bool = True
    display_name: str | None = None

    @property
    def sql_type(self) -> TypeEngine[Any] | None:
        """返回类型标签对应的 SQLAlchemy 类型实例,未知标签返回 None."""
        if self.type is None:
            return None
        factory = _SQL_TYPE_FACTORIES.get(str(self.type).lower())
        return factory() if factory is not None else None

    @property
    def python_type(self) -> type | None:
        sql_type = self.sql_type
        if sql_type is None:
            return None
        try:
            return sql_type.python_type
        except NotImplementedError:
            return None

    def cast(self, value: object) -> object:
        """按字段类型转换取值.

        Args:
            value: 原始取值.

        Returns:
            转换后的取值.非字符串类型的空白字符串视为 None.

        Raises:
            pydantic.ValidationError: 取值无法转换为字段类型.

        """
        python_type = self.python_type
        if value is None or python_type is None:
            return value
        if python_type is str:
            return value if isinstance(value, str) else str(value)
        if isinstance(value, str) and not value.strip():
            return None
        return _type_adapter(python_type).validate_python(value)

    def to_sqlalchemy(self) -> Column[Any]:
        """构造游离的 SQLAlchemy Column,未知类型按 String 处理."""
        sql_type = self.sql_type
        return Column(
            self.name,
            sql_type if sql_type is not None else String(),
            default=self.default,
            nullable=self.nullable,
        )


@dataclass(frozen=True, slots=True)
class ColumnOptions:
    """字段声明的可选配置."""

    type: str | None = None
    default: object | None = None
    null: bool = True
    human_name: str | None = None

    @classmethod
    def from_mapping(cls, options: Mapping[Any, object]) -> ColumnOptions:
        """消费已识别的选项,存在未知选项时抛出 InvalidArgumentError.

        Args:
            options: 原始配置映射,键支持字符串或枚举成员.

        Returns:
            ColumnOptions: 归一化后的配置.

        Raises:
            InvalidArgumentError: 映射中存在无法识别的键.

        """
        remaining: dict[str, object] = {}
        for key, value in options.items():
            normalized_key = coerce_name(key)
            target_key = HUMAN_NAME_ALIASES.get(normalized_key, normalized_key)
            if target_key in remaining:
                raise InvalidArgumentError(
                    ErrorMessages.CONFLICTING_OPTION.format(option=target_key),
                    message_key="CONFLICTING_OPTION",
                    extra={"option": target_key},
                )
            remaining[target_key] = coerce_symbol(value)

        human_name = remaining.pop("human_name", None)
        default = remaining.pop("default", None)
        column_type = remaining.pop("type", None)
        null = remaining.pop("null") if "null" in remaining else True

        if remaining:
            unknown = sorted(remaining)
            raise InvalidArgumentError(
                ErrorMessages.UNKNOWN_OPTION.format(options=", ".join(unknown)),
                message_key="UNKNOWN_OPTION",
                extra={"unknown_options": unknown},
            )

        return cls(
            type=column_type,  # type: ignore[arg-type]
            default=default,
            null=null,  # type: ignore[arg-type]
            human_name=None if human_name is None else str(human_name),
        )


def build_column(name: object, options: Mapping[Any, object] | None = None) -> FormColumn:
    """根据字段名与配置构造 FormColumn."""
    parsed = ColumnOptions.from_mapping(options or {})
    return FormColumn(
        name=coerce_name(name),
        type=parsed.type,
        default=parsed.default,
        nullable=parsed.null,
        display_name=parsed.human_name,
    )


class ColumnRegistry(Sequence[FormColumn]):
    """按声明顺序保存字段描述的注册表.

    子类通过 ``copy()`` 获得父类注册表的浅拷贝,此后各自独立追加.
    """

    __slots__ = ("_columns",)

    def __init__(self, columns: Sequence[FormColumn] = ()) -> None:
        self._columns: list[FormColumn] = list(columns)

    @overload
    def __getitem__(self, index: int) -> FormColumn: ...

    @overload
    def __getitem__(self, index: slice) -> list[FormColumn]: ...

    def __getitem__(self, index: int | slice) -> FormColumn | list[FormColumn]:
        return self._columns[index]

    def __len__(self) -> int:
        return len(self._columns)

    def __iter__(self) -> Iterator[FormColumn]:
        return iter(self._columns)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ColumnRegistry):
            return self._columns == other._columns
        if isinstance(other, list):
            return self._columns == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ColumnRegistry({self._columns!r})"

    def append(self, column: FormColumn) -> None:
        self._columns.append(column)

    def copy(self) -> ColumnRegistry:
        return ColumnRegistry(self._columns)

    def names(self) -> list[str]:
        return [column.name for column in self._columns]

    def by_name(self) -> dict[str, FormColumn]:
        """按字段名索引,同名字段以最后一次声明为准."""
        return {column.name: column for column in self._columns}

    def get(self, name: str) -> FormColumn | None:
        return self.by_name().get(name)

"""字段类型常量."""

from enum import Enum


class ColumnType(str, Enum):
    """字段语义类型标签.

    取值与 ``FormColumn.type`` 中保存的字符串一致, 声明字段时可直接传入枚举成员.
    """

    STRING = "string"
    TEXT = "text"
    INTEGER = "integer"
    FLOAT = "float"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    TIMESTAMP = "timestamp"
    TIME = "time"
    BINARY = "binary"

"""字段名与显示名之间的转换工具."""

from __future__ import annotations

import re

_ID_SUFFIX = re.compile(r"_id$")


def humanize(name: str) -> str:
    """把字段名转换为默认显示名.

    去掉末尾的 ``_id``,下划线替换为空格,首字母大写.

    Example:
        >>> humanize("author_id")
        'Author'
        >>> humanize("email_address")
        'Email address'

    """
    text = _ID_SUFFIX.sub("", name).replace("_", " ").strip().lower()
    if not text:
        return name
    return text[0].upper() + text[1:]

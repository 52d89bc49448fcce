"""ActiveForm 的结构化日志配置与辅助函数."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, cast

import structlog

from activeform.settings import Settings

if TYPE_CHECKING:
    from structlog.typing import EventDict, Processor, WrappedLogger


class StructlogConfig:
    """structlog 配置核心类.

    负责配置 structlog 的处理器链与日志工厂,保证只初始化一次.

    Attributes:
        settings: 当前生效的运行时设置.
        configured: 是否已配置标志.

    Example:
        >>> config = StructlogConfig()
        >>> config.configure(Settings.load())
        >>> logger = get_logger('my_module')

    """

    def __init__(self) -> None:
        self.settings: Settings | None = None
        self.configured = False

    def configure(self, settings: Settings | None = None, *, force: bool = False) -> None:
        """初始化 structlog 处理器(幂等).

        Args:
            settings: 运行时设置,缺省时通过 ``Settings.load()`` 读取.
            force: 是否忽略已配置标志重新配置,用于测试或切换输出格式.

        Returns:
            None.

        """
        if self.configured and not force:
            return

        self.settings = settings or Settings.load()
        processors = [
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            self._add_global_context,
            self._get_renderer(),
        ]
        structlog.configure(
            processors=cast("list[Processor]", processors),
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=False,
        )
        logging.getLogger("activeform").setLevel(getattr(logging, self.settings.log_level, logging.INFO))
        self.configured = True

    def _add_global_context(
        self,
        _logger: WrappedLogger,
        _method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        """向事件字典写入版本与环境维度."""
        if self.settings is not None:
            event_dict.setdefault("app_version", self.settings.app_version)
            event_dict.setdefault("environment", self.settings.environment)
        return event_dict

    def _get_renderer(self) -> Processor:
        if self.settings is not None and self.settings.log_format == "json":
            return structlog.processors.JSONRenderer(ensure_ascii=False)
        return structlog.dev.ConsoleRenderer(colors=False)


structlog_config = StructlogConfig()


def configure_structlog(settings: Settings | None = None, *, force: bool = False) -> None:
    """按给定设置配置 structlog.

    Args:
        settings: 运行时设置,可选.
        force: 是否强制重新配置.

    """
    structlog_config.configure(settings, force=force)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """获取结构化日志记录器.

    只返回惰性代理,不修改全局 structlog 配置;需要本库的输出格式时由调用方显式执行
    ``configure_structlog()``.

    Args:
        name: 日志记录器名称,通常使用模块名.

    Returns:
        绑定的 structlog 日志记录器实例.

    Example:
        >>> logger = get_logger('activeform.forms')
        >>> logger.debug('注册表单字段', column='email')

    """
    return structlog.get_logger(name)


def get_form_logger() -> structlog.stdlib.BoundLogger:
    """返回表单层 logger."""
    return get_logger("activeform.forms")

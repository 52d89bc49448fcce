"""Flask 集成: 从请求构造表单,并把表单校验异常映射为统一错误响应."""

from __future__ import annotations

from collections.abc import Mapping
from http import HTTPStatus
from typing import TypeVar

from flask import Flask, Request, Response, jsonify, request as current_request

from activeform.core.exceptions import AppError, RecordInvalid
from activeform.forms.base import ActiveForm
from activeform.utils.structlog_config import get_logger

logger = get_logger("activeform.web")

FormT = TypeVar("FormT", bound=ActiveForm)


def request_payload(request: Request | None = None) -> dict[str, object]:
    """读取请求体: JSON 优先,否则使用表单数据."""
    req = request if request is not None else current_request
    payload = req.get_json(silent=True)
    if isinstance(payload, Mapping):
        return dict(payload)
    return req.form.to_dict()


def form_from_request(form_class: type[FormT], request: Request | None = None) -> FormT:
    """用当前请求的数据构造表单实例,忽略未声明的字段.

    Args:
        form_class: 目标表单类.
        request: 请求对象,缺省使用 Flask 当前请求.

    Returns:
        未校验的表单实例.

    """
    payload = request_payload(request)
    known = form_class.columns_hash()
    return form_class(**{name: value for name, value in payload.items() if name in known})


def record_invalid_response(error: RecordInvalid) -> tuple[Response, int]:
    """生成表单校验失败的统一错误响应."""
    payload = {
        "success": False,
        "error": True,
        "message": error.message,
        "message_key": error.message_key,
        "errors": error.record.errors.to_dict(),
        "full_messages": error.record.errors.full_messages(),
    }
    return jsonify(payload), HTTPStatus.UNPROCESSABLE_ENTITY


def register_error_handlers(app: Flask) -> None:
    """在 Flask 应用上注册表单异常处理器."""

    @app.errorhandler(RecordInvalid)
    def handle_record_invalid(error: RecordInvalid) -> tuple[Response, int]:
        logger.info(
            "表单校验失败",
            form=type(error.record).__name__,
            path=current_request.path,
            errors=error.record.errors.to_dict(),
        )
        return record_invalid_response(error)

    @app.errorhandler(AppError)
    def handle_app_error(error: AppError) -> tuple[Response, int]:
        logger.error(
            "表单处理异常",
            path=current_request.path,
            message_key=error.message_key,
            category=error.category.value,
            severity=error.severity.value,
        )
        payload = {
            "success": False,
            "error": True,
            "message": error.message,
            "message_key": error.message_key,
        }
        return jsonify(payload), HTTPStatus.BAD_REQUEST

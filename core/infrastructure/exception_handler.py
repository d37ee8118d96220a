"""
统一异常处理器。
将领域异常转换为统一的用例层结果格式。
"""
from loguru import logger

from core.domain.exceptions import (
    AuthorizationException,
    BusinessRuleViolationException,
    DomainException,
    EntityNotFoundException,
    InvalidEntityStateException,
    RepositoryException,
    ValidationException,
)
from core.infrastructure.response import ServiceResult, ServiceResultBuilder, StatusCode


def result_from_exception(exc: Exception) -> ServiceResult:
    """
    统一异常处理器，将领域异常转换为失败结果。

    Args:
        exc: 异常对象

    Returns:
        ServiceResult: 失败结果，错误消息取自异常消息
    """
    if isinstance(exc, EntityNotFoundException):
        return ServiceResultBuilder.fail(str(exc), code=StatusCode.ENTITY_NOT_FOUND)

    elif isinstance(exc, ValidationException):
        return ServiceResultBuilder.fail(str(exc), code=StatusCode.VALIDATION_ERROR)

    elif isinstance(exc, AuthorizationException):
        return ServiceResultBuilder.fail(str(exc), code=StatusCode.FORBIDDEN)

    elif isinstance(exc, InvalidEntityStateException):
        return ServiceResultBuilder.fail(str(exc), code=StatusCode.INVALID_STATE)

    elif isinstance(exc, BusinessRuleViolationException):
        return ServiceResultBuilder.fail(str(exc), code=StatusCode.BUSINESS_RULE_VIOLATION)

    elif isinstance(exc, RepositoryException):
        return ServiceResultBuilder.fail(str(exc), code=StatusCode.DATABASE_ERROR)

    elif isinstance(exc, DomainException):
        return ServiceResultBuilder.fail(str(exc), code=StatusCode.BAD_REQUEST)

    # 未预期的异常不向调用方暴露细节
    logger.error(f"未处理的异常: {exc.__class__.__name__} - {exc}")
    return ServiceResultBuilder.fail("Internal server error", code=StatusCode.SERVER_ERROR)

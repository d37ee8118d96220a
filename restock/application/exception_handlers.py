"""
补货应用层异常处理器。
将补货领域异常转换为带模块状态码的失败结果，其余异常交给统一异常处理器。
"""
from core.infrastructure.exception_handler import result_from_exception
from core.infrastructure.response import ServiceResult, ServiceResultBuilder, StatusCode
from restock.domain.exceptions import (
    DuplicateProductError,
    EmptySessionError,
    ItemNotFoundError,
    ProductNotFoundError,
    SessionClosedError,
    SessionNotFoundError,
    SupplierNotFoundError,
)

# 按顺序匹配，子类必须排在父类之前
_RESTOCK_STATUS_CODES = (
    (SessionClosedError, StatusCode.SESSION_CLOSED),
    (EmptySessionError, StatusCode.SESSION_EMPTY),
    (DuplicateProductError, StatusCode.DUPLICATE_ENTITY),
    (SessionNotFoundError, StatusCode.SESSION_NOT_FOUND),
    (ProductNotFoundError, StatusCode.PRODUCT_NOT_FOUND),
    (SupplierNotFoundError, StatusCode.SUPPLIER_NOT_FOUND),
    (ItemNotFoundError, StatusCode.ITEM_NOT_FOUND),
)


def restock_exception_handler(exc: Exception) -> ServiceResult:
    """
    补货异常处理器，将补货领域异常转换为失败结果。

    Args:
        exc: 异常对象

    Returns:
        ServiceResult: 失败结果
    """
    for exc_type, code in _RESTOCK_STATUS_CODES:
        if isinstance(exc, exc_type):
            return ServiceResultBuilder.fail(str(exc), code=code)
    return result_from_exception(exc)

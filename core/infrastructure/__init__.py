"""
基础设施层包。
提供统一结果封装和异常转换等基础设施组件。
"""

# 统一结果
from core.infrastructure.response import (
    ServiceResult,
    ServiceResultBuilder,
    StatusCode,
    get_status_message,
)

# 异常转换
from core.infrastructure.exception_handler import result_from_exception

__all__ = [
    # 统一结果
    'ServiceResult',
    'ServiceResultBuilder',
    'StatusCode',
    'get_status_message',

    # 异常转换
    'result_from_exception',
]

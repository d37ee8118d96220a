"""
统一结果封装模块。
提供用例层返回结果的标准化结构，包括业务状态码、成功标志、消息、数据等。
"""
import time
import uuid
import typing as t
from dataclasses import dataclass, field


@dataclass
class ServiceResult:
    """用例层返回结果数据结构"""
    code: int = 10000  # 业务状态码
    success: bool = True  # 是否成功
    message: str = "操作成功"  # 响应消息
    data: t.Any = None  # 响应数据
    error: t.Optional[str] = None  # 失败时的错误消息
    timestamp: int = field(default_factory=lambda: int(time.time() * 1000))  # 时间戳，毫秒级
    trace_id: str = field(default_factory=lambda: str(uuid.uuid4()))  # 追踪ID
    metadata: t.Dict[str, t.Any] = field(default_factory=dict)  # 元数据

    def to_dict(self) -> dict:
        """转换为字典"""
        result = {
            "code": self.code,
            "success": self.success,
            "message": self.message,
            "timestamp": self.timestamp,
            "traceId": self.trace_id,
        }

        # 只有在有数据时才添加data字段
        if self.data is not None:
            result["data"] = self.data.to_dict() if hasattr(self.data, "to_dict") else self.data

        if self.error is not None:
            result["error"] = self.error

        # 只有在有元数据时才添加metadata字段
        if self.metadata:
            result["metadata"] = self.metadata

        return result


class ServiceResultBuilder:
    """用例层结果构建器"""

    @staticmethod
    def success(
        data: t.Any = None,
        message: str = "操作成功",
        code: int = 10000,
        metadata: t.Dict[str, t.Any] = None
    ) -> ServiceResult:
        """
        创建成功结果

        Args:
            data: 结果数据
            message: 结果消息
            code: 业务状态码
            metadata: 元数据

        Returns:
            ServiceResult: 成功结果
        """
        return ServiceResult(
            code=code,
            success=True,
            message=message,
            data=data,
            metadata=metadata or {}
        )

    @staticmethod
    def created(
        data: t.Any = None,
        message: str = "创建成功",
        code: int = 10001,
        metadata: t.Dict[str, t.Any] = None
    ) -> ServiceResult:
        """
        创建资源成功结果

        Args:
            data: 结果数据
            message: 结果消息
            code: 业务状态码
            metadata: 元数据

        Returns:
            ServiceResult: 成功结果
        """
        return ServiceResult(
            code=code,
            success=True,
            message=message,
            data=data,
            metadata=metadata or {}
        )

    @staticmethod
    def fail(
        error: str,
        code: int = 50000,
        data: t.Any = None,
        metadata: t.Dict[str, t.Any] = None
    ) -> ServiceResult:
        """
        创建失败结果

        Args:
            error: 错误消息，直接展示给用户
            code: 业务状态码
            data: 错误详情数据
            metadata: 元数据

        Returns:
            ServiceResult: 失败结果
        """
        return ServiceResult(
            code=code,
            success=False,
            message=get_status_message(code),
            data=data,
            error=error,
            metadata=metadata or {}
        )


# 状态码枚举
class StatusCode:
    """业务状态码定义"""

    # 成功状态码 (1xxxx)
    SUCCESS = 10000                # 通用成功
    CREATED = 10001                # 创建成功
    UPDATED = 10002                # 更新成功
    DELETED = 10003                # 删除成功

    # 客户端错误 (4xxxx)
    # 通用客户端错误 (400xx)
    BAD_REQUEST = 40000            # 错误的请求
    VALIDATION_ERROR = 40001       # 数据验证错误

    # 授权错误 (403xx)
    FORBIDDEN = 40300              # 权限不足

    # 资源错误 (404xx)
    NOT_FOUND = 40400              # 资源不存在
    ENTITY_NOT_FOUND = 40401       # 实体不存在
    SESSION_NOT_FOUND = 40402      # 补货会话不存在
    PRODUCT_NOT_FOUND = 40403      # 商品不存在
    SUPPLIER_NOT_FOUND = 40404     # 供应商不存在
    ITEM_NOT_FOUND = 40405         # 会话中不存在该条目

    # 操作冲突 (409xx)
    CONFLICT = 40900               # 资源冲突
    INVALID_STATE = 40901          # 实体状态不允许该操作
    DUPLICATE_ENTITY = 40902       # 实体重复
    BUSINESS_RULE_VIOLATION = 40903  # 违反业务规则

    # 补货模块错误 (412xx)
    SESSION_CLOSED = 41200         # 会话已关闭
    SESSION_EMPTY = 41201          # 会话中没有商品

    # 服务端错误 (5xxxx)
    SERVER_ERROR = 50000           # 服务器内部错误
    DATABASE_ERROR = 50002         # 数据存储错误


# 状态码对应的默认消息
STATUS_MESSAGE_MAPPING = {
    # 成功消息
    StatusCode.SUCCESS: "操作成功",
    StatusCode.CREATED: "创建成功",
    StatusCode.UPDATED: "更新成功",
    StatusCode.DELETED: "删除成功",

    # 客户端错误消息
    StatusCode.BAD_REQUEST: "请求参数错误",
    StatusCode.VALIDATION_ERROR: "数据验证失败",

    # 授权错误
    StatusCode.FORBIDDEN: "权限不足",

    # 资源错误
    StatusCode.NOT_FOUND: "资源不存在",
    StatusCode.ENTITY_NOT_FOUND: "实体不存在",
    StatusCode.SESSION_NOT_FOUND: "补货会话不存在",
    StatusCode.PRODUCT_NOT_FOUND: "商品不存在",
    StatusCode.SUPPLIER_NOT_FOUND: "供应商不存在",
    StatusCode.ITEM_NOT_FOUND: "会话中不存在该商品",

    # 操作冲突
    StatusCode.CONFLICT: "资源冲突",
    StatusCode.INVALID_STATE: "当前状态不允许该操作",
    StatusCode.DUPLICATE_ENTITY: "实体已存在",
    StatusCode.BUSINESS_RULE_VIOLATION: "违反业务规则",

    # 补货模块错误
    StatusCode.SESSION_CLOSED: "补货会话已关闭",
    StatusCode.SESSION_EMPTY: "补货会话中没有商品",

    # 服务端错误
    StatusCode.SERVER_ERROR: "服务器内部错误",
    StatusCode.DATABASE_ERROR: "数据存储错误",
}


def get_status_message(code: int) -> str:
    """
    根据状态码获取对应的消息

    Args:
        code: 业务状态码

    Returns:
        str: 状态消息
    """
    return STATUS_MESSAGE_MAPPING.get(code, "未知状态")

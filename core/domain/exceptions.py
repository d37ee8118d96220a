"""
领域异常模块。
包含领域模型中使用的各种异常类。

所有领域异常都表示业务规则被违反或调用方误用，不属于可重试的临时故障。
异常消息面向最终用户，直接作为错误提示展示。
"""
from typing import Any, Optional


class DomainException(Exception):
    """
    领域异常基类。
    所有领域模型中的异常都应继承自此类。
    """

    def __init__(self, message: str):
        """
        初始化领域异常。

        Args:
            message: 异常消息
        """
        self.message = message
        super().__init__(self.message)


class InvalidEntityStateException(DomainException):
    """
    实体状态无效异常。
    当实体的当前状态不允许执行请求的操作时抛出。
    """

    def __init__(self, entity_name: str, reason: str):
        """
        初始化实体状态无效异常。

        Args:
            entity_name: 实体名称
            reason: 无效原因，作为异常消息
        """
        super().__init__(reason)
        self.entity_name = entity_name
        self.reason = reason


class EntityNotFoundException(DomainException):
    """
    实体未找到异常。
    当请求的实体不存在时抛出。
    """

    def __init__(self, entity_name: str, entity_id: Any, message: Optional[str] = None):
        """
        初始化实体未找到异常。

        Args:
            entity_name: 实体名称
            entity_id: 实体ID
            message: 自定义消息，未提供时使用默认格式
        """
        super().__init__(message or f"{entity_name} with ID {entity_id} not found")
        self.entity_name = entity_name
        self.entity_id = entity_id


class BusinessRuleViolationException(DomainException):
    """
    业务规则违反异常。
    当违反业务规则时抛出。
    """

    def __init__(self, rule_name: str, message: str):
        """
        初始化业务规则违反异常。

        Args:
            rule_name: 规则名称
            message: 异常消息
        """
        super().__init__(message)
        self.rule_name = rule_name


class ValidationException(DomainException):
    """
    数据验证异常。
    当数据验证失败时抛出。
    """

    def __init__(self, field_name: Optional[str] = None, message: str = "Validation failed"):
        """
        初始化数据验证异常。

        Args:
            field_name: 字段名称
            message: 异常消息
        """
        super().__init__(message)
        self.field_name = field_name


class AuthorizationException(DomainException):
    """
    授权异常。
    当用户没有执行操作的权限时抛出。
    """

    def __init__(self, user_id: Any, operation: str, message: Optional[str] = None):
        """
        初始化授权异常。

        Args:
            user_id: 用户ID
            operation: 操作名称
            message: 自定义消息
        """
        super().__init__(message or f"User {user_id} is not allowed to {operation}")
        self.user_id = user_id
        self.operation = operation


class RepositoryException(DomainException):
    """
    仓储异常。
    仓储适配器在加载或保存失败时抛出，由用例层统一转换为失败结果。
    """

    def __init__(self, operation: str, message: str):
        """
        初始化仓储异常。

        Args:
            operation: 失败的仓储操作
            message: 异常消息
        """
        super().__init__(message)
        self.operation = operation

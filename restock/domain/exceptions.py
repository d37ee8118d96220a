"""
补货领域模型中的异常。
定义补货会话生命周期中可能出现的业务错误。
"""
from typing import Any, Optional

from core.domain import (
    AuthorizationException,
    BusinessRuleViolationException,
    EntityNotFoundException,
    InvalidEntityStateException,
    ValidationException,
)


class ValidationError(ValidationException):
    """数量、名称或邮箱等输入不合法"""


class DuplicateProductError(BusinessRuleViolationException):
    """同一商品已经存在于会话中"""

    def __init__(self, product_name: str, product_id: Any = None):
        super().__init__(
            'unique_product_per_session',
            f'Product "{product_name}" is already in this session'
        )
        self.product_name = product_name
        self.product_id = product_id


class InvalidStateError(InvalidEntityStateException):
    """会话当前状态不允许请求的状态流转"""

    def __init__(self, reason: str, status: Any = None):
        super().__init__('RestockSession', reason)
        self.status = status


class SessionClosedError(InvalidStateError):
    """会话已不再是草稿，内容不能再修改"""


class EmptySessionError(BusinessRuleViolationException):
    """会话中没有任何商品"""

    def __init__(self, message: str = 'Cannot generate emails for a session with no items'):
        super().__init__('non_empty_session', message)


class CrossTenantError(AuthorizationException):
    """商品或供应商不属于会话的所有者"""

    def __init__(self, user_id: Any, message: str):
        super().__init__(user_id, 'use records owned by another user', message)


class ItemNotFoundError(EntityNotFoundException):
    """会话中不存在指定商品的条目"""

    def __init__(self, product_id: Any):
        super().__init__(
            'RestockItem',
            product_id,
            f"Product with ID {product_id} is not in this session"
        )
        self.product_id = product_id


class SessionNotFoundError(EntityNotFoundException):
    """会话不存在"""

    def __init__(self, session_id: Any, message: Optional[str] = None):
        super().__init__('Session', session_id, message)
        self.session_id = session_id


class ProductNotFoundError(EntityNotFoundException):
    """商品不存在"""

    def __init__(self, product_id: Any):
        super().__init__('Product', product_id)


class SupplierNotFoundError(EntityNotFoundException):
    """供应商不存在"""

    def __init__(self, supplier_id: Any):
        super().__init__('Supplier', supplier_id)

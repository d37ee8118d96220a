"""
补货领域模型包。
提供补货会话相关的实体、值对象、异常、仓储接口和领域服务。
"""

# 实体
from restock.domain.entities import Product, Supplier, RestockSession, SessionStatus

# 值对象
from restock.domain.value_objects import (
    RestockItem,
    AddItemRequest,
    AddItemResult,
    EmailDraft,
    EmailDraftItem,
    RenderedEmail,
    GroupedSessions,
    SessionSummary,
)

# 领域异常
from restock.domain.exceptions import (
    ValidationError,
    DuplicateProductError,
    InvalidStateError,
    SessionClosedError,
    EmptySessionError,
    CrossTenantError,
    ItemNotFoundError,
    SessionNotFoundError,
    ProductNotFoundError,
    SupplierNotFoundError,
)

# 仓储接口
from restock.domain.repositories import (
    SessionRepository,
    ProductRepository,
    SupplierRepository,
    EmailRenderer,
    IdGenerator,
)

# 领域服务
from restock.domain.services import RestockSessionDomainService

__all__ = [
    # 实体
    'Product',
    'Supplier',
    'RestockSession',
    'SessionStatus',

    # 值对象
    'RestockItem',
    'AddItemRequest',
    'AddItemResult',
    'EmailDraft',
    'EmailDraftItem',
    'RenderedEmail',
    'GroupedSessions',
    'SessionSummary',

    # 领域异常
    'ValidationError',
    'DuplicateProductError',
    'InvalidStateError',
    'SessionClosedError',
    'EmptySessionError',
    'CrossTenantError',
    'ItemNotFoundError',
    'SessionNotFoundError',
    'ProductNotFoundError',
    'SupplierNotFoundError',

    # 仓储接口
    'SessionRepository',
    'ProductRepository',
    'SupplierRepository',
    'EmailRenderer',
    'IdGenerator',

    # 领域服务
    'RestockSessionDomainService',
]

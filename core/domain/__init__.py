"""
领域模型包。
提供实体、值对象、领域异常和仓储接口等领域驱动设计(DDD)的核心概念。
"""

# 基础类
from core.domain.base import Entity
from core.domain.value_objects import ValueObject, EmailAddress

# 领域异常
from core.domain.exceptions import (
    DomainException,
    InvalidEntityStateException,
    EntityNotFoundException,
    BusinessRuleViolationException,
    ValidationException,
    AuthorizationException,
    RepositoryException,
)

# 仓储接口
from core.domain.repositories import Repository

__all__ = [
    # 基础类
    'Entity',
    'ValueObject',
    'EmailAddress',

    # 领域异常
    'DomainException',
    'InvalidEntityStateException',
    'EntityNotFoundException',
    'BusinessRuleViolationException',
    'ValidationException',
    'AuthorizationException',
    'RepositoryException',

    # 仓储接口
    'Repository',
]

"""
补货基础设施层包。
提供仓储的内存实现、邮件模板渲染服务、ID生成器和基础设施工厂。
"""

# 仓储实现
from restock.infrastructure.repositories.memory_repositories import (
    InMemorySessionRepository,
    InMemoryProductRepository,
    InMemorySupplierRepository
)

# 服务实现
from restock.infrastructure.services.template_email_renderer import TemplateEmailRenderer
from restock.infrastructure.id_generator import uuid4_generator, prefixed_id_generator

# 工厂
from restock.infrastructure.factory import RestockInfrastructureFactory

__all__ = [
    # 仓储实现
    'InMemorySessionRepository',
    'InMemoryProductRepository',
    'InMemorySupplierRepository',

    # 服务实现
    'TemplateEmailRenderer',
    'uuid4_generator',
    'prefixed_id_generator',

    # 工厂
    'RestockInfrastructureFactory',
]

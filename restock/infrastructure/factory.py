"""
补货基础设施层工厂。
负责创建和管理基础设施层对象，包括仓储和服务实例，并组装补货应用服务。
"""
from typing import Optional

from restock.application.restock_service import RestockApplicationService
from restock.domain import (
    EmailRenderer,
    IdGenerator,
    ProductRepository,
    RestockSessionDomainService,
    SessionRepository,
    SupplierRepository,
)
from restock.infrastructure.id_generator import uuid4_generator
from restock.infrastructure.repositories.memory_repositories import (
    InMemoryProductRepository,
    InMemorySessionRepository,
    InMemorySupplierRepository,
)
from restock.infrastructure.services.template_email_renderer import TemplateEmailRenderer


class RestockInfrastructureFactory:
    """
    补货基础设施层工厂类。
    负责创建补货领域的基础设施层对象，同一个工厂内的仓储和服务实例只创建一次。
    """

    def __init__(self, id_generator: Optional[IdGenerator] = None, render_emails: bool = True):
        """
        初始化补货基础设施层工厂。

        Args:
            id_generator: ID生成器，默认生成UUID4字符串
            render_emails: 是否创建邮件渲染服务
        """
        self.id_generator = id_generator or uuid4_generator
        self.render_emails = render_emails

        # 存储已创建的实例
        self._session_repository = None
        self._product_repository = None
        self._supplier_repository = None
        self._email_renderer = None
        self._domain_service = None

    def create_session_repository(self) -> SessionRepository:
        """
        创建会话仓储。

        Returns:
            会话仓储实例
        """
        if not self._session_repository:
            self._session_repository = InMemorySessionRepository()

        return self._session_repository

    def create_product_repository(self) -> ProductRepository:
        """
        创建商品仓储。

        Returns:
            商品仓储实例
        """
        if not self._product_repository:
            self._product_repository = InMemoryProductRepository()

        return self._product_repository

    def create_supplier_repository(self) -> SupplierRepository:
        """
        创建供应商仓储。

        Returns:
            供应商仓储实例
        """
        if not self._supplier_repository:
            self._supplier_repository = InMemorySupplierRepository()

        return self._supplier_repository

    def create_email_renderer(self) -> Optional[EmailRenderer]:
        """
        创建邮件渲染服务。

        Returns:
            邮件渲染服务实例，禁用渲染时返回None
        """
        if self.render_emails and not self._email_renderer:
            self._email_renderer = TemplateEmailRenderer()

        return self._email_renderer

    def create_domain_service(self) -> RestockSessionDomainService:
        """
        创建补货会话领域服务。

        Returns:
            领域服务实例
        """
        if not self._domain_service:
            self._domain_service = RestockSessionDomainService(id_generator=self.id_generator)

        return self._domain_service

    def create_application_service(self) -> RestockApplicationService:
        """
        创建补货应用服务。

        Returns:
            组装好依赖的应用服务实例
        """
        return RestockApplicationService(
            domain_service=self.create_domain_service(),
            session_repository=self.create_session_repository(),
            product_repository=self.create_product_repository(),
            supplier_repository=self.create_supplier_repository(),
            id_generator=self.id_generator,
            email_renderer=self.create_email_renderer()
        )

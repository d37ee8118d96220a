"""
补货应用服务。
定义补货会话相关的应用层服务，处理命令和查询，协调领域服务、仓储和邮件渲染服务。
"""
from typing import Any, List, Optional

from loguru import logger

from core.domain import DomainException
from core.infrastructure.response import ServiceResult, ServiceResultBuilder, StatusCode
from restock.application.commands import (
    AddItemCommand,
    AddProductCommand,
    CreateSessionCommand,
    DeleteSessionCommand,
    GenerateEmailsCommand,
    MarkAsSentCommand,
    RemoveProductCommand,
    ReplaySessionCommand,
    UpdateItemCommand,
    UpdateSessionNameCommand,
)
from restock.application.dtos import (
    EmailDraftDTO,
    GeneratedEmailsDTO,
    SessionDTO,
    SessionListDTO,
    SessionSummaryDTO,
)
from restock.application.exception_handlers import restock_exception_handler
from restock.application.queries import GetSessionQuery, GetUserSessionsQuery
from restock.domain.entities import RestockSession
from restock.domain.exceptions import (
    CrossTenantError,
    ProductNotFoundError,
    SessionNotFoundError,
    SupplierNotFoundError,
    ValidationError,
)
from restock.domain.repositories import (
    EmailRenderer,
    IdGenerator,
    ProductRepository,
    SessionRepository,
    SupplierRepository,
)
from restock.domain.services import RestockSessionDomainService
from restock.domain.value_objects import AddItemRequest


class RestockApplicationService:
    """
    补货应用服务。
    处理补货会话相关的应用层逻辑，协调领域服务和仓储。

    所有方法都返回ServiceResult：领域异常被转换为失败结果，其他异常记录后继续抛出。
    """

    def __init__(
        self,
        domain_service: RestockSessionDomainService,
        session_repository: SessionRepository,
        product_repository: ProductRepository,
        supplier_repository: SupplierRepository,
        id_generator: IdGenerator,
        email_renderer: Optional[EmailRenderer] = None
    ):
        """
        初始化补货应用服务。

        Args:
            domain_service: 补货会话领域服务
            session_repository: 会话仓储
            product_repository: 商品仓储
            supplier_repository: 供应商仓储
            id_generator: 会话ID生成器
            email_renderer: 邮件渲染服务，未配置时只返回结构化草稿
        """
        self.domain_service = domain_service
        self.session_repository = session_repository
        self.product_repository = product_repository
        self.supplier_repository = supplier_repository
        self.id_generator = id_generator
        self.email_renderer = email_renderer

    async def _load_session(
        self,
        session_id: Any,
        user_id: Any,
        forbidden_message: str = 'Session does not belong to the current user'
    ) -> RestockSession:
        """
        加载会话并检查所有者。

        Args:
            session_id: 会话ID
            user_id: 当前用户ID
            forbidden_message: 会话属于其他用户时的错误消息

        Returns:
            会话实体

        Raises:
            ValidationError: 未提供会话ID
            SessionNotFoundError: 会话不存在
            CrossTenantError: 会话属于其他用户
        """
        if not session_id:
            raise ValidationError('session_id', 'Session ID is required')

        session = await self.session_repository.find_by_id(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        if session.user_id != user_id:
            raise CrossTenantError(user_id, forbidden_message)
        return session

    @staticmethod
    def _fail(action: str, exc: DomainException) -> ServiceResult:
        logger.warning(f"{action}: {exc}")
        return restock_exception_handler(exc)

    # ==================== 命令处理方法 ====================

    async def create_session(self, command: CreateSessionCommand) -> ServiceResult:
        """
        创建补货会话。

        Args:
            command: 创建会话命令

        Returns:
            包含会话DTO的结果
        """
        try:
            session = self.domain_service.create_session(
                id=self.id_generator(),
                user_id=command.user_id,
                name=command.name
            )
            await self.session_repository.save(session)
            logger.info(f"创建补货会话: {session.id} ({session.name})")
            return ServiceResultBuilder.created(SessionDTO.from_entity(session))
        except DomainException as e:
            return self._fail("创建补货会话失败", e)
        except Exception as e:
            logger.error(f"创建补货会话失败: {e}")
            raise

    async def delete_session(self, command: DeleteSessionCommand) -> ServiceResult:
        """
        删除补货会话。

        Args:
            command: 删除会话命令

        Returns:
            不含数据的结果
        """
        try:
            session = await self._load_session(command.session_id, command.user_id)
            await self.session_repository.delete(session.id)
            logger.info(f"删除补货会话: {session.id}")
            return ServiceResultBuilder.success(message="删除成功", code=StatusCode.DELETED)
        except DomainException as e:
            return self._fail("删除补货会话失败", e)
        except Exception as e:
            logger.error(f"删除补货会话失败: {e}")
            raise

    async def add_item(self, command: AddItemCommand) -> ServiceResult:
        """
        按名称向会话添加条目。
        领域服务新建的供应商和商品会先于会话保存。

        Args:
            command: 添加条目命令

        Returns:
            包含更新后会话DTO的结果
        """
        try:
            session = await self._load_session(command.session_id, command.user_id)
            known_products = await self.product_repository.find_by_user_id(session.user_id)
            known_suppliers = await self.supplier_repository.find_by_user_id(session.user_id)

            result = self.domain_service.add_item_to_session(
                session,
                AddItemRequest(
                    product_name=command.product_name,
                    quantity=command.quantity,
                    supplier_name=command.supplier_name,
                    supplier_email=command.supplier_email,
                    notes=command.notes
                ),
                known_products=known_products,
                known_suppliers=known_suppliers
            )

            if result.new_supplier is not None:
                await self.supplier_repository.save(result.new_supplier)
                logger.info(f"新建供应商: {result.new_supplier.id} ({result.new_supplier.name})")
            if result.new_product is not None:
                await self.product_repository.save(result.new_product)
                logger.info(f"新建商品: {result.new_product.id} ({result.new_product.name})")

            await self.session_repository.save(result.session)
            return ServiceResultBuilder.success(SessionDTO.from_entity(result.session))
        except DomainException as e:
            return self._fail("添加补货条目失败", e)
        except Exception as e:
            logger.error(f"添加补货条目失败: {e}")
            raise

    async def add_product(self, command: AddProductCommand) -> ServiceResult:
        """
        将已有商品添加到会话。

        Args:
            command: 添加商品命令

        Returns:
            包含更新后会话DTO的结果
        """
        try:
            session = await self._load_session(command.session_id, command.user_id)

            product = await self.product_repository.find_by_id(command.product_id)
            if product is None:
                raise ProductNotFoundError(command.product_id)
            supplier = await self.supplier_repository.find_by_id(command.supplier_id)
            if supplier is None:
                raise SupplierNotFoundError(command.supplier_id)

            updated = self.domain_service.add_product_to_session(
                session, product, supplier, command.quantity, command.notes
            )
            await self.session_repository.save(updated)
            return ServiceResultBuilder.success(SessionDTO.from_entity(updated))
        except DomainException as e:
            return self._fail("添加商品失败", e)
        except Exception as e:
            logger.error(f"添加商品失败: {e}")
            raise

    async def remove_product(self, command: RemoveProductCommand) -> ServiceResult:
        """
        从会话移除商品。

        Args:
            command: 移除商品命令

        Returns:
            包含更新后会话DTO的结果
        """
        try:
            session = await self._load_session(command.session_id, command.user_id)
            updated = self.domain_service.remove_item_from_session(session, command.product_id)
            if updated is not session:
                await self.session_repository.save(updated)
            return ServiceResultBuilder.success(SessionDTO.from_entity(updated))
        except DomainException as e:
            return self._fail("移除商品失败", e)
        except Exception as e:
            logger.error(f"移除商品失败: {e}")
            raise

    async def update_item(self, command: UpdateItemCommand) -> ServiceResult:
        """
        更新会话条目的数量或备注。

        Args:
            command: 更新条目命令

        Returns:
            包含更新后会话DTO的结果
        """
        try:
            session = await self._load_session(command.session_id, command.user_id)
            updated = self.domain_service.update_item_in_session(
                session, command.product_id, quantity=command.quantity, notes=command.notes
            )
            await self.session_repository.save(updated)
            return ServiceResultBuilder.success(SessionDTO.from_entity(updated), code=StatusCode.UPDATED)
        except DomainException as e:
            return self._fail("更新补货条目失败", e)
        except Exception as e:
            logger.error(f"更新补货条目失败: {e}")
            raise

    async def update_session_name(self, command: UpdateSessionNameCommand) -> ServiceResult:
        """
        修改会话名称，未提供会话ID时以该名称创建新会话。

        Args:
            command: 修改会话名称命令

        Returns:
            包含会话DTO的结果
        """
        try:
            if command.session_id:
                session = await self._load_session(
                    command.session_id,
                    command.user_id,
                    forbidden_message='You can only rename your own sessions'
                )
            else:
                session = self.domain_service.create_session(
                    id=self.id_generator(),
                    user_id=command.user_id
                )
                logger.info(f"修改名称时创建新会话: {session.id}")

            renamed = self.domain_service.rename_session(session, command.name)
            await self.session_repository.save(renamed)
            return ServiceResultBuilder.success(SessionDTO.from_entity(renamed), code=StatusCode.UPDATED)
        except DomainException as e:
            return self._fail("修改会话名称失败", e)
        except Exception as e:
            logger.error(f"修改会话名称失败: {e}")
            raise

    async def generate_emails(self, command: GenerateEmailsCommand) -> ServiceResult:
        """
        生成邮件。
        将会话标记为已生成邮件，按供应商生成草稿，配置了渲染服务时同时生成主题和正文。
        渲染全部成功后才保存会话。

        Args:
            command: 生成邮件命令

        Returns:
            包含会话DTO和邮件DTO列表的结果
        """
        try:
            session = await self._load_session(command.session_id, command.user_id)
            ready = self.domain_service.mark_session_ready_for_emails(session)
            drafts = self.domain_service.generate_email_drafts(
                ready,
                store_name=command.store_name,
                sender_name=command.sender_name,
                sender_email=command.sender_email
            )

            emails: List[EmailDraftDTO] = []
            for draft in drafts:
                rendered = await self.email_renderer.render(draft) if self.email_renderer else None
                emails.append(EmailDraftDTO.from_draft(draft, rendered))

            await self.session_repository.save(ready)
            logger.info(f"补货会话 {ready.id} 已生成 {len(emails)} 封邮件")
            return ServiceResultBuilder.success(GeneratedEmailsDTO(SessionDTO.from_entity(ready), emails))
        except DomainException as e:
            return self._fail("生成邮件失败", e)
        except Exception as e:
            logger.error(f"生成邮件失败: {e}")
            raise

    async def mark_as_sent(self, command: MarkAsSentCommand) -> ServiceResult:
        """
        将会话标记为已发送。

        Args:
            command: 标记已发送命令

        Returns:
            包含会话DTO的结果
        """
        try:
            session = await self._load_session(command.session_id, command.user_id)
            completed = self.domain_service.mark_session_completed(session)
            await self.session_repository.save(completed)
            logger.info(f"补货会话 {completed.id} 已发送")
            return ServiceResultBuilder.success(SessionDTO.from_entity(completed), code=StatusCode.UPDATED)
        except DomainException as e:
            return self._fail("标记会话已发送失败", e)
        except Exception as e:
            logger.error(f"标记会话已发送失败: {e}")
            raise

    async def replay_session(self, command: ReplaySessionCommand) -> ServiceResult:
        """
        以已发送的会话为模板创建新的草稿会话。

        Args:
            command: 复制会话命令

        Returns:
            包含新会话DTO的结果
        """
        try:
            original = await self._load_session(command.session_id, command.user_id)
            replay = self.domain_service.create_replay_session(
                original,
                new_session_id=self.id_generator(),
                adjust_quantities=command.adjust_quantities,
                quantity_multiplier=command.quantity_multiplier
            )
            await self.session_repository.save(replay)
            logger.info(f"复制补货会话: {original.id} -> {replay.id}")
            return ServiceResultBuilder.created(SessionDTO.from_entity(replay))
        except DomainException as e:
            return self._fail("复制补货会话失败", e)
        except Exception as e:
            logger.error(f"复制补货会话失败: {e}")
            raise

    # ==================== 查询处理方法 ====================

    async def get_session(self, query: GetSessionQuery) -> ServiceResult:
        """
        获取单个会话。

        Args:
            query: 获取会话查询

        Returns:
            包含会话DTO的结果，会话不存在时返回失败结果
        """
        try:
            session = await self._load_session(query.session_id, query.user_id)
            return ServiceResultBuilder.success(SessionDTO.from_entity(session))
        except DomainException as e:
            return self._fail("获取补货会话失败", e)
        except Exception as e:
            logger.error(f"获取补货会话失败: {e}")
            raise

    async def get_user_sessions(self, query: GetUserSessionsQuery) -> ServiceResult:
        """
        获取用户的会话列表，按状态分组。

        Args:
            query: 用户会话列表查询

        Returns:
            包含会话列表DTO的结果
        """
        try:
            if query.include_completed:
                sessions = await self.session_repository.find_by_user_id(query.user_id)
            else:
                sessions = await self.session_repository.find_unfinished_by_user_id(query.user_id)

            if query.limit is not None:
                sessions = sessions[:query.limit]

            grouped = self.domain_service.group_sessions_by_status(sessions)
            return ServiceResultBuilder.success(SessionListDTO.from_grouped(grouped, sessions))
        except DomainException as e:
            return self._fail("获取会话列表失败", e)
        except Exception as e:
            logger.error(f"获取会话列表失败: {e}")
            raise

    async def get_session_summary(self, query: GetSessionQuery) -> ServiceResult:
        """
        获取会话统计摘要。

        Args:
            query: 获取会话查询

        Returns:
            包含摘要DTO的结果
        """
        try:
            session = await self._load_session(query.session_id, query.user_id)
            summary = self.domain_service.calculate_session_summary(session)
            return ServiceResultBuilder.success(SessionSummaryDTO.from_summary(session.id, summary))
        except DomainException as e:
            return self._fail("获取会话摘要失败", e)
        except Exception as e:
            logger.error(f"获取会话摘要失败: {e}")
            raise

"""
补货领域模型中的服务。
定义补货会话生命周期的业务规则：状态流转是否合法、条目去重，以及按供应商分组生成邮件草稿。

领域服务是无状态的规则引擎，每个方法都是从(旧会话, 输入)到(新会话 | 异常)的纯函数，
不访问仓储，也不做任何I/O。
"""
from dataclasses import replace
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from restock.domain.config import (
    DEFAULT_SENDER_NAME,
    DEFAULT_SESSION_NAME_PREFIX,
    DEFAULT_STORE_NAME,
    REPLAY_SESSION_SUFFIX,
    SESSION_NAME_MAX_LENGTH,
)
from restock.domain.entities import Product, RestockSession, SessionStatus, Supplier, utcnow
from restock.domain.exceptions import (
    CrossTenantError,
    DuplicateProductError,
    EmptySessionError,
    InvalidStateError,
    SessionClosedError,
    ValidationError,
)
from restock.domain.repositories import IdGenerator
from restock.domain.value_objects import (
    AddItemRequest,
    AddItemResult,
    EmailDraft,
    EmailDraftItem,
    GroupedSessions,
    RestockItem,
    SessionSummary,
    clean_notes,
    validate_quantity,
    validate_required_text,
    validate_supplier_email,
)


class RestockSessionDomainService:
    """
    补货会话领域服务。
    是判断状态流转、条目去重和分组规则的唯一位置，也是唯一允许在添加条目时新建商品和供应商记录的地方。
    """

    def __init__(
        self,
        id_generator: IdGenerator,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """
        初始化补货会话领域服务。

        Args:
            id_generator: 生成新商品和供应商ID的函数
            clock: 返回当前时间的函数，用于设置updated_at
        """
        self.id_generator = id_generator
        self.clock = clock or utcnow

    # ==================== 会话创建 ====================

    def create_session(
        self,
        id: str,
        user_id: str,
        name: Optional[str] = None,
        created_at: Optional[datetime] = None
    ) -> RestockSession:
        """
        创建新的草稿会话。

        Args:
            id: 会话ID，由用例层生成
            user_id: 所属用户ID
            name: 会话名称，未提供时使用"Restock Session <ISO日期>"
            created_at: 创建时间

        Returns:
            空的草稿会话
        """
        return RestockSession.create(
            id=id,
            user_id=user_id,
            name=name,
            created_at=created_at or self.clock(),
        )

    # ==================== 条目操作 ====================

    def add_item_to_session(
        self,
        session: RestockSession,
        request: AddItemRequest,
        known_products: Sequence[Product] = (),
        known_suppliers: Sequence[Supplier] = ()
    ) -> AddItemResult:
        """
        按名称向会话添加条目，必要时新建商品和供应商。

        校验顺序固定为：会话状态、数量、商品名、供应商名、供应商邮箱，只报告第一个错误。
        商品按去除首尾空白后区分大小写的名称匹配；供应商按名称和规范化后的邮箱同时匹配。

        Args:
            session: 当前会话
            request: 添加请求
            known_products: 用户已有的商品
            known_suppliers: 用户已有的供应商

        Returns:
            添加结果，新建的商品和供应商需要由用例层持久化

        Raises:
            SessionClosedError: 会话不是草稿状态
            ValidationError: 数量、名称或邮箱不合法
            DuplicateProductError: 商品已在会话中
        """
        if not session.can_add_items():
            raise SessionClosedError('Cannot add items to a completed session', session.status)

        quantity = validate_quantity(request.quantity)
        product_name = validate_required_text(
            request.product_name, 'product_name', 'Product name cannot be empty'
        )
        supplier_name = validate_required_text(
            request.supplier_name, 'supplier_name', 'Supplier name cannot be empty'
        )
        supplier_email = validate_supplier_email(request.supplier_email)

        product = self._find_product(session, product_name, known_products)
        supplier = self._find_supplier(session, supplier_name, supplier_email, known_suppliers)

        # 目录中没有该商品时，会话里同名的条目也视为同一商品
        if product is None:
            existing_item = session.find_item_by_product_name(product_name)
            if existing_item is not None:
                raise DuplicateProductError(product_name, existing_item.product_id)
        elif session.has_product(product.id):
            raise DuplicateProductError(product_name, product.id)

        new_supplier = None
        if supplier is None:
            supplier = new_supplier = Supplier(
                id=self.id_generator(),
                user_id=session.user_id,
                name=supplier_name,
                email=supplier_email,
                created_at=self.clock(),
            )

        new_product = None
        if product is None:
            product = new_product = Product(
                id=self.id_generator(),
                user_id=session.user_id,
                name=product_name,
                default_quantity=quantity,
                default_supplier_id=supplier.id,
                created_at=self.clock(),
            )

        item = self._build_item(product, supplier, quantity, request.notes)
        return AddItemResult(
            session=session.add_item(item, updated_at=self.clock()),
            item=item,
            new_product=new_product,
            new_supplier=new_supplier,
        )

    def add_product_to_session(
        self,
        session: RestockSession,
        product: Product,
        supplier: Supplier,
        quantity: int,
        notes: Optional[str] = None
    ) -> RestockSession:
        """
        将已存在的商品和供应商添加到会话。

        Args:
            session: 当前会话
            product: 已存在的商品
            supplier: 已存在的供应商
            quantity: 补货数量
            notes: 备注

        Returns:
            添加条目后的新会话

        Raises:
            SessionClosedError: 会话不是草稿状态
            CrossTenantError: 商品或供应商不属于会话所有者
            ValidationError: 数量不合法
            DuplicateProductError: 商品已在会话中
        """
        if not session.can_add_items():
            raise SessionClosedError('Cannot add items to a completed session', session.status)
        if product.user_id != session.user_id:
            raise CrossTenantError(session.user_id, 'Product does not belong to the current user')
        if supplier.user_id != session.user_id:
            raise CrossTenantError(session.user_id, 'Supplier does not belong to the current user')

        quantity = validate_quantity(quantity)
        if session.has_product(product.id):
            raise DuplicateProductError(product.name, product.id)

        item = self._build_item(product, supplier, quantity, notes)
        return session.add_item(item, updated_at=self.clock())

    def remove_item_from_session(self, session: RestockSession, product_id: str) -> RestockSession:
        """
        从会话中移除条目，商品不在会话中时原样返回。

        Raises:
            SessionClosedError: 会话不是草稿状态
        """
        self._ensure_editable(session)
        return session.remove_item(product_id, updated_at=self.clock())

    def update_item_in_session(
        self,
        session: RestockSession,
        product_id: str,
        quantity: Optional[int] = None,
        notes: Optional[str] = None
    ) -> RestockSession:
        """
        更新会话中条目的数量或备注。

        Args:
            session: 当前会话
            product_id: 商品ID
            quantity: 新数量，None表示不修改
            notes: 新备注，None表示不修改

        Returns:
            更新后的新会话

        Raises:
            SessionClosedError: 会话不是草稿状态
            ItemNotFoundError: 会话中不存在该商品
            ValidationError: 数量不合法
        """
        self._ensure_editable(session)

        updates = {}
        if quantity is not None:
            updates['quantity'] = quantity
        if notes is not None:
            updates['notes'] = notes
        return session.update_item(product_id, updated_at=self.clock(), **updates)

    def rename_session(self, session: RestockSession, name: str) -> RestockSession:
        """
        修改会话名称。

        Raises:
            SessionClosedError: 会话已发送
            ValidationError: 名称为空
        """
        return session.set_name(name, updated_at=self.clock())

    # ==================== 状态流转 ====================

    def mark_session_ready_for_emails(self, session: RestockSession) -> RestockSession:
        """
        将会话标记为已生成邮件。

        Raises:
            InvalidStateError: 会话不是草稿状态
            EmptySessionError: 会话中没有条目
        """
        if session.status is not SessionStatus.DRAFT:
            raise InvalidStateError('Session is not in draft status', session.status)
        if session.is_empty():
            raise EmptySessionError()
        return session.generate_emails(updated_at=self.clock())

    def mark_session_completed(self, session: RestockSession) -> RestockSession:
        """
        将会话标记为已发送。

        Raises:
            InvalidStateError: 会话不是已生成邮件状态
        """
        if session.status is not SessionStatus.EMAIL_GENERATED:
            raise InvalidStateError(
                'Session must be ready for emails before marking as completed', session.status
            )
        return session.mark_completed(updated_at=self.clock())

    # ==================== 邮件草稿与分组 ====================

    def generate_email_drafts(
        self,
        session: RestockSession,
        store_name: Optional[str] = None,
        sender_name: Optional[str] = None,
        sender_email: Optional[str] = None
    ) -> List[EmailDraft]:
        """
        按供应商分组生成邮件草稿。

        分组按供应商在会话条目中首次出现的顺序排列，每个供应商一份草稿。
        这里只生成结构化数据，正文由外部渲染服务生成。

        Args:
            session: 已生成邮件状态的会话
            store_name: 店铺名称
            sender_name: 发件人名称
            sender_email: 发件人邮箱

        Returns:
            邮件草稿列表

        Raises:
            InvalidStateError: 会话不是已生成邮件状态
        """
        if session.status is not SessionStatus.EMAIL_GENERATED:
            raise InvalidStateError(
                'Session must be ready for emails before generating content', session.status
            )

        store_name = (store_name or '').strip() or DEFAULT_STORE_NAME
        sender_name = (sender_name or '').strip() or DEFAULT_SENDER_NAME
        sender_email = (sender_email or '').strip() or None

        groups: Dict[str, List[RestockItem]] = {}
        for item in session.items:
            groups.setdefault(item.supplier_id, []).append(item)

        drafts = []
        for supplier_id, items in groups.items():
            first = items[0]
            drafts.append(EmailDraft(
                supplier_id=supplier_id,
                supplier_name=first.supplier_name,
                supplier_email=first.supplier_email,
                items=tuple(
                    EmailDraftItem(product_name=item.product_name, quantity=item.quantity, notes=item.notes)
                    for item in items
                ),
                store_name=store_name,
                sender_name=sender_name,
                sender_email=sender_email,
            ))
        return drafts

    def group_sessions_by_status(self, sessions: Iterable[RestockSession]) -> GroupedSessions:
        """
        按状态将会话分为三组，每组内保持输入顺序。

        Args:
            sessions: 会话集合

        Returns:
            分组结果
        """
        buckets: Dict[SessionStatus, List[RestockSession]] = {status: [] for status in SessionStatus}
        for session in sessions:
            buckets[session.status].append(session)

        return GroupedSessions(
            draft=tuple(buckets[SessionStatus.DRAFT]),
            email_generated=tuple(buckets[SessionStatus.EMAIL_GENERATED]),
            sent=tuple(buckets[SessionStatus.SENT]),
        )

    # ==================== 统计与复制 ====================

    def calculate_session_summary(self, session: RestockSession) -> SessionSummary:
        """计算会话统计摘要"""
        return SessionSummary(
            total_quantity=session.total_quantity(),
            total_products=len(session.items),
            supplier_count=session.unique_supplier_count(),
            status=session.status,
            is_empty=session.is_empty(),
            can_generate_emails=session.can_generate_emails(),
            can_send_emails=session.can_send_emails(),
        )

    def find_replayable_sessions(self, sessions: Iterable[RestockSession]) -> List[RestockSession]:
        """查找可以复制的会话：已发送且包含条目"""
        return [session for session in sessions if session.is_completed() and not session.is_empty()]

    def create_replay_session(
        self,
        original: RestockSession,
        new_session_id: str,
        adjust_quantities: bool = False,
        quantity_multiplier: float = 1.0
    ) -> RestockSession:
        """
        以已发送的会话为模板创建新的草稿会话。

        Args:
            original: 已发送的原会话
            new_session_id: 新会话ID
            adjust_quantities: 是否按倍数调整数量
            quantity_multiplier: 数量倍数，调整后四舍五入且至少为1

        Returns:
            包含原会话所有条目的新草稿会话

        Raises:
            InvalidStateError: 原会话未发送
            ValidationError: 倍数不是正数
        """
        if not original.is_completed():
            raise InvalidStateError('Can only replay completed sessions', original.status)
        if adjust_quantities and quantity_multiplier <= 0:
            raise ValidationError('quantity_multiplier', 'Quantity multiplier must be greater than zero')

        base_name = original.name or DEFAULT_SESSION_NAME_PREFIX
        base_name = base_name[:SESSION_NAME_MAX_LENGTH - len(REPLAY_SESSION_SUFFIX) - 1]
        replay = self.create_session(
            id=new_session_id,
            user_id=original.user_id,
            name=f"{base_name} {REPLAY_SESSION_SUFFIX}",
        )

        multiplier = Decimal(str(quantity_multiplier))
        for item in original.items:
            quantity = item.quantity
            if adjust_quantities:
                scaled = (Decimal(item.quantity) * multiplier).quantize(Decimal('1'), rounding=ROUND_HALF_UP)
                quantity = max(1, int(scaled))
            replay = replay.add_item(replace(item, quantity=quantity), updated_at=self.clock())
        return replay

    # ==================== 内部方法 ====================

    @staticmethod
    def _ensure_editable(session: RestockSession) -> None:
        if not session.can_add_items():
            raise SessionClosedError('Cannot modify a completed session', session.status)

    @staticmethod
    def _find_product(
        session: RestockSession,
        product_name: str,
        known_products: Sequence[Product]
    ) -> Optional[Product]:
        for product in known_products or ():
            if product.user_id == session.user_id and product.name == product_name:
                return product
        return None

    @staticmethod
    def _find_supplier(
        session: RestockSession,
        supplier_name: str,
        supplier_email: str,
        known_suppliers: Sequence[Supplier]
    ) -> Optional[Supplier]:
        for supplier in known_suppliers or ():
            if (
                supplier.user_id == session.user_id
                and supplier.name == supplier_name
                and supplier.email == supplier_email
            ):
                return supplier

        # 同一会话中已使用过的供应商沿用其ID
        for item in session.items:
            if item.supplier_name == supplier_name and item.supplier_email == supplier_email:
                return Supplier(
                    id=item.supplier_id,
                    user_id=session.user_id,
                    name=item.supplier_name,
                    email=item.supplier_email,
                )
        return None

    @staticmethod
    def _build_item(
        product: Product,
        supplier: Supplier,
        quantity: int,
        notes: Optional[str]
    ) -> RestockItem:
        return RestockItem(
            product_id=product.id,
            product_name=product.name,
            quantity=quantity,
            supplier_id=supplier.id,
            supplier_name=supplier.name,
            supplier_email=supplier.email,
            notes=clean_notes(notes),
        )

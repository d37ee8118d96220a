"""
补货领域模型中的实体。
包含商品、供应商和补货会话实体的定义。

所有实体都是不可变记录，修改操作返回新实例，调用方始终持有修改前后的两个值。
"""
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from core.domain import Entity
from restock.domain.config import (
    DEFAULT_SESSION_NAME_PREFIX,
    PRODUCT_NAME_MAX_LENGTH,
    SESSION_NAME_MAX_LENGTH,
)
from restock.domain.exceptions import (
    DuplicateProductError,
    EmptySessionError,
    InvalidStateError,
    ItemNotFoundError,
    SessionClosedError,
    ValidationError,
)
from restock.domain.value_objects import (
    RestockItem,
    clean_notes,
    validate_required_text,
    validate_supplier_email,
)


def utcnow() -> datetime:
    """返回带时区的当前UTC时间"""
    return datetime.now(timezone.utc)


def _require_id(value: Any, message: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(None, message)
    return value


def _parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


def _format_datetime(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


class SessionStatus(str, Enum):
    """补货会话状态枚举"""
    DRAFT = "draft"                        # 草稿，唯一允许编辑条目的状态
    EMAIL_GENERATED = "email_generated"    # 已生成邮件，等待发送
    SENT = "sent"                          # 已发送，终态

    @property
    def next_status(self) -> Optional['SessionStatus']:
        """
        获取允许流转到的下一个状态。

        Returns:
            下一个状态，终态返回None
        """
        return _STATUS_TRANSITIONS[self]

    def can_transition_to(self, target: 'SessionStatus') -> bool:
        """
        检查是否可以流转到目标状态。状态只能向前推进一步，不能回退。

        Args:
            target: 目标状态

        Returns:
            允许流转返回True，否则返回False
        """
        return self.next_status is target


_STATUS_TRANSITIONS: Dict[SessionStatus, Optional[SessionStatus]] = {
    SessionStatus.DRAFT: SessionStatus.EMAIL_GENERATED,
    SessionStatus.EMAIL_GENERATED: SessionStatus.SENT,
    SessionStatus.SENT: None,
}


@dataclass(frozen=True, eq=False)
class Product(Entity):
    """
    商品实体。
    代表用户目录中可以补货的商品，只属于一个用户。
    """
    user_id: str
    name: str
    default_quantity: int = 1
    default_supplier_id: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        _require_id(self.id, 'Product ID is required')
        _require_id(self.user_id, 'User ID is required')
        name = validate_required_text(self.name, 'name', 'Product name cannot be empty')
        if len(name) > PRODUCT_NAME_MAX_LENGTH:
            raise ValidationError('name', f'Product name cannot exceed {PRODUCT_NAME_MAX_LENGTH} characters')
        if isinstance(self.default_quantity, bool) or not isinstance(self.default_quantity, int) \
                or self.default_quantity <= 0:
            raise ValidationError('default_quantity', 'Default quantity must be greater than zero')
        object.__setattr__(self, 'name', name)
        object.__setattr__(self, 'notes', clean_notes(self.notes))

    def update_name(self, name: str) -> 'Product':
        """返回更新了名称的新商品"""
        return self._copy_with(name=name)

    def update_default_quantity(self, quantity: int) -> 'Product':
        """返回更新了默认补货数量的新商品"""
        return self._copy_with(default_quantity=quantity)

    def update_default_supplier(self, supplier_id: Optional[str] = None) -> 'Product':
        """返回更新了默认供应商的新商品"""
        return self._copy_with(default_supplier_id=supplier_id)

    def has_default_supplier(self) -> bool:
        return bool(self.default_supplier_id)

    def matches(self, search_term: str) -> bool:
        """
        检查商品名称是否包含搜索词，忽略大小写。

        Args:
            search_term: 搜索词

        Returns:
            匹配返回True，否则返回False
        """
        return search_term.lower() in self.name.lower()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "default_quantity": self.default_quantity,
            "default_supplier_id": self.default_supplier_id,
            "notes": self.notes,
            "created_at": _format_datetime(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Product':
        return cls(
            id=data['id'],
            user_id=data['user_id'],
            name=data['name'],
            default_quantity=data.get('default_quantity', 1),
            default_supplier_id=data.get('default_supplier_id'),
            notes=data.get('notes'),
            created_at=_parse_datetime(data.get('created_at')) or utcnow(),
        )


@dataclass(frozen=True, eq=False)
class Supplier(Entity):
    """
    供应商实体。
    代表用户的供货联系人，只属于一个用户。邮箱保存为小写形式。
    """
    user_id: str
    name: str
    email: str
    phone: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        _require_id(self.id, 'Supplier ID is required')
        _require_id(self.user_id, 'User ID is required')
        object.__setattr__(
            self, 'name', validate_required_text(self.name, 'name', 'Supplier name cannot be empty')
        )
        object.__setattr__(self, 'email', validate_supplier_email(self.email))
        object.__setattr__(self, 'phone', clean_notes(self.phone))
        object.__setattr__(self, 'notes', clean_notes(self.notes))

    def update_name(self, name: str) -> 'Supplier':
        return self._copy_with(name=name)

    def update_email(self, email: str) -> 'Supplier':
        return self._copy_with(email=email)

    def update_phone(self, phone: Optional[str] = None) -> 'Supplier':
        return self._copy_with(phone=phone)

    def update_notes(self, notes: Optional[str] = None) -> 'Supplier':
        return self._copy_with(notes=notes)

    def matches(self, search_term: str) -> bool:
        """
        检查名称、邮箱或电话是否包含搜索词，名称和邮箱忽略大小写。

        Args:
            search_term: 搜索词

        Returns:
            匹配返回True，否则返回False
        """
        term = search_term.lower()
        return (
            term in self.name.lower()
            or term in self.email
            or (self.phone is not None and search_term in self.phone)
        )

    def has_phone(self) -> bool:
        return bool(self.phone)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "notes": self.notes,
            "created_at": _format_datetime(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Supplier':
        return cls(
            id=data['id'],
            user_id=data['user_id'],
            name=data['name'],
            email=data['email'],
            phone=data.get('phone'),
            notes=data.get('notes'),
            created_at=_parse_datetime(data.get('created_at')) or utcnow(),
        )


@dataclass(frozen=True, eq=False)
class RestockSession(Entity):
    """
    补货会话实体（聚合根）。
    由有序的补货条目和生命周期状态组成，状态只能按
    DRAFT -> EMAIL_GENERATED -> SENT 的顺序推进。

    会话中每个商品最多只有一个条目，这一规则在添加条目时检查。
    所有修改操作都返回新的会话，失败的操作不会改变原会话。
    """
    user_id: str
    name: str
    status: SessionStatus = SessionStatus.DRAFT
    items: Tuple[RestockItem, ...] = ()
    created_at: datetime = field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        _require_id(self.id, 'Session ID is required')
        _require_id(self.user_id, 'User ID is required')
        if self.name is not None and len(self.name) > SESSION_NAME_MAX_LENGTH:
            raise ValidationError('name', f'Session name cannot exceed {SESSION_NAME_MAX_LENGTH} characters')
        object.__setattr__(self, 'status', SessionStatus(self.status))
        object.__setattr__(self, 'items', tuple(self.items))
        if self.updated_at is None:
            object.__setattr__(self, 'updated_at', self.created_at)

    @classmethod
    def create(
        cls,
        id: str,
        user_id: str,
        name: Optional[str] = None,
        created_at: Optional[datetime] = None
    ) -> 'RestockSession':
        """
        创建一个空的草稿会话。

        Args:
            id: 会话ID
            user_id: 所属用户ID
            name: 会话名称，未提供或为空时使用"Restock Session <ISO日期>"
            created_at: 创建时间，默认为当前时间

        Returns:
            新的草稿会话
        """
        created_at = created_at or utcnow()
        if name is None or not name.strip():
            name = f"{DEFAULT_SESSION_NAME_PREFIX} {created_at.date().isoformat()}"
        return cls(
            id=id,
            user_id=user_id,
            name=name.strip(),
            status=SessionStatus.DRAFT,
            items=(),
            created_at=created_at,
            updated_at=created_at,
        )

    # ==================== 修改操作 ====================

    def add_item(self, item: RestockItem, updated_at: Optional[datetime] = None) -> 'RestockSession':
        """
        添加补货条目。

        Args:
            item: 要添加的条目
            updated_at: 修改时间，默认为当前时间

        Returns:
            添加了条目的新会话

        Raises:
            SessionClosedError: 会话不是草稿状态
            DuplicateProductError: 会话中已存在该商品
        """
        if not self.can_add_items():
            raise SessionClosedError('Cannot add items to a completed session', self.status)
        if self.has_product(item.product_id):
            raise DuplicateProductError(item.product_name, item.product_id)

        return self._copy_with(
            items=self.items + (item,),
            updated_at=updated_at or utcnow(),
        )

    def remove_item(self, product_id: str, updated_at: Optional[datetime] = None) -> 'RestockSession':
        """
        移除指定商品的条目，商品不在会话中时不做任何修改。

        Args:
            product_id: 商品ID
            updated_at: 修改时间，默认为当前时间

        Returns:
            移除条目后的新会话

        Raises:
            SessionClosedError: 会话不是草稿状态
        """
        if not self.can_add_items():
            raise SessionClosedError('Cannot modify a completed session', self.status)
        if not self.has_product(product_id):
            return self

        return self._copy_with(
            items=tuple(item for item in self.items if item.product_id != product_id),
            updated_at=updated_at or utcnow(),
        )

    def update_item(
        self,
        product_id: str,
        updated_at: Optional[datetime] = None,
        **updates: Any
    ) -> 'RestockSession':
        """
        更新指定商品的条目。

        Args:
            product_id: 商品ID
            updated_at: 修改时间，默认为当前时间
            **updates: 要更新的字段，可选product_name、quantity、supplier_name、supplier_email、notes

        Returns:
            更新条目后的新会话

        Raises:
            SessionClosedError: 会话不是草稿状态
            ItemNotFoundError: 会话中不存在该商品
            ValidationError: 更新的字段不合法
        """
        if not self.can_add_items():
            raise SessionClosedError('Cannot modify a completed session', self.status)

        unknown = set(updates) - _UPDATABLE_ITEM_FIELDS
        if unknown:
            raise ValidationError(None, f"Cannot update item fields: {', '.join(sorted(unknown))}")

        existing = self.find_item(product_id)
        if existing is None:
            raise ItemNotFoundError(product_id)

        # RestockItem在构造时重新校验所有字段
        updated = replace(existing, **updates)
        return self._copy_with(
            items=tuple(updated if item.product_id == product_id else item for item in self.items),
            updated_at=updated_at or utcnow(),
        )

    def set_name(self, name: str, updated_at: Optional[datetime] = None) -> 'RestockSession':
        """
        修改会话名称。

        Args:
            name: 新名称，保存时去除首尾空白
            updated_at: 修改时间，默认为当前时间

        Returns:
            修改名称后的新会话

        Raises:
            SessionClosedError: 会话已发送
            ValidationError: 名称为空或过长
        """
        if self.is_completed():
            raise SessionClosedError('Cannot rename a session that has already been sent', self.status)
        name = validate_required_text(name, 'name', 'Session name cannot be empty')
        return self._copy_with(name=name, updated_at=updated_at or utcnow())

    def generate_emails(self, updated_at: Optional[datetime] = None) -> 'RestockSession':
        """
        流转到已生成邮件状态。

        Raises:
            InvalidStateError: 会话不是草稿状态
            EmptySessionError: 会话中没有条目
        """
        if not self.status.can_transition_to(SessionStatus.EMAIL_GENERATED):
            raise InvalidStateError('Emails can only be generated from draft sessions', self.status)
        if self.is_empty():
            raise EmptySessionError()
        return self._copy_with(status=SessionStatus.EMAIL_GENERATED, updated_at=updated_at or utcnow())

    def mark_completed(self, updated_at: Optional[datetime] = None) -> 'RestockSession':
        """
        流转到已发送状态。

        Raises:
            InvalidStateError: 会话不是已生成邮件状态
        """
        if not self.status.can_transition_to(SessionStatus.SENT):
            raise InvalidStateError('Can only send emails that have been generated', self.status)
        return self._copy_with(status=SessionStatus.SENT, updated_at=updated_at or utcnow())

    # ==================== 查询操作 ====================

    def has_product(self, product_id: str) -> bool:
        return any(item.product_id == product_id for item in self.items)

    def find_item(self, product_id: str) -> Optional[RestockItem]:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    def find_item_by_product_name(self, product_name: str) -> Optional[RestockItem]:
        for item in self.items:
            if item.product_name == product_name:
                return item
        return None

    def is_empty(self) -> bool:
        return not self.items

    def total_quantity(self) -> int:
        """所有条目数量之和"""
        return sum(item.quantity for item in self.items)

    def unique_suppliers(self) -> List[Dict[str, str]]:
        """
        获取会话中的供应商，按首次出现的顺序排列。

        Returns:
            包含id、name、email的供应商字典列表
        """
        suppliers: Dict[str, Dict[str, str]] = {}
        for item in self.items:
            if item.supplier_id not in suppliers:
                suppliers[item.supplier_id] = {
                    "id": item.supplier_id,
                    "name": item.supplier_name,
                    "email": item.supplier_email,
                }
        return list(suppliers.values())

    def unique_supplier_count(self) -> int:
        return len(self.unique_suppliers())

    def items_by_supplier(self, supplier_id: str) -> Tuple[RestockItem, ...]:
        return tuple(item for item in self.items if item.supplier_id == supplier_id)

    def can_add_items(self) -> bool:
        return self.status is SessionStatus.DRAFT

    def can_generate_emails(self) -> bool:
        return self.status is SessionStatus.DRAFT and not self.is_empty()

    def can_send_emails(self) -> bool:
        return self.status is SessionStatus.EMAIL_GENERATED

    def is_draft(self) -> bool:
        return self.status is SessionStatus.DRAFT

    def is_completed(self) -> bool:
        return self.status is SessionStatus.SENT

    # ==================== 持久化转换 ====================

    def to_dict(self) -> Dict[str, Any]:
        """
        将会话转换为字典表示，供仓储持久化。

        Returns:
            会话的字典表示
        """
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "status": self.status.value,
            "items": [item.to_dict() for item in self.items],
            "created_at": _format_datetime(self.created_at),
            "updated_at": _format_datetime(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RestockSession':
        """
        从字典恢复会话。

        Args:
            data: 会话的字典表示

        Returns:
            会话实体

        Raises:
            ValidationError: ID缺失或名称过长
        """
        created_at = _parse_datetime(data.get('created_at')) or utcnow()
        return cls(
            id=data.get('id'),
            user_id=data.get('user_id'),
            name=data.get('name'),
            status=SessionStatus(data.get('status', SessionStatus.DRAFT.value)),
            items=tuple(RestockItem.from_dict(item) for item in data.get('items', [])),
            created_at=created_at,
            updated_at=_parse_datetime(data.get('updated_at')),
        )


_UPDATABLE_ITEM_FIELDS = frozenset({'product_name', 'quantity', 'supplier_name', 'supplier_email', 'notes'})

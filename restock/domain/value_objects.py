"""
补货领域模型中的值对象。
包含会话条目、添加请求、邮件草稿等值对象定义，以及共用的输入校验函数。
"""
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

from core.domain import EmailAddress, ValueObject
from restock.domain.exceptions import ValidationError

if TYPE_CHECKING:
    from restock.domain.entities import Product, RestockSession, SessionStatus, Supplier


def validate_quantity(quantity: Any) -> int:
    """
    校验补货数量必须为正整数。

    Args:
        quantity: 待校验的数量

    Returns:
        校验通过后的整数数量

    Raises:
        ValidationError: 数量不是正整数
    """
    if isinstance(quantity, bool) or not isinstance(quantity, (int, float)):
        raise ValidationError('quantity', 'Quantity must be a whole number')
    if quantity <= 0:
        raise ValidationError('quantity', 'Quantity must be greater than zero')
    if not float(quantity).is_integer():
        raise ValidationError('quantity', 'Quantity must be a whole number')
    return int(quantity)


def validate_required_text(value: Any, field_name: str, message: str) -> str:
    """
    校验必填文本去除首尾空白后非空。

    Args:
        value: 待校验的文本
        field_name: 字段名称
        message: 校验失败时的消息

    Returns:
        去除首尾空白后的文本

    Raises:
        ValidationError: 文本为空
    """
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(field_name, message)
    return value.strip()


def validate_supplier_email(email: Any) -> str:
    """
    校验供应商邮箱并返回规范化后的地址。

    Raises:
        ValidationError: 邮箱不符合基本语法
    """
    if not EmailAddress.is_valid(email):
        raise ValidationError('supplier_email', 'Supplier email must be valid')
    return EmailAddress.normalize(email)


def clean_notes(notes: Optional[str]) -> Optional[str]:
    """去除备注首尾空白，空备注视为None"""
    if notes is None:
        return None
    notes = notes.strip()
    return notes or None


@dataclass(frozen=True)
class RestockItem(ValueObject):
    """
    补货条目值对象。
    商品名、供应商名和邮箱是添加时的快照，目录记录后续变更不影响历史会话。
    """
    product_id: str
    product_name: str
    quantity: int
    supplier_id: str
    supplier_name: str
    supplier_email: str
    notes: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'quantity', validate_quantity(self.quantity))
        object.__setattr__(
            self, 'product_name',
            validate_required_text(self.product_name, 'product_name', 'Product name cannot be empty')
        )
        object.__setattr__(
            self, 'supplier_name',
            validate_required_text(self.supplier_name, 'supplier_name', 'Supplier name cannot be empty')
        )
        object.__setattr__(self, 'supplier_email', validate_supplier_email(self.supplier_email))
        object.__setattr__(self, 'notes', clean_notes(self.notes))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RestockItem':
        """
        从字典创建条目。

        Args:
            data: 条目的字典表示

        Returns:
            条目值对象
        """
        return cls(
            product_id=data['product_id'],
            product_name=data['product_name'],
            quantity=data['quantity'],
            supplier_id=data['supplier_id'],
            supplier_name=data['supplier_name'],
            supplier_email=data['supplier_email'],
            notes=data.get('notes'),
        )


@dataclass(frozen=True)
class AddItemRequest(ValueObject):
    """
    按名称添加条目的请求。
    调用方只提供用户输入，不需要提前知道商品和供应商ID。
    """
    product_name: str
    quantity: int
    supplier_name: str
    supplier_email: str
    notes: Optional[str] = None


@dataclass(frozen=True)
class AddItemResult:
    """
    添加条目的结果。
    new_product和new_supplier只在领域服务新建了记录时才有值，提示用例层需要持久化它们。
    """
    session: 'RestockSession'
    item: RestockItem
    new_product: Optional['Product'] = None
    new_supplier: Optional['Supplier'] = None


@dataclass(frozen=True)
class EmailDraftItem(ValueObject):
    """邮件草稿中的一行商品"""
    product_name: str
    quantity: int
    notes: Optional[str] = None


@dataclass(frozen=True)
class EmailDraft(ValueObject):
    """
    邮件草稿值对象。
    按供应商分组的结构化数据，交给外部文本生成服务渲染，领域层不生成正文。
    """
    supplier_id: str
    supplier_name: str
    supplier_email: str
    items: Tuple[EmailDraftItem, ...]
    store_name: str
    sender_name: str
    sender_email: Optional[str] = None

    @property
    def total_quantity(self) -> int:
        """草稿中所有商品的数量总和"""
        return sum(item.quantity for item in self.items)


@dataclass(frozen=True)
class RenderedEmail(ValueObject):
    """渲染后的邮件"""
    subject: str
    body: str
    draft: EmailDraft


@dataclass(frozen=True)
class GroupedSessions:
    """按状态分组的会话，每组内保持输入顺序"""
    draft: Tuple['RestockSession', ...] = ()
    email_generated: Tuple['RestockSession', ...] = ()
    sent: Tuple['RestockSession', ...] = ()

    @property
    def total(self) -> int:
        return len(self.draft) + len(self.email_generated) + len(self.sent)


@dataclass(frozen=True)
class SessionSummary(ValueObject):
    """会话统计摘要"""
    total_quantity: int
    total_products: int
    supplier_count: int
    status: 'SessionStatus'
    is_empty: bool
    can_generate_emails: bool
    can_send_emails: bool

"""
补货应用服务层的数据传输对象(DTOs)。
定义应用服务与外部通信使用的数据结构。
"""
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from restock.domain.entities import RestockSession
from restock.domain.value_objects import (
    EmailDraft,
    GroupedSessions,
    RenderedEmail,
    RestockItem,
    SessionSummary,
)


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


class RestockItemDTO:
    """补货条目DTO"""

    def __init__(
        self,
        product_id: str,
        product_name: str,
        quantity: int,
        supplier_id: str,
        supplier_name: str,
        supplier_email: str,
        notes: Optional[str] = None
    ):
        self.product_id = product_id
        self.product_name = product_name
        self.quantity = quantity
        self.supplier_id = supplier_id
        self.supplier_name = supplier_name
        self.supplier_email = supplier_email
        self.notes = notes

    @classmethod
    def from_value(cls, item: RestockItem) -> 'RestockItemDTO':
        return cls(
            product_id=item.product_id,
            product_name=item.product_name,
            quantity=item.quantity,
            supplier_id=item.supplier_id,
            supplier_name=item.supplier_name,
            supplier_email=item.supplier_email,
            notes=item.notes
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "product_id": self.product_id,
            "product_name": self.product_name,
            "quantity": self.quantity,
            "supplier": {
                "id": self.supplier_id,
                "name": self.supplier_name,
                "email": self.supplier_email
            },
            "notes": self.notes
        }


class SessionDTO:
    """补货会话数据传输对象，用于返回会话信息"""

    def __init__(
        self,
        id: str,
        user_id: str,
        name: str,
        status: str,
        items: List[RestockItemDTO],
        created_at: datetime,
        updated_at: datetime
    ):
        """
        初始化会话DTO。

        Args:
            id: 会话ID
            user_id: 用户ID
            name: 会话名称
            status: 会话状态
            items: 条目DTO列表
            created_at: 创建时间
            updated_at: 更新时间
        """
        self.id = id
        self.user_id = user_id
        self.name = name
        self.status = status
        self.items = items
        self.created_at = created_at
        self.updated_at = updated_at
        self.total_quantity = sum(item.quantity for item in items)
        self.supplier_count = len({item.supplier_id for item in items})

    @classmethod
    def from_entity(cls, session: RestockSession) -> 'SessionDTO':
        """
        从会话实体创建DTO。

        Args:
            session: 会话实体

        Returns:
            会话DTO
        """
        return cls(
            id=session.id,
            user_id=session.user_id,
            name=session.name,
            status=session.status.value,
            items=[RestockItemDTO.from_value(item) for item in session.items],
            created_at=session.created_at,
            updated_at=session.updated_at
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        将DTO转换为字典。

        Returns:
            字典表示
        """
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "status": self.status,
            "items": [item.to_dict() for item in self.items],
            "total_quantity": self.total_quantity,
            "supplier_count": self.supplier_count,
            "created_at": _isoformat(self.created_at),
            "updated_at": _isoformat(self.updated_at)
        }


class SessionListDTO:
    """按状态分组的会话列表DTO"""

    def __init__(
        self,
        draft: List[SessionDTO],
        email_generated: List[SessionDTO],
        sent: List[SessionDTO],
        all: List[SessionDTO]
    ):
        """
        初始化会话列表DTO。

        Args:
            draft: 草稿会话
            email_generated: 已生成邮件的会话
            sent: 已发送的会话
            all: 所有会话，保持仓储返回的顺序
        """
        self.draft = draft
        self.email_generated = email_generated
        self.sent = sent
        self.all = all
        self.total = len(all)

    @classmethod
    def from_grouped(cls, grouped: GroupedSessions, sessions: Sequence[RestockSession]) -> 'SessionListDTO':
        return cls(
            draft=[SessionDTO.from_entity(s) for s in grouped.draft],
            email_generated=[SessionDTO.from_entity(s) for s in grouped.email_generated],
            sent=[SessionDTO.from_entity(s) for s in grouped.sent],
            all=[SessionDTO.from_entity(s) for s in sessions]
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "draft": [s.to_dict() for s in self.draft],
            "email_generated": [s.to_dict() for s in self.email_generated],
            "sent": [s.to_dict() for s in self.sent],
            "all": [s.to_dict() for s in self.all],
            "total": self.total
        }


class EmailDraftDTO:
    """邮件草稿DTO，渲染后附带主题和正文"""

    def __init__(
        self,
        supplier_id: str,
        supplier_name: str,
        supplier_email: str,
        items: List[Dict[str, Any]],
        store_name: str,
        sender_name: str,
        sender_email: Optional[str] = None,
        subject: Optional[str] = None,
        body: Optional[str] = None
    ):
        """
        初始化邮件草稿DTO。

        Args:
            supplier_id: 供应商ID
            supplier_name: 供应商名称
            supplier_email: 供应商邮箱
            items: 商品列表，每项包含product_name、quantity、notes
            store_name: 店铺名称
            sender_name: 发件人名称
            sender_email: 发件人邮箱
            subject: 渲染后的主题
            body: 渲染后的正文
        """
        self.supplier_id = supplier_id
        self.supplier_name = supplier_name
        self.supplier_email = supplier_email
        self.items = items
        self.store_name = store_name
        self.sender_name = sender_name
        self.sender_email = sender_email
        self.subject = subject
        self.body = body
        self.total_quantity = sum(item["quantity"] for item in items)

    @classmethod
    def from_draft(cls, draft: EmailDraft, rendered: Optional[RenderedEmail] = None) -> 'EmailDraftDTO':
        """
        从邮件草稿创建DTO。

        Args:
            draft: 邮件草稿
            rendered: 渲染结果，未配置渲染服务时为None

        Returns:
            邮件草稿DTO
        """
        return cls(
            supplier_id=draft.supplier_id,
            supplier_name=draft.supplier_name,
            supplier_email=draft.supplier_email,
            items=[item.to_dict() for item in draft.items],
            store_name=draft.store_name,
            sender_name=draft.sender_name,
            sender_email=draft.sender_email,
            subject=rendered.subject if rendered else None,
            body=rendered.body if rendered else None
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "supplier": {
                "id": self.supplier_id,
                "name": self.supplier_name,
                "email": self.supplier_email
            },
            "items": self.items,
            "total_quantity": self.total_quantity,
            "store_name": self.store_name,
            "sender_name": self.sender_name,
            "sender_email": self.sender_email,
            "subject": self.subject,
            "body": self.body
        }


class GeneratedEmailsDTO:
    """生成邮件的结果，包含更新后的会话和每个供应商的邮件"""

    def __init__(self, session: SessionDTO, emails: List[EmailDraftDTO]):
        self.session = session
        self.emails = emails

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session": self.session.to_dict(),
            "emails": [email.to_dict() for email in self.emails]
        }


class SessionSummaryDTO:
    """会话统计摘要DTO"""

    def __init__(
        self,
        session_id: str,
        total_quantity: int,
        total_products: int,
        supplier_count: int,
        status: str,
        is_empty: bool,
        can_generate_emails: bool,
        can_send_emails: bool
    ):
        self.session_id = session_id
        self.total_quantity = total_quantity
        self.total_products = total_products
        self.supplier_count = supplier_count
        self.status = status
        self.is_empty = is_empty
        self.can_generate_emails = can_generate_emails
        self.can_send_emails = can_send_emails

    @classmethod
    def from_summary(cls, session_id: str, summary: SessionSummary) -> 'SessionSummaryDTO':
        return cls(
            session_id=session_id,
            total_quantity=summary.total_quantity,
            total_products=summary.total_products,
            supplier_count=summary.supplier_count,
            status=summary.status.value,
            is_empty=summary.is_empty,
            can_generate_emails=summary.can_generate_emails,
            can_send_emails=summary.can_send_emails
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "total_quantity": self.total_quantity,
            "total_products": self.total_products,
            "supplier_count": self.supplier_count,
            "status": self.status,
            "is_empty": self.is_empty,
            "can_generate_emails": self.can_generate_emails,
            "can_send_emails": self.can_send_emails
        }

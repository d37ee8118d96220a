"""
补货领域模型中的仓储接口。
定义用于持久化和检索会话、商品、供应商的仓储接口，以及邮件渲染等外部服务接口。
"""
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, List, Optional

from core.domain.repositories import Repository

if TYPE_CHECKING:
    from restock.domain.entities import Product, RestockSession, Supplier
    from restock.domain.value_objects import EmailDraft, RenderedEmail

# 生成全局唯一ID的无参函数
IdGenerator = Callable[[], str]


class SessionRepository(Repository['RestockSession']):
    """
    补货会话仓储接口。
    定义用于持久化和检索补货会话的方法。
    """

    @abstractmethod
    async def find_by_id(self, id: Any) -> Optional['RestockSession']:
        """
        根据ID获取会话。

        Args:
            id: 会话ID

        Returns:
            找到的会话，如果不存在则返回None
        """
        pass

    @abstractmethod
    async def find_by_user_id(self, user_id: Any) -> List['RestockSession']:
        """
        获取用户的所有会话，按创建时间倒序排列。

        Args:
            user_id: 用户ID

        Returns:
            会话列表
        """
        pass

    @abstractmethod
    async def find_unfinished_by_user_id(self, user_id: Any) -> List['RestockSession']:
        """
        获取用户所有未发送的会话。

        Args:
            user_id: 用户ID

        Returns:
            草稿和已生成邮件状态的会话列表
        """
        pass

    @abstractmethod
    async def save(self, session: 'RestockSession') -> 'RestockSession':
        """
        保存会话。

        Args:
            session: 要保存的会话

        Returns:
            保存后的会话
        """
        pass

    @abstractmethod
    async def delete(self, id: Any) -> None:
        """
        删除会话。

        Args:
            id: 会话ID
        """
        pass


class ProductRepository(Repository['Product']):
    """
    商品仓储接口。
    定义用于持久化和检索用户商品目录的方法。
    """

    @abstractmethod
    async def find_by_id(self, id: Any) -> Optional['Product']:
        pass

    @abstractmethod
    async def find_by_user_id(self, user_id: Any) -> List['Product']:
        pass

    @abstractmethod
    async def save(self, product: 'Product') -> 'Product':
        pass

    @abstractmethod
    async def delete(self, id: Any) -> None:
        pass


class SupplierRepository(Repository['Supplier']):
    """
    供应商仓储接口。
    定义用于持久化和检索用户供应商的方法。
    """

    @abstractmethod
    async def find_by_id(self, id: Any) -> Optional['Supplier']:
        pass

    @abstractmethod
    async def find_by_user_id(self, user_id: Any) -> List['Supplier']:
        pass

    @abstractmethod
    async def save(self, supplier: 'Supplier') -> 'Supplier':
        pass

    @abstractmethod
    async def delete(self, id: Any) -> None:
        pass


class EmailRenderer(ABC):
    """
    邮件渲染服务接口。
    将结构化的邮件草稿转换为可发送的主题和正文。
    """

    @abstractmethod
    async def render(self, draft: 'EmailDraft') -> 'RenderedEmail':
        """
        渲染邮件。

        Args:
            draft: 邮件草稿

        Returns:
            渲染后的邮件
        """
        pass

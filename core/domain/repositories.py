"""
仓储接口模块。
定义仓储接口，用于持久化和检索领域对象。
仓储由外部存储实现，所有操作均为异步。
"""
from abc import ABC, abstractmethod
from typing import Any, Generic, List, Optional, TypeVar

T = TypeVar('T')


class Repository(Generic[T], ABC):
    """
    仓储接口。
    定义了所有仓储必须实现的基本操作。
    """

    @abstractmethod
    async def find_by_id(self, id: Any) -> Optional[T]:
        """
        根据ID获取实体。

        Args:
            id: 实体ID

        Returns:
            找到的实体，如果不存在则返回None
        """
        pass

    @abstractmethod
    async def find_by_user_id(self, user_id: Any) -> List[T]:
        """
        获取指定用户拥有的所有实体。

        Args:
            user_id: 用户ID

        Returns:
            实体列表
        """
        pass

    @abstractmethod
    async def save(self, entity: T) -> T:
        """
        保存实体。
        如果实体已存在则更新，否则创建。

        Args:
            entity: 要保存的实体

        Returns:
            保存后的实体
        """
        pass

    @abstractmethod
    async def delete(self, id: Any) -> None:
        """
        删除实体。

        Args:
            id: 要删除的实体ID
        """
        pass

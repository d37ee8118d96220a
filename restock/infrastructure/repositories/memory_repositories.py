"""
补货仓储的内存实现。
以字典快照保存实体，读取时重新构建领域对象，行为与外部存储一致：
调用方拿到的对象与仓储内部数据互不影响。
"""
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

from loguru import logger

from core.domain.exceptions import DomainException, RepositoryException
from restock.domain.entities import Product, RestockSession, SessionStatus, Supplier
from restock.domain.repositories import ProductRepository, SessionRepository, SupplierRepository

T = TypeVar('T')


class _MemoryStore(Generic[T]):
    """按ID保存实体字典快照的存储"""

    def __init__(self, entity_name: str, from_dict: Callable[[Dict[str, Any]], T]):
        self.entity_name = entity_name
        self._from_dict = from_dict
        self._records: Dict[str, Dict[str, Any]] = {}

    def get(self, id: Any) -> Optional[T]:
        record = self._records.get(str(id))
        return self._to_domain_entity(record) if record is not None else None

    def filter(self, predicate: Callable[[Dict[str, Any]], bool]) -> List[T]:
        return [self._to_domain_entity(record) for record in self._records.values() if predicate(record)]

    def put(self, entity: Any) -> None:
        self._records[str(entity.id)] = entity.to_dict()
        logger.debug(f"{self.entity_name} {entity.id} 已保存")

    def remove(self, id: Any) -> None:
        if self._records.pop(str(id), None) is not None:
            logger.debug(f"{self.entity_name} {id} 已删除")

    def _to_domain_entity(self, record: Dict[str, Any]) -> T:
        try:
            return self._from_dict(record)
        except (KeyError, TypeError, ValueError, DomainException) as e:
            raise RepositoryException('load', f"Failed to load {self.entity_name} {record.get('id')}: {e}") from e


class InMemorySessionRepository(SessionRepository):
    """
    基于内存的补货会话仓储实现。
    """

    def __init__(self):
        self._store: _MemoryStore[RestockSession] = _MemoryStore('RestockSession', RestockSession.from_dict)

    async def find_by_id(self, id: Any) -> Optional[RestockSession]:
        return self._store.get(id)

    async def find_by_user_id(self, user_id: Any) -> List[RestockSession]:
        sessions = self._store.filter(lambda record: record['user_id'] == user_id)
        # 最新创建的会话排在前面
        return sorted(sessions, key=lambda session: session.created_at, reverse=True)

    async def find_unfinished_by_user_id(self, user_id: Any) -> List[RestockSession]:
        sessions = await self.find_by_user_id(user_id)
        return [session for session in sessions if session.status is not SessionStatus.SENT]

    async def save(self, session: RestockSession) -> RestockSession:
        self._store.put(session)
        return session

    async def delete(self, id: Any) -> None:
        self._store.remove(id)


class InMemoryProductRepository(ProductRepository):
    """
    基于内存的商品仓储实现。
    """

    def __init__(self):
        self._store: _MemoryStore[Product] = _MemoryStore('Product', Product.from_dict)

    async def find_by_id(self, id: Any) -> Optional[Product]:
        return self._store.get(id)

    async def find_by_user_id(self, user_id: Any) -> List[Product]:
        products = self._store.filter(lambda record: record['user_id'] == user_id)
        return sorted(products, key=lambda product: product.name)

    async def save(self, product: Product) -> Product:
        self._store.put(product)
        return product

    async def delete(self, id: Any) -> None:
        self._store.remove(id)


class InMemorySupplierRepository(SupplierRepository):
    """
    基于内存的供应商仓储实现。
    """

    def __init__(self):
        self._store: _MemoryStore[Supplier] = _MemoryStore('Supplier', Supplier.from_dict)

    async def find_by_id(self, id: Any) -> Optional[Supplier]:
        return self._store.get(id)

    async def find_by_user_id(self, user_id: Any) -> List[Supplier]:
        suppliers = self._store.filter(lambda record: record['user_id'] == user_id)
        return sorted(suppliers, key=lambda supplier: supplier.name)

    async def save(self, supplier: Supplier) -> Supplier:
        self._store.put(supplier)
        return supplier

    async def delete(self, id: Any) -> None:
        self._store.remove(id)

"""
核心领域模型基类模块。
包含Entity基类，用于所有具有唯一标识的领域对象。
"""
from dataclasses import dataclass, replace
from typing import Any, TypeVar

E = TypeVar('E', bound='Entity')


@dataclass(frozen=True, eq=False)
class Entity:
    """
    实体基类。
    实体是具有唯一标识的领域对象，其相等性通过标识而非属性值判断。
    实体是不可变记录，所有修改都通过返回新实例完成。
    """
    id: str

    def __eq__(self, other: Any) -> bool:
        """
        判断两个实体是否相等，通过比较它们的类型和标识。

        Args:
            other: 另一个实体

        Returns:
            如果两个实体标识相等，则返回True；否则返回False
        """
        if not isinstance(other, Entity):
            return False
        return type(self) is type(other) and self.id == other.id

    def __hash__(self) -> int:
        """
        计算实体的哈希值，基于其标识。

        Returns:
            实体标识的哈希值
        """
        return hash((type(self).__name__, self.id))

    def _copy_with(self: E, **changes: Any) -> E:
        """
        返回应用了指定修改的新实体，原实体保持不变。

        Args:
            **changes: 需要修改的字段

        Returns:
            新的实体实例
        """
        return replace(self, **changes)

"""
值对象模块。
包含ValueObject基类和常用值对象实现，如EmailAddress。
"""
import re
from dataclasses import asdict, dataclass
from typing import Any, Dict

from core.domain.exceptions import ValidationException

# 基本的邮箱语法校验，不做域名解析
EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')


@dataclass(frozen=True)
class ValueObject:
    """
    值对象基类。
    值对象是通过其属性值而非标识定义的不可变对象。
    相同属性值的值对象被视为相等。
    """

    def to_dict(self) -> Dict[str, Any]:
        """
        将值对象转换为字典表示。

        Returns:
            值对象的字典表示
        """
        return asdict(self)


@dataclass(frozen=True)
class EmailAddress(ValueObject):
    """
    邮箱地址值对象。
    保存去除首尾空白并转为小写后的地址。
    """
    value: str

    def __post_init__(self):
        normalized = self.normalize(self.value)
        if not self.is_valid(normalized):
            raise ValidationException('email', f"Invalid email address: {self.value!r}")
        object.__setattr__(self, 'value', normalized)

    @staticmethod
    def normalize(raw: str) -> str:
        """
        规范化邮箱地址。

        Args:
            raw: 原始邮箱字符串

        Returns:
            去除首尾空白并转为小写的邮箱
        """
        return (raw or "").strip().lower()

    @staticmethod
    def is_valid(raw: Any) -> bool:
        """
        检查字符串是否符合基本的邮箱语法。

        Args:
            raw: 待检查的值

        Returns:
            符合语法返回True，否则返回False
        """
        if not isinstance(raw, str):
            return False
        return EMAIL_PATTERN.match(raw.strip()) is not None

    def __str__(self) -> str:
        return self.value

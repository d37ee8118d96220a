"""
ID生成器。
生成会话、商品和供应商使用的全局唯一字符串ID。
"""
import uuid

from restock.domain.repositories import IdGenerator


def uuid4_generator() -> str:
    """生成UUID4字符串"""
    return str(uuid.uuid4())


def prefixed_id_generator(prefix: str) -> IdGenerator:
    """
    创建带前缀的ID生成器，例如"session_<uuid十六进制>"。

    Args:
        prefix: ID前缀

    Returns:
        无参的ID生成函数
    """
    def generate() -> str:
        return f"{prefix}_{uuid.uuid4().hex}"

    return generate

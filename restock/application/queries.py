"""
补货应用服务层的查询对象。
定义用于查询系统状态的查询。
"""
from typing import Optional


class GetSessionQuery:
    """获取单个会话的查询"""

    def __init__(self, session_id: str, user_id: str):
        """
        初始化获取会话查询。

        Args:
            session_id: 会话ID
            user_id: 用户ID
        """
        self.session_id = session_id
        self.user_id = user_id


class GetUserSessionsQuery:
    """获取用户会话列表的查询"""

    def __init__(self, user_id: str, include_completed: bool = True, limit: Optional[int] = None):
        """
        初始化用户会话列表查询。

        Args:
            user_id: 用户ID
            include_completed: 是否包含已发送的会话
            limit: 返回的最大会话数，None表示不限制
        """
        self.user_id = user_id
        self.include_completed = include_completed
        self.limit = max(1, limit) if limit is not None else None  # 确保限制至少为1

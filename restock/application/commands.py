"""
补货应用服务层的命令对象。
定义用于修改系统状态的命令。
"""
from typing import Optional


class CreateSessionCommand:
    """创建补货会话命令"""

    def __init__(self, user_id: str, name: Optional[str] = None):
        """
        初始化创建会话命令。

        Args:
            user_id: 用户ID
            name: 会话名称，未提供时使用默认名称
        """
        self.user_id = user_id
        self.name = name


class DeleteSessionCommand:
    """删除补货会话命令"""

    def __init__(self, session_id: str, user_id: str):
        self.session_id = session_id
        self.user_id = user_id


class AddItemCommand:
    """按名称添加条目命令"""

    def __init__(
        self,
        session_id: str,
        user_id: str,
        product_name: str,
        quantity: int,
        supplier_name: str,
        supplier_email: str,
        notes: Optional[str] = None
    ):
        """
        初始化添加条目命令。

        Args:
            session_id: 会话ID
            user_id: 用户ID
            product_name: 商品名称
            quantity: 补货数量
            supplier_name: 供应商名称
            supplier_email: 供应商邮箱
            notes: 备注
        """
        self.session_id = session_id
        self.user_id = user_id
        self.product_name = product_name
        self.quantity = quantity
        self.supplier_name = supplier_name
        self.supplier_email = supplier_email
        self.notes = notes


class AddProductCommand:
    """添加已有商品命令"""

    def __init__(
        self,
        session_id: str,
        user_id: str,
        product_id: str,
        supplier_id: str,
        quantity: int,
        notes: Optional[str] = None
    ):
        """
        初始化添加商品命令。

        Args:
            session_id: 会话ID
            user_id: 用户ID
            product_id: 商品ID
            supplier_id: 供应商ID
            quantity: 补货数量
            notes: 备注
        """
        self.session_id = session_id
        self.user_id = user_id
        self.product_id = product_id
        self.supplier_id = supplier_id
        self.quantity = quantity
        self.notes = notes


class RemoveProductCommand:
    """从会话移除商品命令"""

    def __init__(self, session_id: str, user_id: str, product_id: str):
        self.session_id = session_id
        self.user_id = user_id
        self.product_id = product_id


class UpdateItemCommand:
    """更新会话条目命令"""

    def __init__(
        self,
        session_id: str,
        user_id: str,
        product_id: str,
        quantity: Optional[int] = None,
        notes: Optional[str] = None
    ):
        """
        初始化更新条目命令。

        Args:
            session_id: 会话ID
            user_id: 用户ID
            product_id: 商品ID
            quantity: 新数量，None表示不修改
            notes: 新备注，None表示不修改
        """
        self.session_id = session_id
        self.user_id = user_id
        self.product_id = product_id
        self.quantity = quantity
        self.notes = notes


class UpdateSessionNameCommand:
    """修改会话名称命令"""

    def __init__(self, user_id: str, name: str, session_id: Optional[str] = None):
        """
        初始化修改会话名称命令。

        Args:
            user_id: 用户ID
            name: 新名称
            session_id: 会话ID，未提供时以该名称创建新会话
        """
        self.user_id = user_id
        self.name = name
        self.session_id = session_id


class GenerateEmailsCommand:
    """生成邮件命令"""

    def __init__(
        self,
        session_id: str,
        user_id: str,
        store_name: Optional[str] = None,
        sender_name: Optional[str] = None,
        sender_email: Optional[str] = None
    ):
        """
        初始化生成邮件命令。

        Args:
            session_id: 会话ID
            user_id: 用户ID
            store_name: 店铺名称
            sender_name: 发件人名称
            sender_email: 发件人邮箱
        """
        self.session_id = session_id
        self.user_id = user_id
        self.store_name = store_name
        self.sender_name = sender_name
        self.sender_email = sender_email


class MarkAsSentCommand:
    """标记会话已发送命令"""

    def __init__(self, session_id: str, user_id: str):
        self.session_id = session_id
        self.user_id = user_id


class ReplaySessionCommand:
    """复制已发送会话命令"""

    def __init__(
        self,
        session_id: str,
        user_id: str,
        adjust_quantities: bool = False,
        quantity_multiplier: float = 1.0
    ):
        """
        初始化复制会话命令。

        Args:
            session_id: 原会话ID
            user_id: 用户ID
            adjust_quantities: 是否按倍数调整数量
            quantity_multiplier: 数量倍数
        """
        self.session_id = session_id
        self.user_id = user_id
        self.adjust_quantities = adjust_quantities
        self.quantity_multiplier = quantity_multiplier

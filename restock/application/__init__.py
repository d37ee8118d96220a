"""
补货应用服务层包。
提供补货会话相关的应用服务、数据传输对象、命令和查询。
"""

# DTO
from restock.application.dtos import (
    RestockItemDTO,
    SessionDTO,
    SessionListDTO,
    EmailDraftDTO,
    GeneratedEmailsDTO,
    SessionSummaryDTO
)

# 命令
from restock.application.commands import (
    CreateSessionCommand,
    DeleteSessionCommand,
    AddItemCommand,
    AddProductCommand,
    RemoveProductCommand,
    UpdateItemCommand,
    UpdateSessionNameCommand,
    GenerateEmailsCommand,
    MarkAsSentCommand,
    ReplaySessionCommand
)

# 查询
from restock.application.queries import (
    GetSessionQuery,
    GetUserSessionsQuery
)

# 应用服务
from restock.application.restock_service import RestockApplicationService

__all__ = [
    # DTO
    'RestockItemDTO',
    'SessionDTO',
    'SessionListDTO',
    'EmailDraftDTO',
    'GeneratedEmailsDTO',
    'SessionSummaryDTO',

    # 命令
    'CreateSessionCommand',
    'DeleteSessionCommand',
    'AddItemCommand',
    'AddProductCommand',
    'RemoveProductCommand',
    'UpdateItemCommand',
    'UpdateSessionNameCommand',
    'GenerateEmailsCommand',
    'MarkAsSentCommand',
    'ReplaySessionCommand',

    # 查询
    'GetSessionQuery',
    'GetUserSessionsQuery',

    # 应用服务
    'RestockApplicationService',
]

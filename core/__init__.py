"""
核心包。
提供各业务模块共用的领域基础设施。
"""

"""
补货基础设施服务实现。
"""

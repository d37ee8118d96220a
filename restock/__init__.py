"""
补货模块。
提供补货会话的领域模型、应用服务和基础设施实现。
"""

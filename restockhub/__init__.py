"""
restockhub项目配置包。
"""

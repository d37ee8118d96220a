"""
分环境的Django配置。
"""

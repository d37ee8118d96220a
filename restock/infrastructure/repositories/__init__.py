"""
补货仓储实现。
"""

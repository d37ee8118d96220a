"""
测试环境配置文件。
包含测试环境特定的Django配置。
"""
from .base import *
from .env import *

# 测试环境禁用调试模式
DEBUG = False

# 简化日志配置
LOGGING = {
    'version': 1,
    'disable_existing_loggers': True,
    'handlers': {
        'console': {
            'level': 'ERROR',
            'class': 'logging.StreamHandler',
        },
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': 'ERROR',
            'propagate': False,
        },
    },
}

# 补货模块测试环境配置，使用固定值而不是环境变量
RESTOCK_SETTINGS = {
    'DEFAULT_STORE_NAME': 'Your Store',
    'DEFAULT_SENDER_NAME': 'Store Manager',
    'DEFAULT_SESSION_NAME_PREFIX': 'Restock Session',
    'REPLAY_SESSION_SUFFIX': '(Replay)',
}

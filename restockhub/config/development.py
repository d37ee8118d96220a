"""
开发环境配置文件。
包含开发环境特定的Django配置。
"""
from .base import *
from .env import *

# 开发环境默认开启调试模式
DEBUG = True

# 日志配置 - 开发环境更详细的日志
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': LOGGING_FORMATTERS,
    'handlers': {
        'console': {
            'level': 'DEBUG',
            'class': 'logging.StreamHandler',
            'formatter': 'verbose'
        },
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': 'INFO',
            'propagate': True,
        },
    },
}

# 补货模块开发环境配置
RESTOCK_SETTINGS = {
    'DEFAULT_STORE_NAME': RESTOCK_STORE_NAME,
    'DEFAULT_SENDER_NAME': RESTOCK_SENDER_NAME,
    'DEFAULT_SESSION_NAME_PREFIX': RESTOCK_SESSION_NAME_PREFIX,
    'REPLAY_SESSION_SUFFIX': '(Replay)',
}

"""
生产环境配置文件。
包含生产环境特定的Django配置。
"""
import os

from .base import *
from .env import *

# 生产环境禁用调试模式
DEBUG = False

# 日志配置 - 生产环境更关注错误和警告
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': LOGGING_FORMATTERS,
    'handlers': {
        'console': {
            'level': 'WARNING',
            'class': 'logging.StreamHandler',
            'formatter': 'verbose'
        },
        'file': {
            'level': 'INFO',
            'class': 'logging.handlers.RotatingFileHandler',
            'filename': os.path.join(BASE_DIR, 'logs/django.log'),
            'maxBytes': 10 * 1024 * 1024,  # 10MB
            'backupCount': 10,
            'formatter': 'verbose',
        },
    },
    'loggers': {
        'django': {
            'handlers': ['console', 'file'],
            'level': 'INFO',
            'propagate': True,
        },
    },
}

# 确保日志目录存在
os.makedirs(os.path.join(BASE_DIR, 'logs'), exist_ok=True)

# 补货模块生产环境配置
RESTOCK_SETTINGS = {
    'DEFAULT_STORE_NAME': RESTOCK_STORE_NAME,
    'DEFAULT_SENDER_NAME': RESTOCK_SENDER_NAME,
    'DEFAULT_SESSION_NAME_PREFIX': RESTOCK_SESSION_NAME_PREFIX,
    'REPLAY_SESSION_SUFFIX': '(Replay)',
}

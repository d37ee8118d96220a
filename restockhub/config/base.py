"""
基础配置文件。
包含所有环境共用的Django配置。
"""
from .env import *

INSTALLED_APPS = [
    'django.contrib.contenttypes',
]

# 补货模块不使用ORM，仓储由外部存储实现
DATABASES = {}

# 国际化配置
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# 日志格式
LOGGING_FORMATTERS = {
    'verbose': {
        'format': '{levelname} {asctime} {module} {process:d} {thread:d} {message}',
        'style': '{',
    },
    'simple': {
        'format': '{levelname} {message}',
        'style': '{',
    },
}

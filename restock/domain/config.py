"""
补货模块配置文件。
从Django设置中获取补货模块的配置。
"""
import os

from django.conf import ENVIRONMENT_VARIABLE, settings


def _load_restock_settings() -> dict:
    """读取RESTOCK_SETTINGS，Django未配置时返回空字典"""
    if settings.configured or os.environ.get(ENVIRONMENT_VARIABLE):
        return getattr(settings, 'RESTOCK_SETTINGS', {})
    return {}


# 获取补货模块配置，如果不存在则使用默认值
RESTOCK_SETTINGS = _load_restock_settings()

# 生成邮件草稿时的默认店铺名和发件人名
DEFAULT_STORE_NAME = RESTOCK_SETTINGS.get('DEFAULT_STORE_NAME', 'Your Store')
DEFAULT_SENDER_NAME = RESTOCK_SETTINGS.get('DEFAULT_SENDER_NAME', 'Store Manager')

# 未指定名称时的会话名前缀，后接ISO日期
DEFAULT_SESSION_NAME_PREFIX = RESTOCK_SETTINGS.get('DEFAULT_SESSION_NAME_PREFIX', 'Restock Session')

# 复制会话名称后缀
REPLAY_SESSION_SUFFIX = RESTOCK_SETTINGS.get('REPLAY_SESSION_SUFFIX', '(Replay)')

# 名称长度限制
SESSION_NAME_MAX_LENGTH = 255
PRODUCT_NAME_MAX_LENGTH = 255

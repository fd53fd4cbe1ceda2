"""
jqdriver 配置中心

集中管理所有可配置参数，避免硬编码散落在各模块中。
支持从环境变量读取配置。

用法:
    from jqdriver.config import browser_config, jquery_config, logging_config

    # 访问配置
    addr = browser_config.addr
    timeout = jquery_config.inject_timeout
"""

import os
from dataclasses import dataclass


DEFAULT_JQUERY_URL = "https://code.jquery.com/jquery-3.7.1.min.js"


@dataclass
class BrowserConfig:
    """
    浏览器连接配置

    控制调试端口的连接行为。
    """
    addr: str = '127.0.0.1:9222'        # 浏览器调试地址
    port_check_timeout: float = 0.5     # 端口探测超时(秒)


@dataclass
class JQueryConfig:
    """
    jQuery 注入配置

    页面没有 jQuery 时，工厂按此配置注入并等待加载完成。
    """
    jquery_url: str = DEFAULT_JQUERY_URL  # 注入使用的 jQuery 地址
    inject_timeout: float = 5.0           # 注入后最长等待时间(秒)
    poll_interval: float = 0.2            # 探测轮询间隔(秒)
    auto_inject: bool = True              # 缺少 jQuery 时是否自动注入


@dataclass
class LoggingConfig:
    """日志配置"""
    log_scripts: bool = True            # 执行前是否记录生成的脚本


def _get_env_float(key: str, default: float) -> float:
    """从环境变量获取浮点数配置"""
    value = os.environ.get(key)
    if value:
        try:
            return float(value)
        except ValueError:
            pass
    return default


def _get_env_str(key: str, default: str) -> str:
    """从环境变量获取字符串配置"""
    value = os.environ.get(key)
    return value if value else default


def _get_env_bool(key: str, default: bool) -> bool:
    """从环境变量获取布尔配置（1/true/yes/on 视为真）"""
    value = os.environ.get(key)
    if not value:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _load_browser_config() -> BrowserConfig:
    return BrowserConfig(
        addr=_get_env_str('JQDRIVER_BROWSER_ADDR', '127.0.0.1:9222'),
        port_check_timeout=_get_env_float('JQDRIVER_PORT_CHECK_TIMEOUT', 0.5),
    )


def _load_jquery_config() -> JQueryConfig:
    return JQueryConfig(
        jquery_url=_get_env_str('JQDRIVER_JQUERY_URL', DEFAULT_JQUERY_URL),
        inject_timeout=_get_env_float('JQDRIVER_INJECT_TIMEOUT', 5.0),
        poll_interval=_get_env_float('JQDRIVER_POLL_INTERVAL', 0.2),
        auto_inject=_get_env_bool('JQDRIVER_AUTO_INJECT', True),
    )


def _load_logging_config() -> LoggingConfig:
    return LoggingConfig(
        log_scripts=_get_env_bool('JQDRIVER_LOG_SCRIPTS', True),
    )


# ============================================================
# 全局配置实例
# ============================================================

# 浏览器配置
browser_config = _load_browser_config()

# jQuery 配置
jquery_config = _load_jquery_config()

# 日志配置
logging_config = _load_logging_config()


# ============================================================
# 便捷函数
# ============================================================

def reload_config():
    """
    重新加载配置

    从环境变量重新读取配置。
    """
    global browser_config, jquery_config, logging_config

    browser_config = _load_browser_config()
    jquery_config = _load_jquery_config()
    logging_config = _load_logging_config()

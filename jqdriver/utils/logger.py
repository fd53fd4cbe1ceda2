"""
jqdriver 日志系统

提供统一的日志接口，支持:
- 标准 Python logging 模块
- SCRIPT 级别，记录每一段即将在页面中执行的 JavaScript
- 监听回调（测试代码可以收集生成的脚本）
- 文件日志输出

用法:
    from jqdriver.utils.logger import get_logger, setup_logging

    # 初始化日志系统（测试会话开始时调用）
    setup_logging()

    # 获取模块日志器
    logger = get_logger(__name__)
    logger.info("已连接浏览器")
    logger.script("return jQuery('.item').addClass('done');")

    # 带监听回调的日志
    scripts = []
    logger = get_logger(__name__, listener=lambda m, l: scripts.append(m))
"""

import logging
import sys
from typing import Optional, Callable, Literal
from pathlib import Path


# 日志级别类型
LogLevel = Literal["debug", "script", "info", "warning", "error", "critical"]

# 日志格式
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
SIMPLE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
TIME_FORMAT = "%H:%M:%S"


class JQLogger:
    """
    jqdriver 日志封装

    在标准 logging 基础上增加:
    - 监听回调支持
    - script 级别（介于 debug 和 info 之间）
    - 简化的 API
    """

    # 自定义 script 级别（15，介于 DEBUG=10 和 INFO=20 之间）
    SCRIPT_LEVEL = 15

    def __init__(self, name: str, listener: Optional[Callable[[str, str], None]] = None):
        """
        初始化日志器

        Args:
            name: 日志器名称（通常为 __name__）
            listener: 监听回调函数，签名: (message, level) -> None
        """
        self.logger = logging.getLogger(name)
        self.listener = listener

        # 注册 script 级别
        if logging.getLevelName(self.SCRIPT_LEVEL) != 'SCRIPT':
            logging.addLevelName(self.SCRIPT_LEVEL, 'SCRIPT')

    def _log_and_notify(self, level: int, message: str, level_name: str):
        """记录日志并通知监听者"""
        self.logger.log(level, message)
        if self.listener:
            try:
                self.listener(message, level_name)
            except Exception:
                pass  # 监听者失败不影响日志记录

    def debug(self, message: str):
        """调试级别日志"""
        self._log_and_notify(logging.DEBUG, message, "debug")

    def script(self, message: str):
        """脚本级别日志，记录即将执行的 JavaScript"""
        self._log_and_notify(self.SCRIPT_LEVEL, message, "script")

    def info(self, message: str):
        """信息级别日志"""
        self._log_and_notify(logging.INFO, message, "info")

    def warning(self, message: str):
        """警告级别日志"""
        self._log_and_notify(logging.WARNING, message, "warning")

    def error(self, message: str):
        """错误级别日志"""
        self._log_and_notify(logging.ERROR, message, "error")

    def critical(self, message: str):
        """严重错误级别日志"""
        self._log_and_notify(logging.CRITICAL, message, "critical")

    def set_listener(self, listener: Optional[Callable[[str, str], None]]):
        """设置或更新监听回调"""
        self.listener = listener


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    format_string: str = DEFAULT_FORMAT
):
    """
    初始化日志系统

    Args:
        level: 日志级别
        log_file: 日志文件路径（可选）
        format_string: 日志格式
    """
    handlers = [logging.StreamHandler(sys.stdout)]

    # 文件日志
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    logging.basicConfig(
        level=level,
        format=format_string,
        datefmt=TIME_FORMAT,
        handlers=handlers,
        force=True
    )

    # 降低第三方库日志级别
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('websocket').setLevel(logging.WARNING)


def get_logger(
    name: str,
    listener: Optional[Callable[[str, str], None]] = None
) -> JQLogger:
    """
    获取 jqdriver 日志器

    Args:
        name: 日志器名称（通常为 __name__）
        listener: 监听回调函数

    Returns:
        JQLogger 实例
    """
    return JQLogger(name, listener)


# 便捷的默认日志器
_default_logger: Optional[JQLogger] = None


def log(message: str, level: LogLevel = "info"):
    """
    便捷的日志函数

    Args:
        message: 日志消息
        level: 日志级别
    """
    global _default_logger
    if _default_logger is None:
        _default_logger = get_logger("jqdriver")

    log_method = getattr(_default_logger, level, _default_logger.info)
    log_method(message)

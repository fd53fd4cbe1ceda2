"""
Utils 模块初始化文件
"""

from .logger import JQLogger, get_logger, setup_logging, log
from .port_check import PortChecker

__all__ = [
    'JQLogger',
    'get_logger',
    'setup_logging',
    'log',
    'PortChecker',
]

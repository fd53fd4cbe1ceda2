"""
jqdriver - 基于 DrissionPage 的 jQuery 风格链式 API

把 add / addClass / attr / css / html / text / val / remove 等 jQuery 调用
转换为页面内执行的 JavaScript，再把返回的节点包装为 ElementHandle。

用法:
    from jqdriver import BrowserManager, JQueryFactory

    manager = BrowserManager('127.0.0.1:9222')
    factory = JQueryFactory(manager.get_executor())

    factory.query('#todo li').add_class('checked').css('color', 'gray')
"""

from jqdriver.core.factory import JQueryFactory
from jqdriver.core.quoting import requires_apostrophe
from jqdriver.core.selection import SelectionSet
from jqdriver.domain.entities import ElementHandle
from jqdriver.exceptions import (
    JQDriverError,
    UnexpectedResultError,
    EmptySelectionError,
    JQueryUnavailableError,
)
from jqdriver.infrastructure.browser.browser_manager import BrowserManager
from jqdriver.infrastructure.browser.tab_executor import TabScriptExecutor

__version__ = '0.1.0'

__all__ = [
    'JQueryFactory',
    'SelectionSet',
    'ElementHandle',
    'BrowserManager',
    'TabScriptExecutor',
    'requires_apostrophe',
    'JQDriverError',
    'UnexpectedResultError',
    'EmptySelectionError',
    'JQueryUnavailableError',
]

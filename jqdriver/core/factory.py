"""
jQuery 工厂

调用链的入口: 确认页面上有 jQuery，然后用选择器创建初始的 SelectionSet。

使用示例:
    manager = BrowserManager()
    factory = JQueryFactory(manager.get_executor())

    items = factory.query('.todo-item')
    first = factory.wrap(items.get(0))
"""

import time
from typing import Optional, TYPE_CHECKING

from jqdriver import config
from jqdriver.config import JQueryConfig
from jqdriver.core.quoting import quote_argument
from jqdriver.core.result_decoder import decode_nodes
from jqdriver.core.selection import SelectionSet
from jqdriver.domain.entities import ElementHandle
from jqdriver.exceptions import JQueryUnavailableError
from jqdriver.infrastructure.js.script_store import ScriptStore
from jqdriver.utils.logger import get_logger

if TYPE_CHECKING:
    from jqdriver.domain.interfaces import IScriptExecutor


logger = get_logger(__name__)


class JQueryFactory:
    """
    jQuery 工厂

    职责:
    - 探测并按需注入 jQuery
    - 执行初始查询，构造 SelectionSet
    """

    def __init__(self, executor: 'IScriptExecutor', jquery_config: Optional[JQueryConfig] = None):
        """
        初始化工厂

        Args:
            executor: 脚本执行器
            jquery_config: jQuery 注入配置，默认使用全局 jquery_config
        """
        self.executor = executor
        self.config = jquery_config or config.jquery_config

    def has_jquery(self) -> bool:
        """页面上是否已有 jQuery"""
        return bool(self.executor.run_js(ScriptStore.JQUERY_PROBE))

    def ensure_jquery(self) -> None:
        """
        确保页面上有 jQuery

        缺少时注入 script 标签并轮询，直到加载完成或超时。

        Raises:
            JQueryUnavailableError: 未开启自动注入，或注入后超时仍不可用
        """
        if self.has_jquery():
            return

        if not self.config.auto_inject:
            raise JQueryUnavailableError("页面上没有 jQuery，且未开启自动注入")

        logger.info(f"页面缺少 jQuery，注入 {self.config.jquery_url}")
        self.executor.run_js(ScriptStore.get_inject_jquery(self.config.jquery_url))

        deadline = time.monotonic() + self.config.inject_timeout
        while True:
            if self.has_jquery():
                logger.debug("jQuery 已就绪")
                return
            if time.monotonic() >= deadline:
                break
            time.sleep(self.config.poll_interval)

        raise JQueryUnavailableError(
            f"等待 {self.config.inject_timeout} 秒后 jQuery 仍不可用: {self.config.jquery_url}"
        )

    def query(self, selector: str) -> SelectionSet:
        """
        查询匹配元素，返回新的选择集

        Args:
            selector: CSS / jQuery 选择器，按引号规则处理

        Returns:
            SelectionSet
        """
        self.ensure_jquery()

        quoted = quote_argument(selector)
        script = ScriptStore.get_query(quoted)
        if config.logging_config.log_scripts:
            logger.script(script)
        nodes = decode_nodes(self.executor.run_js(script))
        return SelectionSet(self.executor, quoted, nodes)

    def wrap(self, handle: ElementHandle) -> SelectionSet:
        """以单个元素为起点开启新的调用链"""
        return handle.to_selection()

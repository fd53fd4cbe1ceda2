"""
浏览器管理器 - 基础设施层实现

封装 DrissionPage 的浏览器连接和标签页管理，并为选择集提供脚本执行器。
"""

from typing import List, Dict, Any, Optional

from DrissionPage import ChromiumPage
from DrissionPage.errors import PageDisconnectedError, TargetNotFoundError

from jqdriver import config
from jqdriver.infrastructure.browser.tab_executor import TabScriptExecutor
from jqdriver.utils.logger import get_logger
from jqdriver.utils.port_check import PortChecker


logger = get_logger(__name__)


class BrowserManager:
    """
    浏览器管理器

    职责:
    - 连接浏览器
    - 管理标签页
    - 提供脚本执行器
    """

    def __init__(self, addr: Optional[str] = None):
        """
        初始化浏览器管理器

        Args:
            addr: 浏览器调试地址，默认读取 browser_config.addr
        """
        self.addr = addr or config.browser_config.addr
        self.page: Optional[ChromiumPage] = None

    def connect(self) -> ChromiumPage:
        """
        连接浏览器

        Returns:
            ChromiumPage 对象

        Raises:
            ConnectionError: 无法连接到浏览器
        """
        host, port = PortChecker.split_addr(self.addr)
        if not PortChecker.is_port_open(port, host, config.browser_config.port_check_timeout):
            raise ConnectionError(f"无法连接到 {self.addr}。请确保浏览器已启用调试模式。")

        self.page = ChromiumPage(addr_or_opts=self.addr)
        logger.info(f"已连接浏览器 {self.addr}")
        return self.page

    def is_connected(self) -> bool:
        """检查是否已连接"""
        return self.page is not None

    def get_tabs(self) -> List[Dict[str, Any]]:
        """
        获取所有打开的标签页

        Returns:
            标签页信息列表
        """
        if not self.page:
            self.connect()

        tabs = []
        for tab_id in self.page.tab_ids:
            try:
                tab = self.page.get_tab(tab_id)
                tabs.append({
                    "id": tab_id,
                    "title": tab.title or "无标题",
                    "url": tab.url
                })
            except (PageDisconnectedError, TargetNotFoundError):
                # 枚举过程中被关闭的标签页
                continue
        return tabs

    def get_tab(self, tab_id: str) -> Optional[Any]:
        """
        获取指定标签页

        Args:
            tab_id: 标签页 ID

        Returns:
            标签页对象或 None
        """
        if not self.page:
            return None
        try:
            return self.page.get_tab(tab_id)
        except (PageDisconnectedError, TargetNotFoundError):
            return None

    def get_current_tab(self) -> Optional[Any]:
        """获取当前活动标签页"""
        if not self.page:
            return None
        return self.page

    def run_js(self, script: str, tab: Optional[Any] = None) -> Any:
        """
        在标签页中执行 JavaScript

        Args:
            script: JavaScript 代码
            tab: 目标标签页（可选，默认当前页）

        Returns:
            执行结果
        """
        target = tab or self.page
        if target:
            return target.run_js(script)
        return None

    def get_executor(self, tab: Optional[Any] = None) -> TabScriptExecutor:
        """
        获取供选择集使用的脚本执行器

        Args:
            tab: 目标标签页（可选，默认当前页；未连接时先连接）
        """
        target = tab or self.page or self.connect()
        return TabScriptExecutor(target)

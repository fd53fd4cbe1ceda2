"""
脚本执行器接口

定义浏览器一侧的两个抽象契约：执行脚本、读取节点。
"""

from typing import Protocol, Any, Optional, runtime_checkable


class IScriptExecutor(Protocol):
    """
    脚本执行器接口

    职责:
    - 在页面上下文中执行一段 JavaScript 并返回结果
    - 隔离具体浏览器实现（DrissionPage 的 ChromiumPage / Tab / Frame 等）
    """

    def run_js(self, script: str) -> Any:
        """执行 JavaScript"""
        ...


@runtime_checkable
class IElementNode(Protocol):
    """
    页面节点接口

    对应 DrissionPage 的 ChromiumElement。节点脱离文档后，
    任何访问都可能抛出 ElementLostError。
    """

    @property
    def tag(self) -> str:
        """标签名"""
        ...

    def attr(self, name: str) -> Optional[str]:
        """读取属性"""
        ...

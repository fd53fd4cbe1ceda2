"""
元素句柄实体

提供 ElementHandle 类，把一个页面节点和推导出它的 jQuery 表达式绑定在一起。

核心功能:
- 记录节点在所属集合中的位置
- 生成可以重新定位该节点的选择器表达式
- 读取属性、读取计算样式
- 以单个元素为起点开启新的调用链
"""

from typing import Optional, TYPE_CHECKING

from jqdriver import config
from jqdriver.infrastructure.js.script_store import ScriptStore
from jqdriver.utils.logger import get_logger

if TYPE_CHECKING:
    from jqdriver.core.selection import SelectionSet
    from jqdriver.domain.interfaces import IScriptExecutor, IElementNode


logger = get_logger(__name__)


def element_expression(selector: str, index: int) -> str:
    """
    拼接单个元素的选择器表达式

    所属集合的选择器如果已经是 jQuery 表达式，直接追加下标；
    否则先包一层 jQuery(...)，保证结果是合法的 JavaScript。

    Args:
        selector: 所属集合的选择器，如 "'.item'" 或 "jQuery('.a').add('.b')"
        index: 元素下标

    Returns:
        形如 "jQuery('.item')[3]" 的表达式
    """
    base = selector if selector.startswith('jQuery(') else f'jQuery({selector})'
    return f'{base}[{index}]'


class ElementHandle:
    """
    单个页面元素的句柄

    句柄只持有节点的引用，不拥有节点。页面刷新或节点被移除后，
    对节点的访问会抛出 DrissionPage 的 ElementLostError，这里不做掩盖。

    Attributes:
        index: 创建时在所属集合中的位置
        selector: 可以重新定位该元素的 jQuery 表达式
        node: 页面节点（DrissionPage 的 ChromiumElement）
        tag: 创建时读取的标签名
    """

    def __init__(
        self,
        executor: 'IScriptExecutor',
        selector: str,
        index: int,
        node: 'IElementNode',
        tag: Optional[str] = None
    ) -> None:
        """
        初始化元素句柄

        Args:
            executor: 共享的脚本执行器
            selector: 所属集合的选择器
            index: 元素在集合中的位置
            node: 页面节点
            tag: 已知的标签名；不传时从节点读取

        Raises:
            ElementLostError: 读取标签名时节点已脱离文档
        """
        self._executor = executor
        self.index: int = index
        self.selector: str = element_expression(selector, index)
        self.node: 'IElementNode' = node
        # 读取标签名会访问节点，失效节点在这里暴露
        self.tag: str = tag if tag is not None else node.tag

    @property
    def executor(self) -> 'IScriptExecutor':
        """共享的脚本执行器"""
        return self._executor

    def attr(self, name: str) -> Optional[str]:
        """读取属性，直接委托给节点"""
        return self.node.attr(name)

    def css(self, css_property: str) -> str:
        """
        读取计算样式

        Args:
            css_property: CSS 属性名，如 'color'

        Returns:
            样式值字符串
        """
        script = ScriptStore.get_chain_call(self.selector, f".css('{css_property}');")
        if config.logging_config.log_scripts:
            logger.script(script)
        result = self._executor.run_js(script)
        return None if result is None else str(result)

    def with_selector(self, selector: str, index: int) -> 'ElementHandle':
        """
        按新的所属选择器和位置重建句柄，不访问节点

        选择器原样拼接为 <selector>[<index>]，不再包 jQuery(...)。

        Args:
            selector: 新的所属选择器
            index: 句柄在集合中的位置
        """
        handle = ElementHandle(self._executor, selector, index, self.node, tag=self.tag)
        handle.selector = f'{selector}[{index}]'
        return handle

    def to_selection(self) -> 'SelectionSet':
        """以当前元素为唯一成员，开启新的调用链"""
        from jqdriver.core.selection import SelectionSet
        return SelectionSet.from_handle(self)

    def __repr__(self) -> str:
        return f"ElementHandle(index={self.index}, selector={self.selector!r}, tag={self.tag!r})"

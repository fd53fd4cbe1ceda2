"""
jQuery 选择集

SelectionSet 保存一次查询得到的全部 ElementHandle，并提供 jQuery 风格的链式方法。

每个方法都遵循同一个流程:
1. 在当前选择器外包一层 jQuery(...)，拼接方法调用，得到脚本
2. 通过共享的脚本执行器在页面中执行
3. 方法可能改变匹配集合时，把返回值重新解码为 ElementHandle 列表
4. 返回自身，便于继续链式调用

使用示例:
    selection = factory.query('.todo-item')
    selection.add_class('done').attr('data-state', 'closed')
    if selection.has_class('urgent'):
        print(selection.text())
"""

from typing import Any, Iterator, List, Optional, TYPE_CHECKING

from DrissionPage.errors import ElementLostError

from jqdriver import config
from jqdriver.core.quoting import quote_argument, join_arguments
from jqdriver.core.result_decoder import decode_nodes, decode_length_map
from jqdriver.domain.entities import ElementHandle
from jqdriver.exceptions import EmptySelectionError
from jqdriver.infrastructure.js.script_store import ScriptStore
from jqdriver.utils.logger import get_logger

if TYPE_CHECKING:
    from jqdriver.domain.interfaces import IScriptExecutor


logger = get_logger(__name__)


class SelectionSet:
    """
    jQuery 选择集

    持有选择器表达式、按 DOM 匹配顺序排列的元素句柄，以及一个手动迭代游标。
    不拥有页面节点，也不拥有脚本执行器。

    Attributes:
        selector: 求值后恰好得到当前元素的 jQuery 表达式
        cursor: get() 不带参数时使用的游标
    """

    def __init__(
        self,
        executor: Optional['IScriptExecutor'] = None,
        selector: str = '',
        nodes: Optional[List[Any]] = None
    ) -> None:
        """
        从节点列表创建选择集

        节点在快照之后已脱离文档（创建句柄时抛出 ElementLostError）的，
        单独丢弃，不影响其余节点。其他异常照常抛出。

        Args:
            executor: 脚本执行器
            selector: 得到这些节点的选择器表达式
            nodes: 页面节点列表
        """
        self._executor = executor
        self.selector: str = selector
        self.cursor: int = 0
        self._elements: List[ElementHandle] = []

        for position, node in enumerate(nodes or []):
            try:
                handle = ElementHandle(executor, selector, len(self._elements), node)
            except ElementLostError:
                logger.debug(f"丢弃已失效的节点: {selector} 第 {position} 个")
                continue
            self._elements.append(handle)

    @classmethod
    def from_handle(cls, handle: ElementHandle) -> 'SelectionSet':
        """
        以单个元素句柄为唯一成员创建选择集

        新选择器为 jQuery(<句柄选择器>)，与句柄共享脚本执行器。
        """
        selection = cls(handle.executor, f"jQuery({handle.selector})")
        selection._elements.append(handle)
        return selection

    # ============================================================
    # 基础
    # ============================================================

    @property
    def executor(self) -> Optional['IScriptExecutor']:
        """共享的脚本执行器"""
        return self._executor

    @property
    def elements(self) -> List[ElementHandle]:
        """当前元素句柄（副本）"""
        return list(self._elements)

    def _exec_js(self, suffix: str) -> Any:
        """
        在当前选择器外包一层 jQuery(...)，拼接 suffix 后执行

        Args:
            suffix: 紧跟在 jQuery(selector) 之后的代码
        """
        script = ScriptStore.get_chain_call(self.selector, suffix)
        if config.logging_config.log_scripts:
            logger.script(script)
        return self._executor.run_js(script)

    def to_handles(self, result: Any) -> List[ElementHandle]:
        """
        把脚本返回值转换为元素句柄列表

        接受节点序列或带 length 的索引映射，按下标升序生成句柄。

        Raises:
            UnexpectedResultError: 无法识别的返回值
        """
        return self._wrap_nodes(decode_nodes(result))

    def _wrap_nodes(self, nodes: List[Any]) -> List[ElementHandle]:
        return [
            ElementHandle(self._executor, self.selector, i, node)
            for i, node in enumerate(nodes)
        ]

    def overwrite_selectors(self, selector: str) -> None:
        """
        替换选择集的选择器，并按新选择器重建全部句柄

        按句柄在集合中的位置重新编号，重建后第 i 个句柄的选择器为 <selector>[i]。
        """
        self.selector = selector
        self._elements = [
            handle.with_selector(selector, position)
            for position, handle in enumerate(self._elements)
        ]

    # ============================================================
    # add()
    # ============================================================

    def add(self, selector_elements_html: str, context: Optional[str] = None) -> 'SelectionSet':
        """
        向匹配集合中添加元素（http://api.jquery.com/add/）

        单参数时，参数可以是选择器、元素表达式或 HTML 片段，按引号规则处理，
        返回值接受两种形态。

        带 context 时，选择器总是加引号，context 原样拼接；返回值只接受带
        length 的索引映射，其他形态抛出 UnexpectedResultError。

        Args:
            selector_elements_html: 选择器 / 元素表达式 / HTML 片段
            context: 选择器开始匹配的位置，JavaScript 表达式

        Returns:
            自身（元素与选择器均已替换）
        """
        if context is None:
            argument = quote_argument(selector_elements_html)
            result = self._exec_js(f".add({argument});")
            new_selector = f"jQuery({self.selector}).add({argument})"
            self._elements = self.to_handles(result)
        else:
            arguments = f"'{selector_elements_html}',{context}"
            result = self._exec_js(f".add({arguments});")
            new_selector = f"jQuery({self.selector}).add({arguments})"
            self._elements = self._wrap_nodes(decode_length_map(result))
        self.overwrite_selectors(new_selector)
        return self

    # ============================================================
    # 修改类方法
    # ============================================================

    def add_class(self, class_name_function: str) -> 'SelectionSet':
        """
        为每个匹配元素添加 class（http://api.jquery.com/addClass/）

        Args:
            class_name_function: 一个或多个 class 名，或 function(index, currentClass)
        """
        self._exec_js(f".addClass({quote_argument(class_name_function)});")
        return self

    def after(self, *content: str) -> 'SelectionSet':
        """
        在每个匹配元素之后插入内容（http://api.jquery.com/after/）

        Args:
            content: HTML 字符串、元素或 jQuery 表达式，逐个按引号规则处理

        Raises:
            ValueError: 没有传入内容
        """
        result = self._exec_js(f".after({join_arguments(content)});")
        self._elements = self.to_handles(result)
        return self

    def append(self, *content: str) -> 'SelectionSet':
        """
        在每个匹配元素内部末尾插入内容（http://api.jquery.com/append/）

        Raises:
            ValueError: 没有传入内容
        """
        result = self._exec_js(f".append({join_arguments(content)});")
        self._elements = self.to_handles(result)
        return self

    def append_to(self, target: str) -> 'SelectionSet':
        """把每个匹配元素插入到 target 的末尾（http://api.jquery.com/appendTo/）"""
        self._exec_js(f".appendTo({quote_argument(target)});")
        return self

    # ============================================================
    # attr() / css()
    # ============================================================

    def _first(self) -> ElementHandle:
        if not self._elements:
            raise EmptySelectionError(f"选择集为空: {self.selector}")
        return self._elements[0]

    def attr(self, attribute_name: str, new_value: Optional[str] = None):
        """
        读取首个元素的属性，或为所有匹配元素设置属性

        Args:
            attribute_name: 属性名
            new_value: 不传时读取；传入时设置，按引号规则处理

        Returns:
            读取时返回属性值；设置时返回自身
        """
        if new_value is None:
            return self._first().attr(attribute_name)
        self._exec_js(f'.attr("{attribute_name}",{quote_argument(new_value)});')
        return self

    def css(self, css_property: str, new_value: Optional[str] = None):
        """
        读取首个元素的计算样式，或为所有匹配元素设置样式

        Args:
            css_property: CSS 属性名
            new_value: 不传时读取；传入时设置，按引号规则处理
        """
        if new_value is None:
            return self._first().css(css_property)
        self._exec_js(f'.css("{css_property}",{quote_argument(new_value)});')
        return self

    # ============================================================
    # get()
    # ============================================================

    def get(self, index: Optional[int] = None) -> Optional[ElementHandle]:
        """
        按下标取元素，或按游标取下一个元素

        不带参数时返回游标处的元素并前移游标。游标越界时抛出 IndexError，
        调用方需要自己用 len() 控制。

        带参数时，下标超出范围（包括负数）返回 None。

        Args:
            index: 元素下标
        """
        if index is None:
            handle = self._elements[self.cursor]
            self.cursor += 1
            return handle
        if 0 <= index < len(self._elements):
            return self._elements[index]
        return None

    # ============================================================
    # 查询类方法
    # ============================================================

    def has_class(self, class_name: str) -> bool:
        """
        任一匹配元素的 class 属性包含 class_name 即为 True

        按子串判断，'btn' 也会命中 'btn-primary'。
        """
        for element in self._elements:
            if class_name in (element.attr('class') or ''):
                return True
        return False

    def is_empty(self) -> bool:
        """选择集中没有元素"""
        return len(self._elements) == 0

    # ============================================================
    # html() / text() / val()
    # ============================================================

    @staticmethod
    def _to_text(result: Any) -> Optional[str]:
        return None if result is None else str(result)

    def html(self, html_string: Optional[str] = None):
        """
        读取首个元素的 HTML，或设置所有匹配元素的 HTML（http://api.jquery.com/html/）

        设置时 html_string 总是加引号。
        """
        if html_string is None:
            return self._to_text(self._exec_js(".html();"))
        result = self._exec_js(f".html('{html_string}');")
        self._elements = self.to_handles(result)
        return self

    def text(self, text_string_function: Optional[str] = None):
        """
        读取全部匹配元素合并后的文本，或设置文本（http://api.jquery.com/text/）

        Args:
            text_string_function: 文本，或 function(index, text)，按引号规则处理
        """
        if text_string_function is None:
            return self._to_text(self._exec_js(".text();"))
        result = self._exec_js(f".text({quote_argument(text_string_function)});")
        self._elements = self.to_handles(result)
        return self

    def val(self, value: Optional[str] = None):
        """
        读取首个元素的值，或设置所有匹配元素的值（http://api.jquery.com/val/）

        设置时 value 总是加引号。
        """
        if value is None:
            return self._to_text(self._exec_js(".val();"))
        result = self._exec_js(f".val('{value}');")
        self._elements = self.to_handles(result)
        return self

    # ============================================================
    # remove()
    # ============================================================

    def remove(self, selector: Optional[str] = None) -> None:
        """
        把匹配元素从文档中移除（http://api.jquery.com/remove/）

        Args:
            selector: 进一步筛选要移除元素的选择器，总是加引号
        """
        if selector is None:
            self._exec_js(".remove();")
        else:
            self._exec_js(f".remove('{selector}');")

    # ============================================================
    # 容器协议
    # ============================================================

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[ElementHandle]:
        return iter(list(self._elements))

    def __getitem__(self, index: int) -> ElementHandle:
        return self._elements[index]

    def __repr__(self) -> str:
        return f"SelectionSet(selector={self.selector!r}, size={len(self._elements)})"

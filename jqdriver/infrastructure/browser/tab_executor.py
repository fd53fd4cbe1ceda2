"""
标签页脚本执行器

DrissionPage 对普通对象返回值做 JSON 序列化，jQuery 对象里的节点引用会丢失，
数组则逐项转换为 ChromiumElement。这里在执行前包一层脚本，把 jQuery 对象
展开为带标记的数组，回到 Python 后再还原为带 length 的索引映射；
其余返回值原样透传。
"""

from typing import Any, Dict

from jqdriver.infrastructure.js.script_store import ScriptStore


def to_length_map(nodes: list) -> Dict[str, Any]:
    """
    把节点列表转换为 jQuery 对象的形态

    Returns:
        形如 {'length': n, '0': node0, '1': node1, ...} 的映射
    """
    length_map: Dict[str, Any] = {'length': len(nodes)}
    for i, node in enumerate(nodes):
        length_map[str(i)] = node
    return length_map


class TabScriptExecutor:
    """
    包装 DrissionPage 的 tab / frame，实现 IScriptExecutor

    Attributes:
        tab: ChromiumPage、ChromiumTab 或 ChromiumFrame
    """

    def __init__(self, tab: Any):
        self.tab = tab

    def run_js(self, script: str) -> Any:
        """执行脚本，jQuery 对象返回值还原为带 length 的索引映射"""
        result = self.tab.run_js(ScriptStore.get_unwrap_jquery(script))
        if isinstance(result, list) and result and isinstance(result[0], str) \
                and result[0] == ScriptStore.JQUERY_MARKER:
            return to_length_map(result[1:])
        return result

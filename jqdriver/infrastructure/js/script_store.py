"""
JavaScript 脚本存储模块 - 基础设施层实现

将所有在页面中执行的 JavaScript 集中管理，方便维护、测试和复用。

模块结构:
- JQUERY_PROBE: 检测页面是否已加载 jQuery
- get_inject_jquery: 注入 jQuery 的脚本
- get_query: 工厂查询脚本
- get_chain_call: 在选择器上调用一个 jQuery 方法
- get_unwrap_jquery: 把 jQuery 对象返回值展开为带标记的数组
"""

from typing import Final


class ScriptStore:
    """
    JavaScript 脚本存储

    集中管理所有 JavaScript 脚本，提供类型安全的访问方式。
    """

    # ============================================================
    # jQuery 探测
    # ============================================================
    JQUERY_PROBE: Final[str] = "return typeof window.jQuery === 'function';"

    # jQuery 对象展开后数组的首项标记
    JQUERY_MARKER: Final[str] = '__jq__'

    # ============================================================
    # jQuery 注入
    # ============================================================
    @staticmethod
    def get_inject_jquery(jquery_url: str) -> str:
        """
        生成 jQuery 注入脚本

        已经存在同地址的 script 标签时不再重复注入。

        Args:
            jquery_url: jQuery 文件地址

        Returns:
            JavaScript 代码
        """
        url_escaped = jquery_url.replace('\\', '\\\\').replace("'", "\\'")
        return f"""
        const src = '{url_escaped}';
        if (document.querySelector('script[src="' + src + '"]')) {{
            return false;
        }}
        const script = document.createElement('script');
        script.src = src;
        (document.head || document.documentElement).appendChild(script);
        return true;
        """

    # ============================================================
    # 查询与链式调用
    # ============================================================
    @staticmethod
    def get_query(selector: str) -> str:
        """
        生成工厂查询脚本，返回匹配元素的数组

        Args:
            selector: 已按引号规则处理过的选择器表达式
        """
        return f"return jQuery({selector}).get();"

    @staticmethod
    def get_chain_call(selector: str, suffix: str) -> str:
        """
        在选择器外包一层 jQuery(...) 并拼接方法调用

        Args:
            selector: 当前集合的选择器表达式
            suffix: 紧跟在 jQuery(selector) 之后的代码，如 ".addClass('x');"
        """
        return f"return jQuery({selector}){suffix}"

    # ============================================================
    # 返回值展开
    # ============================================================
    @staticmethod
    def get_unwrap_jquery(script: str) -> str:
        """
        包装一段脚本，返回值是 jQuery 对象时展开为带标记的节点数组

        DrissionPage 会把普通对象经 JSON 序列化后返回，jQuery 对象里的节点
        引用因此丢失；数组则会逐项转换为元素对象。展开后的数组以
        JQUERY_MARKER 开头，便于和脚本本身返回的普通数组区分。

        Args:
            script: 以 return 开头的原始脚本
        """
        return f"""
        const __jqResult = (function() {{ {script} }})();
        if (__jqResult && __jqResult.jquery) {{
            return ['{ScriptStore.JQUERY_MARKER}'].concat(__jqResult.toArray());
        }}
        return __jqResult;
        """

"""
jqdriver 异常定义

页面节点失效时抛出的是 DrissionPage 自己的 ElementLostError，
这里不做包装，直接向调用方传播。
"""

from typing import Any


class JQDriverError(Exception):
    """jqdriver 所有自定义异常的基类"""
    pass


class UnexpectedResultError(JQDriverError, TypeError):
    """
    脚本返回值的结构无法识别

    既不是节点序列，也不是带 length 字段的索引映射。

    Attributes:
        result: 原始返回值
    """

    def __init__(self, message: str, result: Any = None):
        super().__init__(message)
        self.result = result


class EmptySelectionError(JQDriverError, IndexError):
    """在空集合上读取首个元素的属性或样式"""
    pass


class JQueryUnavailableError(JQDriverError):
    """注入后页面上仍然没有 jQuery"""
    pass

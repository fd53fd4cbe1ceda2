"""
脚本参数引号规则

判断一个字符串参数是字面量（需要包单引号），还是可以直接执行的 JavaScript。

规则（按顺序任一命中即视为 JavaScript，不加引号）:
- 第一个 '(' 之前的部分包含 function
- 第一个 '.' 之前的部分包含 document
- 第一个 '(' 之前的部分包含 $
- 第一个 '(' 之前的部分包含 jQuery

这是启发式判断而不是语法解析。已知局限: 以 "document." 开头的普通文本
会被当成表达式。保持原样，调用方需要时自行加引号。
"""

from typing import Iterable


def requires_apostrophe(parameter: str) -> bool:
    """
    判断参数是否需要包单引号

    Args:
        parameter: 脚本函数的参数

    Returns:
        True 表示按字面量处理，需要加引号
    """
    head = parameter.split('(')[0]
    if ('function' in head
            or 'document' in parameter.split('.')[0]
            or '$' in head
            or 'jQuery' in head):
        return False
    return True


def quote_argument(parameter: str) -> str:
    """按 requires_apostrophe 的结果给参数加单引号"""
    if requires_apostrophe(parameter):
        return f"'{parameter}'"
    return parameter


def join_arguments(parameters: Iterable[str]) -> str:
    """
    逐个加引号后用逗号拼接

    Raises:
        ValueError: 没有任何参数
    """
    quoted = [quote_argument(p) for p in parameters]
    if not quoted:
        raise ValueError("至少需要一个参数")
    return ','.join(quoted)

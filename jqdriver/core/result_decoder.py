"""
脚本返回值解码

驱动返回 jQuery 结果的形态有两种:
- ARRAY: 节点序列（list / tuple）
- LENGTH_MAP: 带 length 字段、以 "0"、"1"... 为键的映射，
  部分驱动把 jQuery 对象序列化成普通对象时就是这种形态

其他形态一律视为错误，不会静默返回空列表。
"""

from enum import Enum
from typing import Any, List, Mapping

from jqdriver.exceptions import UnexpectedResultError


class ResultShape(Enum):
    """返回值形态"""
    ARRAY = 'array'
    LENGTH_MAP = 'length_map'


def classify_result(result: Any) -> ResultShape:
    """
    判断返回值形态

    Raises:
        UnexpectedResultError: 无法识别的形态
    """
    if isinstance(result, Mapping) and 'length' in result:
        return ResultShape.LENGTH_MAP
    if isinstance(result, (list, tuple)):
        return ResultShape.ARRAY
    raise UnexpectedResultError(
        f"无法识别的脚本返回值: {type(result).__name__}", result=result
    )


def _nodes_from_length_map(result: Mapping) -> List[Any]:
    try:
        length = int(result['length'])
    except (TypeError, ValueError) as e:
        raise UnexpectedResultError(
            f"length 字段不是整数: {result['length']!r}", result=result
        ) from e

    nodes = []
    for i in range(length):
        key = str(i)
        if key in result:
            nodes.append(result[key])
        elif i in result:
            nodes.append(result[i])
        else:
            raise UnexpectedResultError(f"索引映射缺少键 {key}", result=result)
    return nodes


def decode_nodes(result: Any) -> List[Any]:
    """
    把两种形态统一解码为按下标升序排列的节点列表

    Args:
        result: run_js 的返回值

    Returns:
        节点列表

    Raises:
        UnexpectedResultError: 无法识别的形态
    """
    shape = classify_result(result)
    if shape is ResultShape.LENGTH_MAP:
        return _nodes_from_length_map(result)
    return list(result)


def decode_length_map(result: Any) -> List[Any]:
    """
    只接受 LENGTH_MAP 形态的解码

    Raises:
        UnexpectedResultError: 返回值不是带 length 的映射
    """
    if not (isinstance(result, Mapping) and 'length' in result):
        raise UnexpectedResultError(
            f"期望带 length 字段的映射，实际为 {type(result).__name__}", result=result
        )
    return _nodes_from_length_map(result)

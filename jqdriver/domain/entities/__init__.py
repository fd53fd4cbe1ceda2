# Domain Entities

"""
领域实体 - 核心业务对象

提供页面元素的包装对象，不依赖具体的浏览器驱动。
"""

from .element_handle import ElementHandle, element_expression

__all__ = [
    'ElementHandle',
    'element_expression',
]

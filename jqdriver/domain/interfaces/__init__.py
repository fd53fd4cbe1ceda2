# Domain Interfaces

"""
领域接口 - 抽象契约定义

使用 Python Protocol (Structural Subtyping) 定义接口，
实现依赖反转原则 (DIP)。
"""

from .executor import IScriptExecutor, IElementNode

__all__ = [
    'IScriptExecutor',
    'IElementNode',
]

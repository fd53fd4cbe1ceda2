"""
Pytest 配置文件

提供测试所需的 fixtures 和共享配置。
"""

import sys
from pathlib import Path

import pytest
from DrissionPage.errors import ElementLostError

# 确保项目根目录在 Python 路径中
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


# ============================================================
# Mock Browser Tab
# ============================================================

class MockBrowserTab:
    """模拟浏览器标签页，记录执行过的脚本并返回预设结果"""

    def __init__(self):
        self.scripts = []
        self.js_results = {}      # 按脚本精确匹配，值可以是可调用对象
        self.queued_results = []  # 未精确匹配时按调用顺序返回

    def run_js(self, script):
        """执行 JS 脚本（返回预设结果）"""
        self.scripts.append(script)
        if script in self.js_results:
            value = self.js_results[script]
            return value() if callable(value) else value
        if self.queued_results:
            return self.queued_results.pop(0)
        return None

    @property
    def last_script(self):
        """最后一次执行的脚本"""
        return self.scripts[-1] if self.scripts else None


# ============================================================
# Mock Element
# ============================================================

class MockElement:
    """模拟 DrissionPage 的 ChromiumElement"""

    def __init__(self, tag='div', attrs=None, stale=False):
        self._tag = tag
        self.attrs = attrs or {}
        self.stale = stale

    @property
    def tag(self):
        if self.stale:
            raise ElementLostError()
        return self._tag

    def attr(self, name):
        if self.stale:
            raise ElementLostError()
        return self.attrs.get(name)

    def __repr__(self):
        return f"MockElement({self._tag!r}, {self.attrs!r})"


@pytest.fixture
def mock_tab():
    """模拟浏览器标签页"""
    return MockBrowserTab()


@pytest.fixture
def make_element():
    """元素构造函数"""
    def _make(tag='li', stale=False, **attrs):
        return MockElement(tag=tag, attrs=attrs, stale=stale)
    return _make


@pytest.fixture
def nodes(make_element):
    """三个列表项节点"""
    return [
        make_element(id='first', **{'class': 'item btn-primary'}),
        make_element(id='second', **{'class': 'item'}),
        make_element(id='third', **{'class': 'item done'}),
    ]


@pytest.fixture
def selection(mock_tab, nodes):
    """由 '.item' 查询得到的选择集"""
    from jqdriver.core.selection import SelectionSet
    return SelectionSet(mock_tab, "'.item'", nodes)


# ============================================================
# Test Utilities
# ============================================================

@pytest.fixture
def capture_logs(capsys):
    """捕获日志输出"""
    def _capture():
        captured = capsys.readouterr()
        return captured.out
    return _capture

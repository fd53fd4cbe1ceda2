"""
SelectionSet 单元测试

测试选择集的构造、脚本拼接和返回值重新解码。
"""

import pytest
from jqdriver import config
from jqdriver.core import selection as selection_module
from jqdriver.core.selection import SelectionSet
from jqdriver.exceptions import EmptySelectionError, UnexpectedResultError


class TestConstruction:
    """从节点列表构造"""

    def test_one_handle_per_node(self, selection, nodes):
        """每个节点对应一个句柄，顺序一致"""
        assert len(selection) == 3
        assert [h.node for h in selection] == nodes
        assert [h.index for h in selection] == [0, 1, 2]

    def test_handle_selectors_derived_from_set(self, selection):
        """句柄选择器为 jQuery(<选择器>)[i]"""
        assert [h.selector for h in selection] == [
            "jQuery('.item')[0]",
            "jQuery('.item')[1]",
            "jQuery('.item')[2]",
        ]

    def test_stale_node_is_dropped(self, mock_tab, make_element):
        """失效节点被丢弃，剩余节点重新编号"""
        alive_a = make_element(id='a')
        stale = make_element(id='b', stale=True)
        alive_c = make_element(id='c')

        result = SelectionSet(mock_tab, "'li'", [alive_a, stale, alive_c])

        assert len(result) == 2
        assert [h.index for h in result] == [0, 1]
        assert [h.node for h in result] == [alive_a, alive_c]
        assert result.get(1).selector == "jQuery('li')[1]"

    def test_count_equals_live_nodes(self, mock_tab, make_element):
        """元素数量 = 输入节点数 - 失效节点数"""
        nodes = [make_element(stale=(i % 3 == 0)) for i in range(7)]
        result = SelectionSet(mock_tab, "'li'", nodes)
        assert len(result) == 7 - 3

    def test_other_errors_propagate(self, mock_tab):
        """失效以外的异常照常抛出"""
        class BrokenNode:
            @property
            def tag(self):
                raise RuntimeError('driver crashed')

        with pytest.raises(RuntimeError):
            SelectionSet(mock_tab, "'li'", [BrokenNode()])

    def test_empty_constructor(self):
        """无参构造得到空选择集"""
        result = SelectionSet()
        assert result.is_empty()
        assert result.selector == ''
        assert result.executor is None

    def test_no_script_executed(self, selection, mock_tab):
        """构造过程不执行脚本"""
        assert mock_tab.scripts == []

    def test_elements_returns_copy(self, selection):
        """elements 返回副本"""
        selection.elements.clear()
        assert len(selection) == 3


class TestFromHandle:
    """以单个句柄开启新链"""

    def test_seed_selection(self, selection, mock_tab):
        handle = selection.get(1)
        seeded = SelectionSet.from_handle(handle)

        assert seeded.selector == "jQuery(jQuery('.item')[1])"
        assert seeded.elements == [handle]
        assert seeded.executor is mock_tab

    def test_seed_chain_uses_new_selector(self, selection, mock_tab):
        seeded = SelectionSet.from_handle(selection.get(0))
        seeded.add_class('picked')

        assert mock_tab.last_script == "return jQuery(jQuery(jQuery('.item')[0])).addClass('picked');"


class TestToHandles:
    """返回值转换"""

    def test_length_map_and_array_give_same_order(self, selection, make_element):
        a, b = make_element(id='a'), make_element(id='b')

        from_map = selection.to_handles({'length': 2, '0': a, '1': b})
        from_array = selection.to_handles([a, b])

        assert [h.node for h in from_map] == [a, b]
        assert [h.node for h in from_array] == [a, b]
        assert [h.selector for h in from_map] == ["jQuery('.item')[0]", "jQuery('.item')[1]"]

    def test_unknown_shape_raises(self, selection):
        with pytest.raises(UnexpectedResultError):
            selection.to_handles('<li>not a node list</li>')


class TestOverwriteSelectors:
    """选择器整体替换"""

    def test_rewrites_every_handle(self, selection):
        selection.overwrite_selectors("jQuery(.foo).add('.bar')")

        assert selection.selector == "jQuery(.foo).add('.bar')"
        assert [h.selector for h in selection] == [
            "jQuery(.foo).add('.bar')[0]",
            "jQuery(.foo).add('.bar')[1]",
            "jQuery(.foo).add('.bar')[2]",
        ]

    def test_does_not_touch_nodes(self, selection):
        """重建句柄不访问节点，节点失效也不影响"""
        for handle in selection:
            handle.node.stale = True

        selection.overwrite_selectors("jQuery('.other')")
        assert len(selection) == 3

    def test_renumbers_by_position(self, selection):
        """单元素选择集的句柄原下标为 2，重建后按位置编号为 0"""
        single = SelectionSet.from_handle(selection.get(2))

        single.overwrite_selectors("jQuery('.x')")

        assert [h.selector for h in single] == ["jQuery('.x')[0]"]
        assert single.get(0).index == 0

    def test_selector_not_wrapped(self, selection):
        """新选择器原样追加下标，不再包 jQuery(...)"""
        selection.overwrite_selectors("'.foo'")

        assert selection.get(0).selector == "'.foo'[0]"
        assert selection.get(2).selector == "'.foo'[2]"


class TestAdd:
    """add() 测试"""

    def test_add_selector_literal(self, selection, mock_tab, nodes, make_element):
        extra = make_element(id='extra')
        mock_tab.queued_results.append([*nodes, extra])

        result = selection.add('.extra')

        assert result is selection
        assert mock_tab.last_script == "return jQuery('.item').add('.extra');"
        assert selection.selector == "jQuery('.item').add('.extra')"
        assert len(selection) == 4
        assert selection.get(3).node is extra
        assert selection.get(3).selector == "jQuery('.item').add('.extra')[3]"

    def test_add_expression_not_quoted(self, selection, mock_tab, nodes):
        mock_tab.queued_results.append(nodes)

        selection.add("$('#sidebar li')")

        assert mock_tab.last_script == "return jQuery('.item').add($('#sidebar li'));"
        assert selection.selector == "jQuery('.item').add($('#sidebar li'))"

    def test_add_accepts_length_map(self, selection, mock_tab, nodes):
        mock_tab.queued_results.append({'length': 2, '0': nodes[0], '1': nodes[2]})

        selection.add('.done')

        assert [h.node for h in selection] == [nodes[0], nodes[2]]
        assert [h.selector for h in selection] == [
            "jQuery('.item').add('.done')[0]",
            "jQuery('.item').add('.done')[1]",
        ]

    def test_add_with_context(self, selection, mock_tab, make_element):
        extra = make_element(id='extra')
        mock_tab.queued_results.append({'length': 1, '0': extra})

        selection.add('p', 'document.body')

        assert mock_tab.last_script == "return jQuery('.item').add('p',document.body);"
        assert selection.selector == "jQuery('.item').add('p',document.body)"
        assert [h.selector for h in selection] == ["jQuery('.item').add('p',document.body)[0]"]

    def test_add_with_context_always_quotes_selector(self, selection, mock_tab):
        mock_tab.queued_results.append({'length': 0})

        selection.add("$('p')", 'document')

        assert mock_tab.last_script == "return jQuery('.item').add('$('p')',document);"

    def test_add_with_context_rejects_array(self, selection, mock_tab, nodes):
        """带 context 时只接受索引映射，与单参数版本不同"""
        mock_tab.queued_results.append(list(nodes))

        with pytest.raises(UnexpectedResultError):
            selection.add('p', 'document.body')

    def test_single_argument_add_accepts_same_array(self, selection, mock_tab, nodes):
        mock_tab.queued_results.append(list(nodes))

        selection.add('p')

        assert len(selection) == 3


class TestUnchangedElementMethods:
    """不改变元素列表的修改方法"""

    def test_add_class(self, selection, mock_tab, nodes):
        result = selection.add_class('done')

        assert result is selection
        assert mock_tab.last_script == "return jQuery('.item').addClass('done');"
        assert [h.node for h in selection] == nodes

    def test_add_class_function(self, selection, mock_tab):
        selection.add_class("function(i, c){ return 'row-' + i; }")

        assert mock_tab.last_script == "return jQuery('.item').addClass(function(i, c){ return 'row-' + i; });"

    def test_append_to(self, selection, mock_tab):
        selection.append_to('#archive')
        assert mock_tab.last_script == "return jQuery('.item').appendTo('#archive');"

    def test_append_to_expression(self, selection, mock_tab):
        selection.append_to('document.body')
        assert mock_tab.last_script == "return jQuery('.item').appendTo(document.body);"

    def test_attr_setter(self, selection, mock_tab, nodes):
        result = selection.attr('title', 'hello')

        assert result is selection
        assert mock_tab.last_script == "return jQuery('.item').attr(\"title\",'hello');"
        assert [h.node for h in selection] == nodes

    def test_attr_setter_with_function(self, selection, mock_tab):
        selection.attr('id', 'function(i){ return "n" + i; }')
        assert mock_tab.last_script == "return jQuery('.item').attr(\"id\",function(i){ return \"n\" + i; });"

    def test_css_setter(self, selection, mock_tab):
        result = selection.css('color', 'red')

        assert result is selection
        assert mock_tab.last_script == "return jQuery('.item').css(\"color\",'red');"


class TestReMarshalingMethods:
    """执行后重新解码元素的方法"""

    def test_after(self, selection, mock_tab, nodes):
        mock_tab.queued_results.append(nodes)

        result = selection.after('<hr>', "$('#footer')")

        assert result is selection
        assert mock_tab.last_script == "return jQuery('.item').after('<hr>',$('#footer'));"
        assert len(selection) == 3

    def test_after_without_content_raises(self, selection, mock_tab):
        with pytest.raises(ValueError):
            selection.after()
        assert mock_tab.scripts == []

    def test_append(self, selection, mock_tab, nodes):
        mock_tab.queued_results.append({'length': 1, '0': nodes[1]})

        selection.append('<span>new</span>')

        assert mock_tab.last_script == "return jQuery('.item').append('<span>new</span>');"
        assert [h.node for h in selection] == [nodes[1]]
        assert selection.selector == "'.item'"

    def test_append_without_content_raises(self, selection):
        with pytest.raises(ValueError):
            selection.append()

    def test_html_setter_always_quotes(self, selection, mock_tab, nodes):
        mock_tab.queued_results.append(nodes)

        selection.html('<b>bold</b>')

        assert mock_tab.last_script == "return jQuery('.item').html('<b>bold</b>');"

    def test_text_setter(self, selection, mock_tab, nodes):
        mock_tab.queued_results.append(nodes)

        selection.text('hello')

        assert mock_tab.last_script == "return jQuery('.item').text('hello');"

    def test_text_setter_function(self, selection, mock_tab, nodes):
        mock_tab.queued_results.append(nodes)

        selection.text('function(i, t){ return t.toUpperCase(); }')

        assert mock_tab.last_script == "return jQuery('.item').text(function(i, t){ return t.toUpperCase(); });"

    def test_val_setter_always_quotes(self, selection, mock_tab, nodes):
        """val() 设置时不走引号规则"""
        mock_tab.queued_results.append(nodes)

        selection.val('document.title')

        assert mock_tab.last_script == "return jQuery('.item').val('document.title');"

    def test_setter_with_bad_result_raises(self, selection, mock_tab):
        mock_tab.queued_results.append('unexpected')

        with pytest.raises(UnexpectedResultError):
            selection.text('x')


class TestGetters:
    """读取类方法"""

    def test_attr_reads_first_node(self, selection, mock_tab):
        assert selection.attr('id') == 'first'
        assert mock_tab.scripts == []

    def test_attr_on_empty_raises(self, mock_tab):
        empty = SelectionSet(mock_tab, "'.none'", [])
        with pytest.raises(EmptySelectionError):
            empty.attr('id')
        with pytest.raises(IndexError):
            empty.css('color')

    def test_css_reads_first_element(self, selection, mock_tab):
        mock_tab.js_results["return jQuery(jQuery('.item')[0]).css('color');"] = 'rgb(0, 0, 0)'

        assert selection.css('color') == 'rgb(0, 0, 0)'

    def test_html(self, selection, mock_tab):
        mock_tab.js_results["return jQuery('.item').html();"] = '<b>x</b>'
        assert selection.html() == '<b>x</b>'

    def test_text(self, selection, mock_tab):
        mock_tab.js_results["return jQuery('.item').text();"] = 'onetwothree'
        assert selection.text() == 'onetwothree'

    def test_val_converts_to_string(self, selection, mock_tab):
        mock_tab.js_results["return jQuery('.item').val();"] = 42
        assert selection.val() == '42'

    def test_val_none_stays_none(self, selection):
        assert selection.val() is None


class TestHasClass:
    """has_class() 测试"""

    def test_any_element_matches(self, selection):
        assert selection.has_class('done') is True

    def test_substring_match(self, selection):
        """按子串判断，不是按 class 词判断"""
        assert selection.has_class('btn') is True

    def test_no_match(self, selection):
        assert selection.has_class('hidden') is False

    def test_missing_class_attribute(self, mock_tab, make_element):
        plain = SelectionSet(mock_tab, "'p'", [make_element(tag='p')])
        assert plain.has_class('any') is False


class TestRemove:
    """remove() 测试"""

    def test_remove_all(self, selection, mock_tab):
        assert selection.remove() is None
        assert mock_tab.last_script == "return jQuery('.item').remove();"

    def test_remove_filtered(self, selection, mock_tab):
        selection.remove('.done')
        assert mock_tab.last_script == "return jQuery('.item').remove('.done');"


class TestGet:
    """get() 测试"""

    def test_get_by_index(self, selection, nodes):
        assert selection.get(1).node is nodes[1]

    def test_get_out_of_range_returns_none(self, selection):
        """越界返回 None，不抛异常"""
        assert selection.get(3) is None
        assert selection.get(100) is None

    def test_get_negative_index_returns_none(self, selection):
        """负数下标不按 Python 习惯从末尾取，返回 None"""
        assert selection.get(-1) is None
        assert selection.get(-3) is None

    def test_get_with_cursor(self, selection, nodes):
        """不带参数时按游标依次返回"""
        assert selection.get().node is nodes[0]
        assert selection.get().node is nodes[1]
        assert selection.get().node is nodes[2]
        assert selection.cursor == 3

    def test_cursor_past_end_raises(self, selection):
        """游标越界是调用方的责任"""
        for _ in range(3):
            selection.get()
        with pytest.raises(IndexError):
            selection.get()


class TestIsEmpty:
    """is_empty() 测试"""

    def test_not_empty(self, selection):
        assert selection.is_empty() is False

    def test_empty(self, mock_tab):
        assert SelectionSet(mock_tab, "'.none'", []).is_empty() is True

    def test_empty_after_all_nodes_stale(self, mock_tab, make_element):
        result = SelectionSet(mock_tab, "'li'", [make_element(stale=True)])
        assert result.is_empty() is True


class TestContainerProtocol:
    """容器协议"""

    def test_iteration_and_indexing(self, selection, nodes):
        assert [h.node for h in selection] == nodes
        assert selection[2].node is nodes[2]

    def test_repr(self, selection):
        assert repr(selection) == "SelectionSet(selector=\"'.item'\", size=3)"


class TestScriptLogging:
    """脚本日志"""

    def test_scripts_are_logged(self, selection, monkeypatch):
        logged = []
        monkeypatch.setattr(selection_module.logger, 'listener', lambda m, l: logged.append((m, l)))

        selection.add_class('done')

        assert logged == [("return jQuery('.item').addClass('done');", 'script')]

    def test_logging_can_be_disabled(self, selection, monkeypatch):
        logged = []
        monkeypatch.setattr(selection_module.logger, 'listener', lambda m, l: logged.append(m))
        monkeypatch.setattr(config.logging_config, 'log_scripts', False)

        selection.add_class('done')

        assert logged == []

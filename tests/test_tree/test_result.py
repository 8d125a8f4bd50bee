"""树形结果构建测试

测试根节点识别、深度优先输出、叶子/展开状态计算、嵌套结果与环检测。
"""

import logging

import pytest

from ytree.exceptions import ArgumentNullException, ErrorCode, TreeIntegrityException
from ytree.tree import (
    PageList,
    TreeConverter,
    TreeNode,
    TreeResult,
    TreeTableConverter,
    TreeTableResult,
)
from tests.helpers import build_nodes, sample_nodes


def ids(nodes):
    return [node.id for node in nodes]


def by_id(nodes):
    return {node.id: node for node in nodes}


class TestRootDetection:
    """根节点识别测试"""

    def test_roots_are_empty_parent_nodes(self):
        roots = TreeTableResult(sample_nodes()).get_root_nodes()
        assert ids(roots) == ["1", "6"]

    def test_sliced_subtree_uses_min_level(self):
        nodes = [node for node in sample_nodes() if node.id in ("2", "4", "5")]
        roots = TreeTableResult(nodes).get_root_nodes()
        assert ids(roots) == ["2"]

    def test_roots_ordered_by_sort_id(self):
        nodes = build_nodes([("b", None, 2), ("a", None, 1), ("c", None, None)])
        assert ids(TreeTableResult(nodes).get_root_nodes()) == ["c", "a", "b"]

    def test_empty_data(self):
        assert TreeTableResult([]).get_result() == []

    def test_none_data(self):
        with pytest.raises(ArgumentNullException) as exc_info:
            TreeTableResult(None)
        assert exc_info.value.argument == "data"


class TestTreeTableResult:
    """扁平树表结果测试"""

    def test_depth_first_preorder(self):
        result = TreeTableResult(sample_nodes()).get_result()
        assert ids(result) == ["1", "2", "4", "5", "3", "6", "7"]

    def test_every_node_appears_once(self):
        nodes = sample_nodes()
        result = TreeTableResult(list(reversed(nodes))).get_result()
        assert sorted(ids(result)) == sorted(ids(nodes))

    def test_children_not_filled(self):
        result = TreeTableResult(sample_nodes()).get_result()
        assert all(node.children == [] for node in result)

    def test_node_mapper(self):
        result = TreeTableResult(sample_nodes(), node_mapper=lambda node: node.model_dump()).get_result()
        assert isinstance(result[0], dict)
        assert result[0]["id"] == "1"

    def test_unreachable_nodes_logged(self, caplog):
        nodes = build_nodes([("1", None, 1)]) + [
            TreeNode(id="9", parent_id="missing", path="/missing/9/", level=2),
        ]
        with caplog.at_level(logging.WARNING, logger="ytree.tree.result"):
            result = TreeTableResult(nodes).get_result()

        assert ids(result) == ["1"]
        assert "not reachable" in caplog.text
        assert caplog.records[-1].orphan_ids == ["9"]
        assert "['9']" in caplog.records[-1].getMessage()


class TestLeafState:
    """叶子状态测试"""

    def test_sync_leaf(self):
        result = by_id(TreeTableResult(sample_nodes()).get_result())

        assert result["1"].leaf is False
        assert result["2"].leaf is False
        assert result["3"].leaf is True
        assert result["4"].leaf is True
        assert result["6"].leaf is False

    def test_all_children_hidden_is_leaf(self):
        nodes = build_nodes([("1", None, 1), ("2", "1", 1, True), ("3", "1", 2, True)])
        result = by_id(TreeTableResult(nodes).get_result())
        assert result["1"].leaf is True

    def test_async_never_leaf(self):
        nodes = sample_nodes()
        for node in nodes:
            node.leaf = True
        result = TreeTableResult(nodes, is_async=True).get_result()
        assert all(node.leaf is False for node in result)

    def test_hidden_child_scenario(self):
        """A 有两个子节点：B 可见，C 隐藏"""
        nodes = build_nodes([("A", None, 1), ("B", "A", 2), ("C", "A", 3, True)])
        roots = TreeResult(nodes).get_result()

        assert ids(roots) == ["A"]
        root = roots[0]
        assert root.leaf is False
        visible = [child for child in root.children if not child.hide]
        assert ids(visible) == ["B"]
        assert visible[0].leaf is True
        # 隐藏节点保留在结果中，由界面决定是否显示
        hidden = [child for child in root.children if child.hide]
        assert ids(hidden) == ["C"]


class TestExpandedState:
    """展开状态测试"""

    def test_not_touched_without_expand_all(self):
        nodes = sample_nodes()
        nodes[0].expanded = True
        result = by_id(TreeTableResult(nodes).get_result())

        assert result["1"].expanded is True
        assert result["2"].expanded is None

    def test_sync_expand_all(self):
        result = TreeTableResult(sample_nodes(), expand_all=True).get_result()
        assert all(node.expanded is True for node in result)

    def test_async_expand_all_single_level_skipped(self):
        nodes = build_nodes([("1", None, 1), ("2", None, 2)])
        result = TreeTableResult(nodes, is_async=True, expand_all=True).get_result()
        assert all(node.expanded is None for node in result)

    def test_async_expand_all_multi_level(self):
        result = TreeTableResult(sample_nodes(), is_async=True, expand_all=True).get_result()
        assert all(node.expanded is True for node in result)


class TestTreeResult:
    """嵌套树结果测试"""

    def test_nested_children(self):
        roots = TreeResult(sample_nodes()).get_result()

        assert ids(roots) == ["1", "6"]
        assert ids(roots[0].children) == ["2", "3"]
        assert ids(roots[0].children[0].children) == ["4", "5"]
        assert ids(roots[1].children) == ["7"]

    def test_nested_states(self):
        roots = TreeResult(sample_nodes(), expand_all=True).get_result()
        second = roots[0].children[0]

        assert second.leaf is False
        assert second.children[0].leaf is True
        assert second.children[0].expanded is True

    def test_mapper_after_children_attached(self):
        roots = TreeResult(sample_nodes(), node_mapper=lambda node: node.model_dump()).get_result()
        assert [child["id"] for child in roots[0]["children"]] == ["2", "3"]


class TestCycleDetection:
    """环检测测试"""

    def test_cycle_in_sliced_subtree(self):
        nodes = [
            TreeNode(id="x", parent_id="y", level=1),
            TreeNode(id="y", parent_id="x", level=2),
        ]
        with pytest.raises(TreeIntegrityException) as exc_info:
            TreeTableResult(nodes).get_result()

        assert exc_info.value.code == ErrorCode.TREE_CYCLE_DETECTED
        assert exc_info.value.extra["node_id"] == "x"

    def test_self_parent(self):
        nodes = [TreeNode(id="s", parent_id="s", level=1)]
        with pytest.raises(TreeIntegrityException):
            TreeResult(nodes).get_result()


class TestConverters:
    """结果转换器测试"""

    def test_table_converter_keeps_paging(self):
        page = PageList(data=sample_nodes(), total=7, page=1, page_size=999)
        result = TreeTableConverter().to_result(page)

        assert isinstance(result, PageList)
        assert result.total == 7
        assert result.page_size == 999
        assert ids(result.data) == ["1", "2", "4", "5", "3", "6", "7"]

    def test_tree_converter_returns_roots(self):
        page = PageList(data=sample_nodes(), total=7, page=1, page_size=999)
        result = TreeConverter().to_result(page, is_async=False, expand_all=True)

        assert ids(result.data) == ["1", "6"]
        assert result.data[0].expanded is True

    def test_converter_node_mapper(self):
        page = PageList(data=sample_nodes(), total=7, page=1, page_size=999)
        result = TreeTableConverter(node_mapper=lambda node: node.id).to_result(page)
        assert result.data == ["1", "2", "4", "5", "3", "6", "7"]

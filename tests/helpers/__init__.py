"""测试辅助工具"""

from .tree_helpers import InMemoryTreeQueryService, build_nodes, sample_nodes

__all__ = [
    "InMemoryTreeQueryService",
    "build_nodes",
    "sample_nodes",
]

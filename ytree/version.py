"""版本信息"""

__version__ = "0.1.0"
__author__ = "ytree"
__description__ = "树形数据查询与组装库"

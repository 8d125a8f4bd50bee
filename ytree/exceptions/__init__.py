"""异常处理模块

提供树形查询引擎的业务异常类。

使用示例:
    from ytree.exceptions import Err, TreeContractException

    try:
        result = await action.query(query)
    except TreeContractException as e:
        print(e.code, e.message)
"""

from .exceptions import (
    # ===== 推荐使用 =====
    Err,                            # 异常快捷创建类
    ErrorCode,                      # 错误代码枚举
    ErrorCodeType,

    # ===== 高级用法 =====
    BusinessException,              # 业务异常基类
    ArgumentNullException,          # 必需参数缺失
    TreeContractException,          # 调用约定违反
    TreeIntegrityException,         # 数据完整性（环）
    ResourceNotFoundException,      # 404
    ValidationException,            # 422
)

__all__ = [
    "Err",
    "ErrorCode",
    "ErrorCodeType",
    "BusinessException",
    "ArgumentNullException",
    "TreeContractException",
    "TreeIntegrityException",
    "ResourceNotFoundException",
    "ValidationException",
]

"""业务异常类定义

定义树形查询引擎使用的业务异常类体系。
"""

import copy
from typing import Optional, List, Any, Dict, Union
from fastapi import status
from enum import Enum


class ErrorCode(str, Enum):
    """错误代码枚举

    继承自 str，可以直接作为字符串使用。

    使用示例:
        from ytree.exceptions import ErrorCode, TreeContractException

        raise TreeContractException("父节点标识不能为空", code=ErrorCode.PARENT_ID_REQUIRED)
    """

    # ==================== 通用错误 ====================
    BUSINESS_ERROR = "BUSINESS_ERROR"
    OPERATION_FAILED = "OPERATION_FAILED"
    ARGUMENT_NULL = "ARGUMENT_NULL"

    # ==================== 资源相关 (404) ====================
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    TREE_NODE_NOT_FOUND = "TREE_NODE_NOT_FOUND"

    # ==================== 验证相关 (422) ====================
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_PARAMETER = "INVALID_PARAMETER"

    # ==================== 树形结构相关 ====================
    PARENT_ID_REQUIRED = "PARENT_ID_REQUIRED"
    TREE_CYCLE_DETECTED = "TREE_CYCLE_DETECTED"


# 类型别名，支持枚举和字符串
ErrorCodeType = Union[str, ErrorCode]


class BusinessException(Exception):
    """业务异常基类

    所有业务异常都应该继承此类。

    属性:
        message: 错误消息（面向用户）
        code: 错误代码（用于程序判断，支持 ErrorCode 枚举或字符串）
        status_code: HTTP 状态码
        details: 详细错误信息列表
        extra: 额外的上下文信息

    使用示例:
        raise BusinessException("操作失败", code=ErrorCode.OPERATION_FAILED)

        raise BusinessException(
            message="树形数据加载失败",
            code=ErrorCode.OPERATION_FAILED,
            extra={"parent_id": "42"}
        )
    """

    def __init__(
        self,
        message: str,
        code: ErrorCodeType = ErrorCode.BUSINESS_ERROR,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        """初始化业务异常

        Args:
            message: 错误消息
            code: 错误代码
            status_code: HTTP 状态码
            details: 详细错误信息列表
            **extra: 额外的上下文信息
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or []
        self.extra = extra
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式

        Returns:
            包含异常信息的字典
        """
        return {
            "message": self.message,
            "code": self.code,
            "status_code": self.status_code,
            # 深拷贝，调用方修改返回值不影响异常对象
            "details": copy.deepcopy(self.details),
            "extra": copy.deepcopy(self.extra)
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code!r}, "
            f"status_code={self.status_code})"
        )


class ArgumentNullException(BusinessException):
    """必需参数缺失异常

    构造引擎时缺少协作服务，或调用时缺少查询参数对象。
    属于调用方编程错误，不应重试。

    使用示例:
        raise ArgumentNullException("service")
    """

    def __init__(
        self,
        argument: str,
        message: Optional[str] = None,
        code: ErrorCodeType = ErrorCode.ARGUMENT_NULL,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        self.argument = argument
        super().__init__(
            message=message or f"参数不能为空: {argument}",
            code=code,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            argument=argument,
            **extra
        )


class TreeContractException(BusinessException):
    """树形查询调用约定异常

    例如加载子节点时未提供父节点标识，在发起任何查询之前抛出。
    """

    def __init__(
        self,
        message: str = "树形查询参数不满足调用约定",
        code: ErrorCodeType = ErrorCode.PARENT_ID_REQUIRED,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
            **extra
        )


class TreeIntegrityException(BusinessException):
    """树形数据完整性异常

    parent_id 数据存在环（节点通过损坏的数据成为自己的祖先）时抛出。
    """

    def __init__(
        self,
        message: str = "树形数据存在循环引用",
        code: ErrorCodeType = ErrorCode.TREE_CYCLE_DETECTED,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            **extra
        )


class ResourceNotFoundException(BusinessException):
    """资源不存在异常

    使用示例:
        raise ResourceNotFoundException(
            "节点不存在",
            code=ErrorCode.TREE_NODE_NOT_FOUND,
            resource_id="42"
        )
    """

    def __init__(
        self,
        message: str = "资源不存在",
        code: ErrorCodeType = ErrorCode.RESOURCE_NOT_FOUND,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
            **extra
        )


class ValidationException(BusinessException):
    """数据验证异常

    使用示例:
        raise ValidationException("不支持的排序字段", field="order")
    """

    def __init__(
        self,
        message: str = "数据验证失败",
        code: ErrorCodeType = ErrorCode.VALIDATION_ERROR,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=details,
            **extra
        )


class Err:
    """异常快捷创建类

    提供统一入口，通过 IDE 自动补全发现所有可用的异常类型。

    使用示例:
        from ytree.exceptions import Err

        raise Err.parent_required()
        raise Err.not_found("节点不存在", resource_id="42")
        raise Err.argument_null("query")
    """

    @staticmethod
    def argument_null(argument: str, **kwargs) -> ArgumentNullException:
        """必需参数缺失 (500)

        Args:
            argument: 参数名
            **kwargs: 额外参数（message, details 等）
        """
        return ArgumentNullException(argument, **kwargs)

    @staticmethod
    def parent_required(message: str = "加载子节点时父节点标识不能为空", **kwargs) -> TreeContractException:
        """加载子节点缺少父节点标识 (400)"""
        return TreeContractException(message, **kwargs)

    @staticmethod
    def cycle(message: str = "树形数据存在循环引用", **kwargs) -> TreeIntegrityException:
        """树形数据存在环 (500)

        Args:
            message: 错误消息
            **kwargs: 额外参数（node_id, chain 等）
        """
        return TreeIntegrityException(message, **kwargs)

    @staticmethod
    def not_found(message: str = "资源不存在", **kwargs) -> ResourceNotFoundException:
        """资源不存在 (404)"""
        return ResourceNotFoundException(message, **kwargs)

    @staticmethod
    def invalid(message: str = "数据验证失败", **kwargs) -> ValidationException:
        """数据验证失败 (422)"""
        return ValidationException(message, **kwargs)

    @staticmethod
    def fail(message: str = "操作失败", **kwargs) -> BusinessException:
        """通用业务异常 (400)"""
        return BusinessException(message, **kwargs)

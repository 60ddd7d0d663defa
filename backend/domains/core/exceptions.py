"""
统一异常体系

每个异常归入一个 ErrorCategory，分类决定 HTTP 状态码：

    VALIDATION -> 400   InvalidNoteIdError
    NOT_FOUND  -> 404   NoteNotFoundError
    EXTERNAL   -> 502   StoreUnavailableError
    INTERNAL   -> 500   ConfigurationError

app.core.exceptions 中注册的处理器把 message 作为纯文本响应体返回，
因此 message 就是客户端看到的文字。
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class ErrorCategory(str, Enum):
    """错误分类"""
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    EXTERNAL = "external"
    INTERNAL = "internal"


_STATUS_BY_CATEGORY = {
    ErrorCategory.VALIDATION: 400,
    ErrorCategory.NOT_FOUND: 404,
    ErrorCategory.EXTERNAL: 502,
    ErrorCategory.INTERNAL: 500,
}


@dataclass
class ApplicationError(Exception):
    """应用层异常基类"""
    code: str
    message: str
    category: ErrorCategory = ErrorCategory.INTERNAL
    details: Optional[Dict[str, Any]] = None
    cause: Optional[Exception] = None

    def __post_init__(self):
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    @property
    def http_status_code(self) -> int:
        return _STATUS_BY_CATEGORY.get(self.category, 500)

    def to_dict(self) -> Dict[str, Any]:
        """日志用的扁平表示"""
        data = {"code": self.code, "message": self.message, "category": self.category.value}
        if self.details:
            data["details"] = self.details
        return data


# ==================== 按分类的基类 ====================

class ValidationError(ApplicationError):
    """请求参数非法"""
    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(
            "VALIDATION_ERROR",
            message,
            ErrorCategory.VALIDATION,
            details={"field": field} if field else None,
        )


class NotFoundError(ApplicationError):
    """资源不存在"""
    def __init__(self, resource_type: str, resource_id: str, message: Optional[str] = None):
        super().__init__(
            "NOT_FOUND",
            message or f"{resource_type} not found: {resource_id}",
            ErrorCategory.NOT_FOUND,
            details={"resource_type": resource_type, "resource_id": resource_id},
        )


class ExternalServiceError(ApplicationError):
    """依赖的外部服务失败"""
    def __init__(
        self,
        service_name: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(
            "EXTERNAL_SERVICE_ERROR",
            message,
            ErrorCategory.EXTERNAL,
            details={"service": service_name, **(details or {})},
            cause=cause,
        )
        self.service_name = service_name


class ConfigurationError(ApplicationError):
    """配置项取值非法，启动阶段抛出"""
    def __init__(self, config_key: str, message: str):
        super().__init__(
            "CONFIGURATION_ERROR",
            f"配置错误 [{config_key}]: {message}",
            details={"config_key": config_key},
        )
        self.config_key = config_key


# ==================== 笔记 ====================

class InvalidNoteIdError(ValidationError):
    """笔记 ID 不匹配 [A-Za-z0-9_-]{1,64}"""
    def __init__(self, note_id: str):
        super().__init__("Invalid note ID", field="note_id")
        self.note_id = note_id


class NoteNotFoundError(NotFoundError):
    """笔记不存在（只有 raw 模式会报告）"""
    def __init__(self, note_id: str):
        super().__init__("note", note_id, message="Not Found")
        self.note_id = note_id


class StoreUnavailableError(ExternalServiceError):
    """键值存储不可用：连接失败、超时或服务端错误"""
    def __init__(self, operation: str, key: str, cause: Optional[Exception] = None):
        super().__init__(
            "kv_store",
            "Storage unavailable",
            details={"operation": operation, "key": key},
            cause=cause,
        )
        self.operation = operation
        self.key = key

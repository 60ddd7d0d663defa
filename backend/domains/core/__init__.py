"""
Core - 通用应用基础设施

提供与具体协议无关的基础设施组件:
- 统一异常体系
- 服务生命周期管理
"""

from .exceptions import (
    ApplicationError,
    ConfigurationError,
    ErrorCategory,
    ExternalServiceError,
    InvalidNoteIdError,
    NoteNotFoundError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)
from .lifecycle import (
    ServiceRegistry,
    get_service_registry,
    register_core_services,
    reset_service_registry,
)

__all__ = [
    # Exceptions
    "ErrorCategory",
    "ApplicationError",
    "NotFoundError",
    "ValidationError",
    "ExternalServiceError",
    "ConfigurationError",
    "InvalidNoteIdError",
    "NoteNotFoundError",
    "StoreUnavailableError",
    # Lifecycle
    "ServiceRegistry",
    "get_service_registry",
    "reset_service_registry",
    "register_core_services",
]

"""
Infra - 基础设施层

- logging: 基于 structlog 的结构化日志
- kv: 键值存储适配器（内存 / Redis）
"""

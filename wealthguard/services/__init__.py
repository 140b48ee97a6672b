"""Authorization, permission administration, audit and impersonation services."""

from wealthguard.services.registry import (
    Services, build_services, in_memory_services, sql_services,
)

__all__ = ["Services", "build_services", "in_memory_services", "sql_services"]

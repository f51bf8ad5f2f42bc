"""Custom Dishka scopes for SLA."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """SLA dependency injection scopes.

    Hierarchy: APP -> UOW

    - APP: Process lifetime (config, store adapter, analyzer)
    - UOW: Unit of Work (one CLI command)
    """

    APP = new_scope("APP")
    UOW = new_scope("UOW")

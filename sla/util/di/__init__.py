from sla.util.di.base import Provider
from sla.util.di.scope import Scope

__all__ = ["Provider", "Scope"]

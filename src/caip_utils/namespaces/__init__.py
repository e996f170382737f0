from .base import NamespaceResolver, GenericResolver
from .registry import NamespaceRegistry, get_default_registry

__all__ = [
    "NamespaceResolver",
    "GenericResolver",
    "NamespaceRegistry",
    "get_default_registry",
]

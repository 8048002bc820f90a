from lazywire._internal.container import PARENT, SELF, Container
from lazywire._internal.keys import Binding, Key, Registry, ResolveFn, default_registry, define
from lazywire._internal.lock_mode import LockMode
from lazywire._internal.overrides import Override, OverrideBuilder, override
from lazywire.exceptions import (
    BindingNotFoundError,
    CircularDependencyError,
    CircularOverrideError,
    DuplicateOverrideError,
    InvalidOverrideError,
    LazyWireError,
)

__all__ = [
    "PARENT",
    "SELF",
    "Binding",
    "BindingNotFoundError",
    "CircularDependencyError",
    "CircularOverrideError",
    "Container",
    "DuplicateOverrideError",
    "InvalidOverrideError",
    "Key",
    "LazyWireError",
    "LockMode",
    "Override",
    "OverrideBuilder",
    "Registry",
    "ResolveFn",
    "default_registry",
    "define",
    "override",
]

"""Core layer — schema walk, naming, precedence and type coercion.

Rules
-----
* No ``print()`` calls and no logging.
* No direct access to ``os.environ`` or ``sys.argv``; both are injected.
* No imports from ``cli``, ``infra`` or ``runtime``.
"""

from bee.core.coercion import Kind, kind_for, register_kind
from bee.core.models import FieldDescriptor, setting
from bee.core.resolver import ResolveContext, resolve_field
from bee.core.walker import describe_fields, walk

__all__: list[str] = [
    "FieldDescriptor",
    "Kind",
    "ResolveContext",
    "describe_fields",
    "kind_for",
    "register_kind",
    "resolve_field",
    "setting",
    "walk",
]

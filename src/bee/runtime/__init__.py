"""Runtime layer — service lifecycle, structured logging and middleware.

This package sits beside ``cli``: it may import from ``cli`` and
``core``, but the core never imports from ``runtime``.
"""

from bee.runtime.logging import new_logger
from bee.runtime.middleware import Middlewares, request_logger
from bee.runtime.service import Service, exit_with

__all__: list[str] = [
    "Middlewares",
    "Service",
    "exit_with",
    "new_logger",
    "request_logger",
]

"""bee — resolve configuration dataclasses from argv, env and defaults.

Flag names, environment variable names and usage text are derived from
the dataclass field structure::

    @dataclass
    class Config:
        port: int = setting("3000")

    cfg = Config()
    bee.parse(cfg, "cool")  # -port, COOL_PORT, default 3000
"""

from bee.cli.command_line import CommandLine, parse
from bee.cli.policy import ErrorHandling
from bee.core.coercion import Kind, register_kind
from bee.core.models import FieldDescriptor, setting
from bee.core.types import URL, Int64, IntList, StringList, Timestamp, UInt32, UInt64
from bee.core.walker import describe_fields
from bee.exceptions import (
    BeeError,
    FieldError,
    FlagError,
    HelpRequestedError,
    InvalidConfigTypeError,
    UnsupportedTypeError,
    ValueParseError,
)
from bee.runtime import Middlewares, Service, exit_with, new_logger, request_logger
from bee.version import __version__

__all__: list[str] = [
    "URL",
    "BeeError",
    "CommandLine",
    "ErrorHandling",
    "FieldDescriptor",
    "FieldError",
    "FlagError",
    "HelpRequestedError",
    "Int64",
    "IntList",
    "InvalidConfigTypeError",
    "Kind",
    "Middlewares",
    "Service",
    "StringList",
    "Timestamp",
    "UInt32",
    "UInt64",
    "UnsupportedTypeError",
    "ValueParseError",
    "__version__",
    "describe_fields",
    "exit_with",
    "new_logger",
    "parse",
    "register_kind",
    "request_logger",
    "setting",
]

"""Airbrake/Errbit error notifier.

Builds notice documents from Python exceptions and posts them to an
Airbrake-compatible collector.
"""

__version__ = "0.1.0"

from errbit_notifier.backtrace import (  # noqa: E402
    format_traceback,
    parse_backtrace,
    traceback_frames,
)
from errbit_notifier.classifier import ChainError, RawError, SimpleError, classify  # noqa: E402
from errbit_notifier.client import AsyncClient, Client  # noqa: E402
from errbit_notifier.config import Config  # noqa: E402
from errbit_notifier.errors import (  # noqa: E402
    GatewayError,
    InvalidEndpointError,
    NotifierError,
    ResponseDecodeError,
    TransportError,
)
from errbit_notifier.models import (  # noqa: E402
    Context,
    ErrorInfo,
    Notice,
    NotifierInfo,
    NotifyResult,
    Severity,
    StackFrame,
    UserInfo,
)
from errbit_notifier.notice import build_notice, context_from_config  # noqa: E402
from errbit_notifier.notifier import AsyncNotifier, Notifier  # noqa: E402

__all__ = [
    "__version__",
    # Facade
    "Notifier",
    "AsyncNotifier",
    # Transport
    "Client",
    "AsyncClient",
    # Building
    "build_notice",
    "context_from_config",
    "classify",
    "parse_backtrace",
    "format_traceback",
    "traceback_frames",
    "RawError",
    "SimpleError",
    "ChainError",
    # Models
    "Notice",
    "ErrorInfo",
    "StackFrame",
    "Context",
    "UserInfo",
    "NotifierInfo",
    "Severity",
    "NotifyResult",
    # Config
    "Config",
    # Errors
    "NotifierError",
    "InvalidEndpointError",
    "TransportError",
    "GatewayError",
    "ResponseDecodeError",
]

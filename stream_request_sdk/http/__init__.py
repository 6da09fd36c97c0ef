from .client import StreamingClient, attach_stream, create_client, merge_client_config
from .hooks import install_default_hooks, log_request, log_response

__all__ = [
    "StreamingClient",
    "attach_stream",
    "create_client",
    "merge_client_config",
    "install_default_hooks",
    "log_request",
    "log_response",
]

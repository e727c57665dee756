from ._version import __version__  # noqa
from .auth import StaticTokenProvider, TokenProvider, TokenStore
from .client import UserClient, build_params
from .config import ClientConfig
from .models import (
    PermissionPatch,
    PermissionSet,
    PermissionType,
    SystemPermissionType,
    User,
)
from .transport import HttpxTransport, Transport

__all__ = [
    "ClientConfig",
    "HttpxTransport",
    "PermissionPatch",
    "PermissionSet",
    "PermissionType",
    "StaticTokenProvider",
    "SystemPermissionType",
    "TokenProvider",
    "TokenStore",
    "Transport",
    "User",
    "UserClient",
    "build_params",
]

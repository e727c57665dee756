from __future__ import annotations

from collections.abc import Awaitable, Mapping, Sequence

from httpx import Response

from .auth import TokenProvider
from .models import PermissionPatch, PermissionType, User, encode_component
from .transport import Transport

USERS_PATH = "api/users"


def build_params(token: str | None, extra: Mapping[str, str] | None = None) -> dict[str, str]:
    """
    Build the query parameters of a request.

    A new mapping is returned on every call, holding the token (if any) and
    then the given extra parameters.
    """
    params: dict[str, str] = {}
    if token:
        params["token"] = token
    if extra:
        params.update(extra)
    return params


class UserClient:
    """
    Operations on users through the REST API.

    Every operation returns the transport's awaitable as is: it resolves to
    the response on success, and raises whatever the transport raised on
    failure.
    """

    def __init__(self, transport: Transport, token_provider: TokenProvider) -> None:
        self._transport = transport
        self._token_provider = token_provider

    def _params(self, extra: Mapping[str, str] | None = None) -> dict[str, str]:
        return build_params(self._token_provider.current_token(), extra)

    def list_users(
        self, permission_type: PermissionType | str | None = None
    ) -> Awaitable[Response]:
        """
        Get the list of users.

        Args:
            permission_type: If given, only the users for which the current
                user has this permission are listed.
        """
        extra = None
        if permission_type:
            if isinstance(permission_type, PermissionType):
                permission_type = permission_type.value
            extra = {"permission": permission_type}
        return self._transport.request("GET", USERS_PATH, self._params(extra))

    def get_user(self, username: str) -> Awaitable[Response]:
        return self._transport.request(
            "GET", f"{USERS_PATH}/{encode_component(username)}", self._params()
        )

    def delete_user(self, user: User) -> Awaitable[Response]:
        return self._transport.request(
            "DELETE", f"{USERS_PATH}/{encode_component(user.username)}", self._params()
        )

    def create_user(self, user: User) -> Awaitable[Response]:
        return self._transport.request("POST", USERS_PATH, self._params(), user)

    def update_user(self, user: User) -> Awaitable[Response]:
        """Save the given user, which is identified by its username."""
        return self._transport.request(
            "PUT", f"{USERS_PATH}/{encode_component(user.username)}", self._params(), user
        )

    def get_permissions(self, username: str) -> Awaitable[Response]:
        return self._transport.request(
            "GET", f"{USERS_PATH}/{encode_component(username)}/permissions", self._params()
        )

    def patch_permissions(
        self, username: str, patches: Sequence[PermissionPatch]
    ) -> Awaitable[Response]:
        """
        Add or remove permissions of a user.

        Args:
            username: The user whose permissions are modified.
            patches: The operations to apply, in order.
        """
        return self._transport.request(
            "PATCH",
            f"{USERS_PATH}/{encode_component(username)}/permissions",
            self._params(),
            list(patches),
        )

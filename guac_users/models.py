from __future__ import annotations

from enum import Enum
from typing import Literal
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field


def encode_component(value: str) -> str:
    """Percent-encode a value for use as a single URL path segment."""
    # same unreserved set as JavaScript's encodeURIComponent
    return quote(value, safe="!~*'()")


class PermissionType(str, Enum):
    """Permission types one user may have over an object, such as another user."""

    READ = "READ"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    ADMINISTER = "ADMINISTER"


class SystemPermissionType(str, Enum):
    """Permission types applying to the system as a whole."""

    CREATE_CONNECTION = "CREATE_CONNECTION"
    CREATE_CONNECTION_GROUP = "CREATE_CONNECTION_GROUP"
    CREATE_USER = "CREATE_USER"
    ADMINISTER = "ADMINISTER"


class User(BaseModel):
    model_config = ConfigDict(extra="allow")

    username: str
    password: str | None = None


class PermissionSet(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    connection_permissions: dict[str, list[PermissionType]] = Field(
        default_factory=dict, alias="connectionPermissions"
    )
    connection_group_permissions: dict[str, list[PermissionType]] = Field(
        default_factory=dict, alias="connectionGroupPermissions"
    )
    user_permissions: dict[str, list[PermissionType]] = Field(
        default_factory=dict, alias="userPermissions"
    )
    system_permissions: list[SystemPermissionType] = Field(
        default_factory=list, alias="systemPermissions"
    )


class PermissionPatch(BaseModel):
    """
    A single operation of a JSON patch against a user's permissions.

    The path travels in the JSON body, not in the URL, so identifiers are
    embedded in it as they are, without percent-encoding.
    """

    op: Literal["add", "remove"]
    path: str
    value: str

    @classmethod
    def connection(
        cls, op: Literal["add", "remove"], identifier: str, type: PermissionType | str
    ) -> PermissionPatch:
        return cls(
            op=op,
            path=f"/connectionPermissions/{identifier}",
            value=_value(type),
        )

    @classmethod
    def connection_group(
        cls, op: Literal["add", "remove"], identifier: str, type: PermissionType | str
    ) -> PermissionPatch:
        return cls(
            op=op,
            path=f"/connectionGroupPermissions/{identifier}",
            value=_value(type),
        )

    @classmethod
    def user(
        cls, op: Literal["add", "remove"], username: str, type: PermissionType | str
    ) -> PermissionPatch:
        return cls(
            op=op,
            path=f"/userPermissions/{username}",
            value=_value(type),
        )

    @classmethod
    def system(
        cls, op: Literal["add", "remove"], type: SystemPermissionType | str
    ) -> PermissionPatch:
        return cls(op=op, path="/systemPermissions", value=_value(type))


def _value(type: Enum | str) -> str:
    if isinstance(type, Enum):
        return type.value
    return type

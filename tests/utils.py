from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from fastapi import APIRouter, Body, Depends, FastAPI, HTTPException, Response
from httpx import Response as HTTPResponse

from guac_users import Transport

BASE_URL = "http://testserver/guacamole/"
TOKEN = "secret"


@dataclass
class SentRequest:
    method: str
    url: str
    params: Mapping[str, str]
    body: Any = None


class RecordingTransport(Transport):
    """Records every request, and resolves them with an empty list (or fails with error)."""

    def __init__(self, error: BaseException | None = None) -> None:
        self.requests: list[SentRequest] = []
        self.error = error
        self.awaitables: list[Any] = []

    def request(self, method, url, params, body=None):
        self.requests.append(SentRequest(method, url, params, body))
        awaitable = self._respond()
        self.awaitables.append(awaitable)
        return awaitable

    async def _respond(self) -> HTTPResponse:
        if self.error is not None:
            raise self.error
        return HTTPResponse(200, json=[])


def create_users_app() -> FastAPI:
    """An in-memory users API, answering under /guacamole/api/users."""
    app = FastAPI()
    users: dict[str, dict[str, Any]] = {
        "guacadmin": {"username": "guacadmin", "password": "guacadmin"},
        "alice": {"username": "alice", "password": "alice"},
    }
    # the permissions each user has, keyed by username
    permissions: dict[str, dict[str, Any]] = {}
    app.state.users = users
    app.state.permissions = permissions

    def check_token(token: str | None = None) -> None:
        if token != TOKEN:
            raise HTTPException(status_code=403, detail="Permission denied.")

    def get_existing(username: str) -> dict[str, Any]:
        if username not in users:
            raise HTTPException(status_code=404, detail=f'No such user: "{username}"')
        return users[username]

    def public(user: dict[str, Any]) -> dict[str, Any]:
        return {k: v for k, v in user.items() if k != "password"}

    def permission_set(username: str) -> dict[str, Any]:
        return permissions.setdefault(
            username,
            {
                "connectionPermissions": {},
                "connectionGroupPermissions": {},
                "userPermissions": {},
                "systemPermissions": [],
            },
        )

    router = APIRouter(prefix="/guacamole/api/users", dependencies=[Depends(check_token)])

    @router.get("")
    async def get_users(permission: str | None = None):
        # the current user is always guacadmin
        granted = permission_set("guacadmin")["userPermissions"]
        return [
            public(user)
            for username, user in users.items()
            if permission is None or permission in granted.get(username, [])
        ]

    @router.get("/{username}")
    async def get_user(username: str):
        return public(get_existing(username))

    @router.post("")
    async def create_user(user: dict[str, Any] = Body()):
        if user["username"] in users:
            raise HTTPException(status_code=400, detail="User already exists.")
        users[user["username"]] = user
        return user["username"]

    @router.put("/{username}", status_code=204)
    async def update_user(username: str, user: dict[str, Any] = Body()):
        if user["username"] != username:
            raise HTTPException(
                status_code=400,
                detail="Username in path does not match username provided JSON data.",
            )
        existing = get_existing(username)
        existing.update(user)
        return Response(status_code=204)

    @router.delete("/{username}", status_code=204)
    async def delete_user(username: str):
        get_existing(username)
        del users[username]
        return Response(status_code=204)

    @router.get("/{username}/permissions")
    async def get_permissions(username: str):
        get_existing(username)
        return permission_set(username)

    @router.patch("/{username}/permissions", status_code=204)
    async def patch_permissions(username: str, patches: list[dict[str, str]] = Body()):
        get_existing(username)
        permission_set_ = permission_set(username)
        for patch in patches:
            path = patch["path"]
            if path == "/systemPermissions":
                granted = permission_set_["systemPermissions"]
            else:
                _, kind, identifier = path.split("/", 2)
                granted = permission_set_[kind].setdefault(identifier, [])
            if patch["op"] == "add" and patch["value"] not in granted:
                granted.append(patch["value"])
            elif patch["op"] == "remove" and patch["value"] in granted:
                granted.remove(patch["value"])
        return Response(status_code=204)

    app.include_router(router)
    return app

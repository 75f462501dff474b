# farmfresh/client/auth.py
import logging
from typing import Optional

from pydantic import ValidationError

from farmfresh.client.api import ApiClient, ApiError, TransportError, Unauthorized
from farmfresh.client.notify import Notifier
from farmfresh.client.store import Store
from farmfresh.schemas.user import UserResponse

logger = logging.getLogger(__name__)


class AuthStore(Store):
    """Current session identity plus login, register and logout.

    A successful action replaces the cached user and notifies subscribers
    (the cart store re-reads on every identity change). A failed action
    leaves the previous user in place and emits an error notification.
    """

    def __init__(self, api: ApiClient, notifier: Optional[Notifier] = None):
        super().__init__()
        self.api = api
        self.notifier = notifier or Notifier()
        self.user: Optional[UserResponse] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    async def refresh(self) -> Optional[UserResponse]:
        try:
            data = await self.api.get("/api/auth/me")
            self.user = UserResponse.model_validate(data)
        except Unauthorized:
            self.user = None
        except (ApiError, TransportError, ValidationError) as e:
            logger.warning("Session lookup failed: %s", e)
            self.user = None
        self.status = "ready"
        await self._emit()
        return self.user

    async def _set_user(self, user: Optional[UserResponse]) -> None:
        self.user = user
        self.status = "ready"
        await self._emit()

    async def _session_call(self, failure_title: str, path: str, payload: dict) -> Optional[UserResponse]:
        try:
            data = await self.api.post(path, payload)
            return UserResponse.model_validate(data)
        except (ApiError, TransportError) as e:
            self.notifier.error(failure_title, str(e))
        except ValidationError as e:
            logger.warning("Unexpected %s response: %s", path, e)
            self.notifier.error(failure_title, "Unexpected response from the server")
        return None

    async def login(self, email: str, password: str) -> bool:
        user = await self._session_call("Login failed", "/api/auth/login", {"email": email, "password": password})
        if user is None:
            return False
        await self._set_user(user)
        self.notifier.notify("Welcome back", f"Signed in as {self.user.name}.")
        return True

    async def register(self, username: str, email: str, password: str, name: str, **profile) -> bool:
        payload = {"username": username, "email": email, "password": password, "name": name, **profile}
        user = await self._session_call("Registration failed", "/api/auth/register", payload)
        if user is None:
            return False
        await self._set_user(user)
        self.notifier.notify("Account created", f"Welcome to FarmFresh, {self.user.name}!")
        return True

    async def logout(self) -> bool:
        try:
            await self.api.post("/api/auth/logout")
        except (ApiError, TransportError) as e:
            self.notifier.error("Logout failed", str(e))
            return False
        await self._set_user(None)
        self.notifier.notify("Signed out", "You have been signed out.")
        return True

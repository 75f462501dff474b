# farmfresh/client/state.py
from typing import Optional

import httpx

from farmfresh.client.api import ApiClient
from farmfresh.client.auth import AuthStore
from farmfresh.client.cart import CartStore
from farmfresh.client.notify import Notifier


class AppState:
    """Application state built once at start-up and handed to every view.

    Auth and cart share one API client (and therefore one session cookie)
    and one notifier; the cart re-reads whenever the identity changes.
    """

    def __init__(self, base_url: str = "http://127.0.0.1:8000", http: Optional[httpx.AsyncClient] = None):
        self.api = ApiClient(base_url=base_url, http=http)
        self.notifier = Notifier()
        self.auth = AuthStore(self.api, self.notifier)
        self.cart = CartStore(self.api, self.notifier)
        self.auth.subscribe(lambda _auth: self.cart.refresh())

    async def start(self) -> None:
        # Resolving the session also triggers the first cart read
        await self.auth.refresh()

    async def aclose(self) -> None:
        await self.api.aclose()

    async def __aenter__(self) -> "AppState":
        await self.start()
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

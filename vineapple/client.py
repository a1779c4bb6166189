"""
Vine API client.

Usage:
    vine = Vineapple()
    await vine.login("user@example.com", "secret")
    timeline = await vine.graph(page=1, size=20)

    # Or resume a stored session without logging in again:
    vine = Vineapple({"key": "...", "userId": "...", "username": "..."})
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Dict, Mapping, Optional
from urllib.parse import quote

from vineapple.config import ClientConfig, load_client_config
from vineapple.device import device_token_for
from vineapple.errors import InvalidCredentialsError, NotAuthenticatedError, VineappleError
from vineapple.pipeline import PathOrOptions, RequestPipeline
from vineapple.session import Session
from vineapple.transport import RequestsTransport, Transport

logger = logging.getLogger(__name__)

AUTHENTICATE_PATH = "users/authenticate"


def _segment(value: Any) -> str:
    return quote(str(value), safe="")


def _paged(url: str, page: Any, size: Any) -> Dict[str, Any]:
    return {"url": url, "qs": {"page": page, "size": size}}


class Vineapple:
    def __init__(
        self,
        settings: Optional[Mapping[str, Any]] = None,
        *,
        config: Optional[ClientConfig] = None,
        transport: Optional[Transport] = None,
        credential: Optional[str] = None,
        user_id: Optional[Any] = None,
        username: Optional[str] = None,
    ) -> None:
        self.config = config or load_client_config()
        self.transport: Transport = transport or RequestsTransport(timeout=self.config.timeout_seconds)
        self.session = Session()

        if settings is None and (credential or user_id or username):
            settings = {"credential": credential, "user_id": user_id, "username": username}
        self.authorize(settings)

        self._pipeline = RequestPipeline(self.config, self.session, self.transport)

    def __repr__(self) -> str:
        return f"Vineapple({self.session!r})"

    # ---- session state ----

    @property
    def credential(self) -> Optional[str]:
        return self.session.credential

    @property
    def user_id(self) -> Optional[str]:
        return self.session.user_id

    @property
    def username(self) -> Optional[str]:
        return self.session.username

    @property
    def is_authenticated(self) -> bool:
        return self.session.is_authenticated

    def authorize(self, settings: Optional[Mapping[str, Any]] = None) -> "Vineapple":
        self.session.authorize(settings)
        return self

    def login(self, username: str, password: str) -> Awaitable["Vineapple"]:
        """
        Authenticate and adopt the returned session.

        Missing credentials raise InvalidCredentialsError immediately, before any
        request is made; otherwise returns an awaitable resolving to this client.
        The session is left untouched if the request fails.
        """
        if not username:
            raise InvalidCredentialsError("username")
        if not password:
            raise InvalidCredentialsError("password")
        return self._login(username, password)

    async def _login(self, username: str, password: str) -> "Vineapple":
        device_token = device_token_for(
            username,
            password,
            seed=self.config.device_token_seed,
            fixed=self.config.device_token,
        )
        data = await self.request(
            {
                "method": "POST",
                "url": AUTHENTICATE_PATH,
                "form": {"username": username, "password": password, "deviceToken": device_token},
            }
        )

        granted = Session().authorize(data if isinstance(data, Mapping) else None)
        if not granted.is_authenticated:
            raise VineappleError("Authenticate response did not contain a complete session")

        self.authorize(granted.as_settings())
        logger.info("Signed in to Vine as %s", self.username)
        return self

    async def logout(self) -> "Vineapple":
        """Revoke the session server-side, then clear it locally."""
        await self.request({"method": "DELETE", "url": AUTHENTICATE_PATH})
        username = self.username
        self.session.clear()
        logger.info("Signed out of Vine (%s)", username)
        return self

    @classmethod
    def sign_in(cls, username: str, password: str, **kwargs: Any) -> Awaitable["Vineapple"]:
        """Construct a client (kwargs as for __init__) and log it in."""
        return cls(**kwargs).login(username, password)

    # ---- requests ----

    async def request(self, path_or_options: PathOrOptions) -> Any:
        """
        Send a raw request through the pipeline.

        Args:
            path_or_options: Path relative to the API origin (GET), or a mapping
                with url plus optional method, headers, qs and form.

        Returns:
            The envelope's `data` (None when the response carries none).
        """
        return await self._pipeline.send(path_or_options)

    def _require_user_id(self) -> str:
        if not self.user_id:
            raise NotAuthenticatedError("This endpoint requires a logged-in session")
        return self.user_id

    # ---- users ----

    async def me(self) -> Any:
        """GET users/me: profile of the signed-in user."""
        return await self.request("users/me")

    def notifications_count(self) -> Awaitable[Any]:
        """
        GET users/{user_id}/pendingNotificationsCount for the signed-in user.

        Raises NotAuthenticatedError immediately when no session is held.
        """
        user_id = self._require_user_id()
        return self.request(f"users/{_segment(user_id)}/pendingNotificationsCount")

    def notifications(self, *, page: Any = None, size: Any = None) -> Awaitable[Any]:
        """
        GET users/{user_id}/notifications for the signed-in user.

        Args:
            page: Page number, sent verbatim when given.
            size: Page size, sent verbatim when given.

        Raises NotAuthenticatedError immediately when no session is held.
        """
        user_id = self._require_user_id()
        return self.request(_paged(f"users/{_segment(user_id)}/notifications", page, size))

    async def profile(self, user_id: Any) -> Any:
        """GET users/profiles/{user_id}."""
        return await self.request(f"users/profiles/{_segment(user_id)}")

    async def twitter(self, user_id: Any) -> Any:
        """GET users/{user_id}/following/suggested/twitter: suggestions from the user's Twitter graph."""
        return await self.request(f"users/{_segment(user_id)}/following/suggested/twitter")

    async def followers(self, user_id: Any, *, page: Any = None, size: Any = None) -> Any:
        """GET users/{user_id}/followers (page, size)."""
        return await self.request(_paged(f"users/{_segment(user_id)}/followers", page, size))

    async def following(self, user_id: Any, *, page: Any = None, size: Any = None) -> Any:
        """GET users/{user_id}/following (page, size)."""
        return await self.request(_paged(f"users/{_segment(user_id)}/following", page, size))

    async def search_users(self, query: str, *, page: Any = None, size: Any = None) -> Any:
        """GET users/search/{query} (page, size)."""
        return await self.request(_paged(f"users/search/{_segment(query)}", page, size))

    # ---- timelines ----

    async def graph(self, *, page: Any = None, size: Any = None) -> Any:
        """GET timelines/graph: the signed-in user's home timeline (page, size)."""
        return await self.request(_paged("timelines/graph", page, size))

    async def user(self, user_id: Any, *, page: Any = None, size: Any = None) -> Any:
        """GET timelines/users/{user_id}: posts by a user (page, size)."""
        return await self.request(_paged(f"timelines/users/{_segment(user_id)}", page, size))

    async def likes(self, user_id: Any, *, page: Any = None, size: Any = None) -> Any:
        """GET timelines/users/{user_id}/likes: posts a user liked (page, size)."""
        return await self.request(_paged(f"timelines/users/{_segment(user_id)}/likes", page, size))

    async def popular(self, *, page: Any = None, size: Any = None) -> Any:
        """GET timelines/popular (page, size)."""
        return await self.request(_paged("timelines/popular", page, size))

    async def promoted(self, *, page: Any = None, size: Any = None) -> Any:
        """GET timelines/promoted (page, size)."""
        return await self.request(_paged("timelines/promoted", page, size))

    async def tag(self, tag: str, *, page: Any = None, size: Any = None) -> Any:
        """GET timelines/tags/{tag} (page, size)."""
        return await self.request(_paged(f"timelines/tags/{_segment(tag)}", page, size))

    async def venue(self, venue_id: Any, *, page: Any = None, size: Any = None) -> Any:
        """GET timelines/venues/{venue_id} (page, size)."""
        return await self.request(_paged(f"timelines/venues/{_segment(venue_id)}", page, size))

    async def search_tags(self, query: str, *, page: Any = None, size: Any = None) -> Any:
        """GET tags/search/{query} (page, size)."""
        return await self.request(_paged(f"tags/search/{_segment(query)}", page, size))

    # ---- posts ----

    async def post(self, post_id: Any) -> Any:
        """GET timelines/posts/{post_id}: a single post."""
        return await self.request(f"timelines/posts/{_segment(post_id)}")

    async def comments(self, post_id: Any, *, page: Any = None, size: Any = None) -> Any:
        """GET posts/{post_id}/comments (page, size)."""
        return await self.request(_paged(f"posts/{_segment(post_id)}/comments", page, size))

    async def post_likes(self, post_id: Any, *, page: Any = None, size: Any = None) -> Any:
        """GET posts/{post_id}/likes: users who liked a post (page, size)."""
        return await self.request(_paged(f"posts/{_segment(post_id)}/likes", page, size))

    async def like(self, post_id: Any) -> Any:
        """POST posts/{post_id}/likes as the signed-in user."""
        return await self.request({"method": "POST", "url": f"posts/{_segment(post_id)}/likes"})

    async def unlike(self, post_id: Any) -> Any:
        """DELETE posts/{post_id}/likes as the signed-in user."""
        return await self.request({"method": "DELETE", "url": f"posts/{_segment(post_id)}/likes"})

"""Authentication provider client.

Turns a bearer ID token into a stable identity by calling the provider's
account lookup endpoint (Firebase Identity Toolkit ``accounts:lookup``
request and response shape).
"""
import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

from gamenight.core.config import settings
from gamenight.core.errors import AuthenticationFailed
from gamenight.schemas import Identity

logger = logging.getLogger(__name__)


class AuthClient:
    """Client for the authentication provider's REST API."""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initialize the auth client.

        Args:
            transport: Custom httpx transport (e.g. a mock in tests)
        """
        self.transport = transport
        self.lookup_url = settings.AUTH_LOOKUP_URL
        self.api_key = settings.AUTH_API_KEY
        self.request_delay = settings.REQUEST_DELAY_SECONDS
        self.max_retries = settings.MAX_RETRIES
        self._last_request_time = 0.0

    async def _rate_limit(self):
        """Keep at least ``request_delay`` seconds between requests."""
        current_time = asyncio.get_running_loop().time()
        time_since_last_request = current_time - self._last_request_time

        if time_since_last_request < self.request_delay:
            await asyncio.sleep(self.request_delay - time_since_last_request)

        self._last_request_time = asyncio.get_running_loop().time()

    async def _make_request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Make an HTTP request with retry logic and rate limiting.

        Client errors (4xx) are not retried.

        Raises:
            httpx.HTTPError: If the request fails after retries
        """
        await self._rate_limit()

        async with httpx.AsyncClient(transport=self.transport) as client:
            for attempt in range(self.max_retries):
                try:
                    logger.debug(f"Making {method} request to {url} (attempt {attempt + 1}/{self.max_retries})")

                    response = await client.request(
                        method=method,
                        url=url,
                        params=params,
                        json=json_data,
                        timeout=10.0,
                    )
                    response.raise_for_status()

                    return response.json()

                except httpx.HTTPStatusError as e:
                    if e.response.status_code < 500 or attempt == self.max_retries - 1:
                        raise
                    logger.warning(f"Request failed (attempt {attempt + 1}/{self.max_retries}): {e}")

                except httpx.HTTPError as e:
                    logger.warning(f"Request failed (attempt {attempt + 1}/{self.max_retries}): {e}")
                    if attempt == self.max_retries - 1:
                        raise

                # Exponential backoff
                await asyncio.sleep(2 ** attempt)

            raise httpx.HTTPError("Max retries exceeded")

    async def lookup(self, id_token: str) -> Identity:
        """
        Resolve an ID token to the identity it belongs to.

        Args:
            id_token: Token issued by the provider at sign-in

        Returns:
            The authenticated identity

        Raises:
            AuthenticationFailed: If the token is rejected or the provider is unreachable
        """
        try:
            data = await self._make_request(
                method="POST",
                url=self.lookup_url,
                params={"key": self.api_key},
                json_data={"idToken": id_token},
            )
        except httpx.HTTPError as e:
            logger.warning(f"Identity lookup failed: {e}")
            raise AuthenticationFailed("Could not verify your sign-in. Please sign in again.") from e

        users = data.get("users") or []
        if not users:
            raise AuthenticationFailed("Sign-in token does not belong to any account.")

        user = users[0]
        email = user.get("email") or ""
        return Identity(
            uid=user["localId"],
            email=email,
            display_name=user.get("displayName") or email or "New User",
        )


# Singleton instance
auth_client = AuthClient()

"""Current-owner identity providers. The sign-in flow itself lives outside the vault."""
import logging
from typing import Optional

import httpx

from milavault.config import HTTP_TIMEOUT_SEC

logger = logging.getLogger(__name__)


class AuthProvider:
    def get_current_user(self) -> Optional[str]:
        """Return the owner id of the signed-in user, or None."""
        raise NotImplementedError

    def sign_out(self) -> None:
        raise NotImplementedError


class StaticAuthProvider(AuthProvider):
    """Fixed owner id (local backend, tests)."""

    def __init__(self, owner_id: Optional[str]) -> None:
        self._owner_id = owner_id

    def get_current_user(self) -> Optional[str]:
        return self._owner_id

    def sign_out(self) -> None:
        self._owner_id = None


class SupabaseAuthProvider(AuthProvider):
    """Resolves the user behind a Supabase access token via /auth/v1/user."""

    def __init__(self, url: str, api_key: str, access_token: Optional[str]) -> None:
        self._url = url.rstrip("/")
        self._api_key = api_key
        self._access_token = access_token
        self._user_id: Optional[str] = None

    def get_current_user(self) -> Optional[str]:
        if self._user_id is not None:
            return self._user_id
        if not self._access_token:
            return None
        try:
            resp = httpx.get(
                f"{self._url}/auth/v1/user",
                headers={"apikey": self._api_key, "Authorization": f"Bearer {self._access_token}"},
                timeout=HTTP_TIMEOUT_SEC,
            )
        except httpx.HTTPError as e:
            logger.warning("Auth lookup failed: %s", e)
            return None
        if resp.status_code != 200:
            logger.info("Auth lookup rejected (%s)", resp.status_code)
            return None
        self._user_id = (resp.json() or {}).get("id")
        return self._user_id

    def sign_out(self) -> None:
        if self._access_token:
            try:
                httpx.post(
                    f"{self._url}/auth/v1/logout",
                    headers={"apikey": self._api_key, "Authorization": f"Bearer {self._access_token}"},
                    timeout=HTTP_TIMEOUT_SEC,
                )
            except httpx.HTTPError as e:
                logger.warning("Sign-out request failed: %s", e)
        self._access_token = None
        self._user_id = None

"""
Bearer token acquisition.

A token given on the command line is used as is. Otherwise one is minted
from username and password through the `tokens` endpoint.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from .api_client import FossologyRestClient
from .exceptions import AuthError
from .models import Credentials, TokenSettings

STEP = "Authentication"


class TokenProvider:
    """Returns a usable bearer token or raises AuthError"""

    def __init__(self, client: FossologyRestClient, settings: Optional[TokenSettings] = None):
        self.client = client
        self.settings = settings or TokenSettings()
        self.logger = logging.getLogger(self.__class__.__name__)

    def obtain(self, credentials: Credentials, now: Optional[datetime] = None) -> str:
        if credentials.has_token:
            self.logger.info("Using provided token")
            return credentials.token

        if not credentials.can_mint:
            raise AuthError("No Token: provide a token or both username and password", step=STEP)

        self.logger.info("No token, trying to generate one")
        return self.mint(credentials.username, credentials.password, now=now)

    def mint(self, username: str, password: str, now: Optional[datetime] = None) -> str:
        now = now or datetime.now()
        token_name = self.token_name(now)
        token_expire = self.expire_date(now)

        self.logger.info(
            "Create token: validity=%s days, expires=%s, name=%s, scope=%s",
            self.settings.validity_days, token_expire, token_name, self.settings.scope,
        )

        payload = {
            "username": username,
            "password": password,
            "token_name": token_name,
            "token_scope": self.settings.scope,
            "token_expire": token_expire,
        }
        document = self.client.post("tokens", json=payload)

        token = self._extract_token(document)
        if not token:
            raise AuthError("Failed to create token", step=STEP)

        self.logger.info("Token: %s...", token[:16])
        return token

    def token_name(self, now: datetime) -> str:
        return f"{self.settings.name_prefix}{now.strftime('%Y%m%d-%H%M%S')}"

    def expire_date(self, now: datetime) -> str:
        expires = now + timedelta(seconds=self.settings.validity_days * 24 * 60 * 60)
        return expires.strftime("%Y-%m-%d")

    @staticmethod
    def _extract_token(document) -> Optional[str]:
        if not isinstance(document, dict):
            return None
        value = document.get("Authorization")
        if value is None:
            return None
        token = str(value).replace("Bearer ", "", 1).strip().strip('"')
        if token == "null":
            return None
        return token

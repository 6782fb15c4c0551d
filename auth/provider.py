"""Credential provider: reuse a valid cached token or run the device flow."""

import logging
from datetime import datetime, timezone
from enum import Enum

import requests

from auth.credential_store import CredentialStore
from auth.device_flow import DeviceFlowClient
from models.data_models import Credential

logger = logging.getLogger(__name__)


class CredentialState(str, Enum):
    NO_CREDENTIAL = "no_credential"
    VALIDATING = "validating"
    AUTHORIZED = "authorized"


class CredentialProvider:
    """
    Hand out exactly one bearer token per run.

    A cached token is validated against ``GET /user`` first. Only when there
    is no cached token, or the platform rejects it, is the device flow run;
    the new token is then cached for the next run.
    """

    def __init__(
        self,
        store: CredentialStore,
        device_flow: DeviceFlowClient,
        api_base_url: str = "https://api.github.com",
    ):
        self.store = store
        self.device_flow = device_flow
        self.api_base_url = api_base_url.rstrip("/")
        self.state = CredentialState.NO_CREDENTIAL
        self.credential = None

    def validate(self, token: str) -> bool:
        """True if the platform accepts ``token`` (2xx from the user endpoint)."""
        try:
            response = requests.get(
                f"{self.api_base_url}/user",
                headers={
                    "Accept": "application/vnd.github+json",
                    "Authorization": f"Bearer {token}",
                },
            )
        except requests.RequestException as e:
            logger.warning(f"Token validation request failed: {e}")
            return False

        if 200 <= response.status_code < 300:
            return True

        logger.debug(f"Token rejected by {self.api_base_url}/user: {response.status_code}")
        return False

    def get_token(self) -> str:
        """Return a valid token, running the device flow only if needed."""
        cached = self.store.load()
        if cached is not None:
            self.state = CredentialState.VALIDATING
            if self.validate(cached.token):
                logger.info("Using cached token")
                return self._authorized(cached)

            logger.warning("Cached token is no longer valid, starting device flow")
            self.state = CredentialState.NO_CREDENTIAL

        return self._authorize_interactively()

    def login(self, force: bool = False) -> str:
        """Explicit login; ``force`` skips the cached token entirely."""
        if force:
            return self._authorize_interactively()
        return self.get_token()

    def logout(self) -> bool:
        self.credential = None
        self.state = CredentialState.NO_CREDENTIAL
        return self.store.clear()

    def _authorize_interactively(self) -> str:
        token = self.device_flow.authorize()
        credential = Credential(token=token, obtained_at=datetime.now(timezone.utc))
        self.store.save(credential)
        return self._authorized(credential)

    def _authorized(self, credential: Credential) -> str:
        self.credential = credential
        self.state = CredentialState.AUTHORIZED
        return credential.token

"""OAuth device authorization grant against GitHub.

The operator is shown a verification URL and a short user code; meanwhile
the token endpoint is polled until the code is approved, denied or expires.
"""

import logging
import time
from typing import Callable, Optional
from urllib.parse import parse_qsl

import requests
from pydantic import ValidationError

from models.data_models import DeviceCode
from utils.errors import AuthError, AuthTimeoutError, ConfigError

logger = logging.getLogger(__name__)

GRANT_TYPE = "urn:ietf:params:oauth:grant-type:device_code"

# Poll responses that mean "ask again later"
PENDING = "authorization_pending"
SLOW_DOWN = "slow_down"

# RFC 8628: on slow_down the interval grows by 5 seconds
SLOW_DOWN_INCREMENT = 5


class DeviceFlowClient:
    """
    Run the device flow and return an access token.

    ``clock`` and ``sleep`` default to ``time.monotonic`` and ``time.sleep``;
    tests pass fakes so the poll loop runs instantly.
    """

    def __init__(
        self,
        client_id: Optional[str],
        scope: str = "repo",
        base_url: str = "https://github.com",
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.client_id = client_id
        self.scope = scope
        self.base_url = base_url.rstrip("/")
        self.device_code_url = f"{self.base_url}/login/device/code"
        self.token_url = f"{self.base_url}/login/oauth/access_token"
        self.clock = clock
        self.sleep = sleep

    def request_device_code(self) -> DeviceCode:
        """Start the flow (step 1-2): obtain device and user codes.

        Raises:
            ConfigError: If no client id is configured (nothing is sent)
            AuthError: On transport errors, non-2xx responses or missing fields
        """
        if not self.client_id:
            raise ConfigError("GITHUB_CLIENT_ID is not set; it is required for the device flow")

        try:
            response = requests.post(
                self.device_code_url,
                data={"client_id": self.client_id, "scope": self.scope},
                headers={"Accept": "application/json"},
            )
        except requests.RequestException as e:
            raise AuthError(f"Device code request failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise AuthError(f"Device code request failed: {response.status_code} {response.reason}")

        data = _parse_body(response)
        if "error" in data:
            raise AuthError(f"Device code request failed: {_describe_error(data)}")

        try:
            return DeviceCode.model_validate(data)
        except ValidationError as e:
            raise AuthError(f"Unexpected device code response: {e}") from e

    def poll_for_token(self, device_code: DeviceCode) -> str:
        """Poll the token endpoint until an access token is issued (step 4-5).

        Raises:
            AuthTimeoutError: If ``expires_in`` seconds pass without approval
            AuthError: On any error other than pending/slow_down
        """
        interval = device_code.interval
        start = self.clock()

        while True:
            elapsed = self.clock() - start
            if elapsed > device_code.expires_in:
                raise AuthTimeoutError(
                    f"Device authorization timed out after {device_code.expires_in}s. Please run again."
                )

            self.sleep(interval)
            data = self._request_token(device_code.device_code)
            error = data.get("error")

            if error == PENDING:
                logger.debug("Authorization pending...")
                continue
            if error == SLOW_DOWN:
                interval = int(data.get("interval") or interval + SLOW_DOWN_INCREMENT)
                logger.info(f"slow_down received, polling every {interval}s")
                continue
            if error:
                raise AuthError(f"Device flow error: {_describe_error(data)}")
            if data.get("access_token"):
                logger.info("Device authorization complete")
                return data["access_token"]

            raise AuthError(f"Unexpected token response: {sorted(data)}")

    def authorize(self) -> str:
        """Run the whole device flow and return the access token."""
        logger.info("Starting GitHub device flow...")
        device_code = self.request_device_code()

        print("-" * 53)
        print(" Open the following URL in your browser and log in:")
        print("   ", device_code.verification_uri)
        print(" User Code:", device_code.user_code)
        print("-" * 53)

        return self.poll_for_token(device_code)

    def _request_token(self, device_code: str) -> dict:
        try:
            response = requests.post(
                self.token_url,
                json={
                    "client_id": self.client_id,
                    "device_code": device_code,
                    "grant_type": GRANT_TYPE,
                },
                headers={"Accept": "application/json"},
            )
        except requests.RequestException as e:
            raise AuthError(f"Token request failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise AuthError(f"Token request failed: {response.status_code} {response.reason}")

        return _parse_body(response)


def _parse_body(response: requests.Response) -> dict:
    """Decode a JSON or form-encoded (``a=1&b=2``) response body.

    JSON is recognised by the content type or, failing that, by a body that
    starts with ``{``.
    """
    content_type = response.headers.get("Content-Type", "")
    if "json" in content_type or response.text.lstrip().startswith("{"):
        try:
            data = response.json()
        except ValueError as e:
            raise AuthError(f"Invalid JSON from {response.url}") from e
        if not isinstance(data, dict):
            raise AuthError(f"Unexpected response body from {response.url}")
        return data

    return dict(parse_qsl(response.text))


def _describe_error(data: dict) -> str:
    description = data.get("error_description")
    return f"{data['error']} ({description})" if description else str(data["error"])

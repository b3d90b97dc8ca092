"""Bearer token acquisition.

Two providers exist:

- StaticTokenProvider returns a token issued elsewhere (config or env).
- DeviceFlowProvider runs the OAuth 2.0 device authorization grant
  against an OIDC issuer, which suits a terminal program: the operator
  opens the verification URL in any browser and enters the shown code.

The token is requested once at startup and held for the process lifetime.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable

import requests

from sitzungsverwaltung.config import AuthConfig
from sitzungsverwaltung.errors import AuthError


logger = logging.getLogger(__name__)

DEVICE_GRANT = "urn:ietf:params:oauth:grant-type:device_code"


@dataclass(frozen=True)
class DeviceCode:
    device_code: str
    user_code: str
    verification_uri: str
    verification_uri_complete: str | None
    expires_in: int
    interval: int


class StaticTokenProvider:
    def __init__(self, token: str) -> None:
        self.token = token

    def get_access_token(self) -> str:
        if not self.token:
            raise AuthError("Configured token is empty")
        return self.token


class DeviceFlowProvider:
    """OAuth device authorization grant (RFC 8628) against an OIDC issuer."""

    def __init__(
        self,
        issuer: str,
        client_id: str,
        *,
        scope: str = "openid",
        prompt: Callable[[DeviceCode], None] | None = None,
        sleep: Callable[[float], None] = time.sleep,
        timeout: float = 10.0,
    ) -> None:
        self.issuer = issuer.rstrip("/")
        self.client_id = client_id
        self.scope = scope
        self.prompt = prompt or _print_prompt
        self.sleep = sleep
        self.timeout = timeout
        self.sess = requests.Session()

    def get_access_token(self) -> str:
        metadata = self._discover()
        try:
            device_endpoint = metadata["device_authorization_endpoint"]
            token_endpoint = metadata["token_endpoint"]
        except KeyError as e:
            raise AuthError(f"Issuer {self.issuer} does not support the device flow") from e

        code = self._request_device_code(device_endpoint)
        self.prompt(code)
        return self._poll(token_endpoint, code)

    def _discover(self) -> dict:
        url = f"{self.issuer}/.well-known/openid-configuration"
        return self._json("GET", url)

    def _request_device_code(self, endpoint: str) -> DeviceCode:
        data = self._json("POST", endpoint, data={"client_id": self.client_id, "scope": self.scope})
        try:
            return DeviceCode(
                device_code=data["device_code"],
                user_code=data["user_code"],
                verification_uri=data.get("verification_uri") or data["verification_url"],
                verification_uri_complete=data.get("verification_uri_complete"),
                expires_in=int(data.get("expires_in", 600)),
                interval=int(data.get("interval", 5)),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise AuthError("Malformed device authorization response") from e

    def _poll(self, endpoint: str, code: DeviceCode) -> str:
        interval = code.interval
        deadline = time.monotonic() + code.expires_in
        form = {
            "grant_type": DEVICE_GRANT,
            "device_code": code.device_code,
            "client_id": self.client_id,
        }

        while time.monotonic() < deadline:
            self.sleep(interval)
            try:
                r = self.sess.post(endpoint, data=form, timeout=self.timeout)
                data = r.json()
            except requests.RequestException as e:
                raise AuthError(f"Token request failed: {e}") from e
            except ValueError as e:
                raise AuthError("Token endpoint returned invalid JSON") from e

            if r.ok and "access_token" in data:
                logger.info("Obtained access token from %s", self.issuer)
                return data["access_token"]

            error = data.get("error")
            if error == "authorization_pending":
                continue
            if error == "slow_down":
                interval += 5
                continue
            raise AuthError(f"Authorization failed: {error or r.status_code}")

        raise AuthError("Device code expired before authorization completed")

    def _json(self, method: str, url: str, **kwargs) -> dict:
        try:
            r = self.sess.request(method, url, timeout=self.timeout, **kwargs)
            r.raise_for_status()
            data = r.json()
        except requests.RequestException as e:
            raise AuthError(f"{method} {url} failed: {e}") from e
        except ValueError as e:
            raise AuthError(f"{url} returned invalid JSON") from e
        if not isinstance(data, dict):
            raise AuthError(f"{url} returned unexpected payload")
        return data


def _print_prompt(code: DeviceCode) -> None:
    target = code.verification_uri_complete or code.verification_uri
    print(f"Open {target} and enter code {code.user_code} to sign in.")


def provider_from_config(auth: AuthConfig, *, timeout: float = 10.0):
    """Pick the token provider for the given auth config."""
    if auth.token:
        return StaticTokenProvider(auth.token)
    if not auth.issuer or not auth.client_id:
        raise AuthError("No token configured and auth.issuer/auth.client_id missing")
    return DeviceFlowProvider(auth.issuer, auth.client_id, scope=auth.scope, timeout=timeout)

"""HMAC-SHA256 signatures carrying an expiry timestamp."""

from __future__ import annotations

import base64
import hashlib
import hmac
import re
import time
from dataclasses import dataclass

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_INTEGER = re.compile(r"[+-]?[0-9]+")


class SignError(Exception):
    """Base class for signature verification failures."""


class SignExpiredError(SignError):
    def __init__(self) -> None:
        super().__init__("sign expired")


class SignInvalidError(SignError):
    def __init__(self) -> None:
        super().__init__("sign invalid")


class ExpireInvalidError(SignError):
    def __init__(self) -> None:
        super().__init__("expire invalid")


class ExpireMissingError(SignError):
    def __init__(self) -> None:
        super().__init__("expire missing")


@dataclass(frozen=True)
class HMACSign:
    """Signs data as ``<urlsafe-base64 HMAC>:<expire>``."""

    secret_key: bytes

    def sign(self, data: str, expire: int) -> str:
        """Sign ``data`` with an expiry as Unix seconds (0 never expires)."""
        stamp = str(int(expire))
        digest = hmac.new(
            self.secret_key, f"{data}:{stamp}".encode(), hashlib.sha256
        ).digest()
        return base64.urlsafe_b64encode(digest).decode("ascii") + ":" + stamp

    def verify(self, data: str, signature: str) -> None:
        """Check a signature, raising a :class:`SignError` subclass on failure."""
        stamp = signature.split(":")[-1]
        if stamp == "":
            raise ExpireMissingError()
        if not _INTEGER.fullmatch(stamp):
            raise ExpireInvalidError()
        expires = int(stamp)
        if not _INT64_MIN <= expires <= _INT64_MAX:
            raise ExpireInvalidError()
        if expires != 0 and expires < int(time.time()):
            raise SignExpiredError()
        if not hmac.compare_digest(self.sign(data, expires), signature):
            raise SignInvalidError()


def new_hmac_sign(secret: bytes) -> HMACSign:
    """Create a signer using ``secret`` as the HMAC key."""
    return HMACSign(secret_key=bytes(secret))
"""
Credential Gate — HTTP Basic Authentication check.

Pure, framework-independent evaluation of one request against the
configured admin identity. Nothing here touches Flask: the middleware
builds a ``RequestView``, calls ``evaluate`` and applies the returned
``GateResult`` to the real response.

Flow:
    1. Challenge header ``WWW-Authenticate: Basic`` is always queued
    2. ``Authorization`` missing            → Deny(missing-header)
    3. scheme != "Basic" (case-sensitive)   → Deny(unsupported-scheme)
    4. token not strict Base64 / not UTF-8  → Deny(malformed-token)
    5. split decoded text on FIRST colon
    6. name/password mismatch               → Deny(bad-credentials)
    7. otherwise                            → Allow

Usage:
    from admin_panel.services.credential_gate import AdminIdentity, RequestView, evaluate

    result = evaluate(RequestView.from_headers(request.headers), identity)
    if result.allowed:
        ...
"""

from __future__ import annotations

import base64
import binascii
import enum
import hmac
from dataclasses import dataclass, field
from typing import Mapping, Optional, Union

AUTHORIZATION_HEADER = "Authorization"
CHALLENGE_HEADER = "WWW-Authenticate"
BASIC_SCHEME = "Basic"


# ── Types ────────────────────────────────────────────────────────────────────


class DenyReason(str, enum.Enum):
    """Why a request was refused. Logged only, never sent to the client."""

    MISSING_HEADER = "missing-header"
    UNSUPPORTED_SCHEME = "unsupported-scheme"
    MALFORMED_TOKEN = "malformed-token"
    BAD_CREDENTIALS = "bad-credentials"


@dataclass(frozen=True)
class Allow:
    username: str


@dataclass(frozen=True)
class Deny:
    reason: DenyReason


Decision = Union[Allow, Deny]


@dataclass(frozen=True)
class Credentials:
    """A decoded ``username:password`` pair. Lives for one evaluation only."""

    username: str
    password: Optional[str]

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, password=***)"


@dataclass(frozen=True)
class AdminIdentity:
    """The single identity the gate accepts, loaded once from configuration."""

    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class RequestView:
    """Immutable snapshot of the request data the gate reads."""

    authorization: Optional[str] = None

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "RequestView":
        """Build a view from any header mapping.

        Werkzeug's ``Headers`` is already case-insensitive; plain dicts are
        searched case-insensitively here so callers can pass either.
        """
        value = headers.get(AUTHORIZATION_HEADER)
        if value is None:
            for name, candidate in headers.items():
                if name.lower() == AUTHORIZATION_HEADER.lower():
                    value = candidate
                    break
        return cls(authorization=value)


@dataclass(frozen=True)
class GateResult:
    decision: Decision
    response_headers: tuple[tuple[str, str], ...] = ()

    @property
    def allowed(self) -> bool:
        return isinstance(self.decision, Allow)

    @property
    def reason(self) -> Optional[DenyReason]:
        return self.decision.reason if isinstance(self.decision, Deny) else None


class MalformedTokenError(ValueError):
    """Raised by ``decode_basic_token`` when the token is not usable."""


# ── Header codec ─────────────────────────────────────────────────────────────


def encode_basic_credentials(username: str, password: str) -> str:
    """Return the ``Authorization`` header value a client sends for the pair.

    Raises:
        ValueError: if the username contains a colon (it could never be
            decoded back, since the first colon is the delimiter).
    """
    if ":" in username:
        raise ValueError("username must not contain ':'")
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return f"{BASIC_SCHEME} {token}"


def decode_basic_token(token: Optional[str]) -> Credentials:
    """Decode a Basic token into credentials.

    Only the first colon separates name from password, so passwords may
    contain colons. Decoded text without any colon yields ``password=None``.

    Raises:
        MalformedTokenError: missing token, invalid Base64 or non-UTF-8 payload.
    """
    if token is None:
        raise MalformedTokenError("no token after scheme")
    try:
        raw = base64.b64decode(token, validate=True)
        text = raw.decode("utf-8")
    except (binascii.Error, ValueError) as exc:
        raise MalformedTokenError(str(exc)) from exc

    name, sep, password = text.partition(":")
    return Credentials(username=name, password=password if sep else None)


def split_authorization(value: str) -> tuple[str, Optional[str]]:
    """Split ``"<scheme> <token>"`` on the first space."""
    scheme, sep, token = value.partition(" ")
    return scheme, (token if sep else None)


# ── Gate ─────────────────────────────────────────────────────────────────────


def _matches(credentials: Credentials, identity: AdminIdentity) -> bool:
    if credentials.password is None:
        return False
    # Evaluate both comparisons so timing does not reveal which one failed.
    name_ok = hmac.compare_digest(
        credentials.username.encode("utf-8"), identity.username.encode("utf-8")
    )
    password_ok = hmac.compare_digest(
        credentials.password.encode("utf-8"), identity.password.encode("utf-8")
    )
    return name_ok and password_ok


def evaluate(
    view: RequestView,
    identity: AdminIdentity,
    *,
    challenge_on_allow: bool = True,
) -> GateResult:
    """Decide whether the request may reach the protected handler.

    Args:
        view: Headers of the inbound request.
        identity: The configured admin identity.
        challenge_on_allow: Also return the challenge header when allowing.
            Deny results always carry it.

    Returns:
        GateResult with an ``Allow`` or ``Deny`` decision and the headers
        the caller must set on the response.
    """
    challenge = ((CHALLENGE_HEADER, BASIC_SCHEME),)

    def deny(reason: DenyReason) -> GateResult:
        return GateResult(decision=Deny(reason), response_headers=challenge)

    if not view.authorization:
        return deny(DenyReason.MISSING_HEADER)

    scheme, token = split_authorization(view.authorization)
    if scheme != BASIC_SCHEME:
        return deny(DenyReason.UNSUPPORTED_SCHEME)

    try:
        credentials = decode_basic_token(token)
    except MalformedTokenError:
        return deny(DenyReason.MALFORMED_TOKEN)

    if not _matches(credentials, identity):
        return deny(DenyReason.BAD_CREDENTIALS)

    return GateResult(
        decision=Allow(credentials.username),
        response_headers=challenge if challenge_on_allow else (),
    )

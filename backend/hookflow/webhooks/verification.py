# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Webhook Signature Verification

Authenticates inbound deliveries before anything else looks at them.

GitHub and Notion sign the raw body with HMAC-SHA256 and send
"sha256=<hex>" in a header. Taskade sends a bearer token, either in the
Authorization header or as `auth_token` in the payload. All comparisons are
constant-time, and a missing secret fails closed.
"""

import hashlib
import hmac
import re
from typing import Any, Mapping, Optional

from hookflow.webhooks.models import VerificationResult

SIGNATURE_PREFIX = "sha256="
BEARER_PATTERN = re.compile(r'^Bearer\s+', re.IGNORECASE)

# Header carrying the body signature, per HMAC-signing service
SIGNATURE_HEADERS = {
    "github": "X-Hub-Signature-256",
    "notion": "Notion-Signature",
}


def get_header(headers: Mapping[str, str], name: str) -> Optional[str]:
    """Case-insensitive header lookup over any mapping"""
    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, value in headers.items():
        if key.lower() == lowered:
            return value
    return None


def compute_signature(secret: str, raw_body: bytes) -> str:
    """Expected header value for a body: "sha256=<hex digest>" """
    digest = hmac.new(secret.encode("utf-8"), msg=raw_body, digestmod=hashlib.sha256).hexdigest()
    return f"{SIGNATURE_PREFIX}{digest}"


def verify_hmac_signature(
    raw_body: bytes,
    signature: Optional[str],
    secret: Optional[str],
    header_name: str = "X-Hub-Signature-256"
) -> VerificationResult:
    """
    Verify an HMAC-SHA256 body signature.

    Args:
        raw_body: Exact bytes received on the wire
        signature: Header value, "sha256=<hex>"
        secret: Shared webhook secret
        header_name: Header name used in error messages

    Returns:
        VerificationResult
    """
    if not secret:
        return VerificationResult(valid=False, error="Webhook secret not configured")

    if not signature:
        return VerificationResult(valid=False, error=f"Missing {header_name} header")

    if not signature.startswith(SIGNATURE_PREFIX):
        return VerificationResult(valid=False, error="Invalid signature format")

    expected = compute_signature(secret, raw_body)

    # compare_digest also needs equal-length operands to be meaningful
    if len(signature) != len(expected):
        return VerificationResult(valid=False, error="Signature mismatch")

    if hmac.compare_digest(signature.encode("utf-8"), expected.encode("utf-8")):
        return VerificationResult(valid=True)
    return VerificationResult(valid=False, error="Signature mismatch")


def verify_bearer_token(
    payload: Any,
    auth_header: Optional[str],
    expected_token: Optional[str]
) -> VerificationResult:
    """
    Verify a Taskade-style bearer token from the header or payload.

    Args:
        payload: Parsed body (may be None when the body is not JSON)
        auth_header: Authorization header value
        expected_token: Token stored on the connection
    """
    if not expected_token:
        return VerificationResult(valid=False, error="Webhook token not configured")

    expected = expected_token.encode("utf-8")

    if auth_header:
        token = BEARER_PATTERN.sub("", auth_header, count=1)
        if hmac.compare_digest(token.encode("utf-8"), expected):
            return VerificationResult(valid=True)

    if isinstance(payload, dict):
        token = payload.get("auth_token")
        if isinstance(token, str) and hmac.compare_digest(token.encode("utf-8"), expected):
            return VerificationResult(valid=True)

    return VerificationResult(valid=False, error="Invalid or missing authentication")


def verify(
    service: str,
    raw_body: bytes,
    headers: Mapping[str, str],
    secret: Optional[str],
    payload: Any = None
) -> VerificationResult:
    """
    Authenticate one delivery. Never raises.

    Args:
        service: Path service name
        raw_body: Exact request bytes
        headers: Request headers
        secret: Webhook secret (HMAC services) or API token (taskade)
        payload: Parsed body, used by token-in-payload schemes

    Returns:
        VerificationResult; invalid for unsupported services
    """
    header_name = SIGNATURE_HEADERS.get(service)
    if header_name:
        return verify_hmac_signature(raw_body, get_header(headers, header_name), secret, header_name)

    if service == "taskade":
        return verify_bearer_token(payload, get_header(headers, "Authorization"), secret)

    return VerificationResult(valid=False, error=f"Unsupported service: {service}")

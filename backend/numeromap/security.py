import base64
import hashlib
import hmac
import json
from datetime import datetime, timedelta, timezone

from .config import settings


def expiry_after_minutes(ttl_minutes: int) -> datetime:
    return datetime.now(timezone.utc) + timedelta(minutes=ttl_minutes)


def _b64url_encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def _b64url_decode(raw: str) -> bytes:
    pad_len = (4 - len(raw) % 4) % 4
    return base64.urlsafe_b64decode(raw + ("=" * pad_len))


def _signing_secret() -> bytes:
    secret = settings.report_signing_secret or settings.internal_api_key
    if not secret:
        raise RuntimeError("REPORT_SIGNING_SECRET or INTERNAL_API_KEY is required for signed links")
    return secret.encode("utf-8")


def create_signed_token(payload: dict) -> str:
    body = json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    signature = hmac.new(_signing_secret(), body, hashlib.sha256).digest()
    return f"{_b64url_encode(body)}.{_b64url_encode(signature)}"


def verify_signed_token(token: str) -> dict | None:
    try:
        body_part, sig_part = token.split(".", maxsplit=1)
        body = _b64url_decode(body_part)
        received_sig = _b64url_decode(sig_part)
    except ValueError:
        return None

    expected_sig = hmac.new(_signing_secret(), body, hashlib.sha256).digest()
    if not hmac.compare_digest(received_sig, expected_sig):
        return None

    try:
        payload = json.loads(body.decode("utf-8"))
    except ValueError:
        return None

    if not isinstance(payload, dict):
        return None

    expires_at = payload.get("exp")
    if expires_at is not None:
        try:
            if int(expires_at) < int(datetime.now(timezone.utc).timestamp()):
                return None
        except (TypeError, ValueError):
            return None

    return payload

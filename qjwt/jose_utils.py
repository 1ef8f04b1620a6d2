import base64
import binascii
import json
import re
from typing import Any, Dict, Tuple

from .errors import InvalidClaimsError, InvalidTokenError

# Strict base64url charset
BASE64URL_RE = re.compile(r"^[A-Za-z0-9\-_]*$")


def b64url_encode(data: bytes) -> str:
    """
    Base64url encode without padding, as required by JOSE / JWT.
    """
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(data: str) -> bytes:
    """
    Strict base64url decode:
      - Only allows A–Z, a–z, 0–9, '-' and '_'
      - Adds padding if missing
      - Rejects non-canonical input (non-zero unused bits in the last char)
      - Raises ValueError if invalid
    """
    if not BASE64URL_RE.fullmatch(data):
        raise ValueError("invalid base64url characters")

    padded = data + "=" * (-len(data) % 4)
    try:
        raw = base64.urlsafe_b64decode(padded.encode("ascii"))
    except binascii.Error as exc:
        raise ValueError("invalid base64url") from exc

    if b64url_encode(raw) != data:
        raise ValueError("non-canonical base64url")
    return raw


def encode_header(alg: str) -> str:
    """
    JSON-encode then base64url-encode the JOSE header.
    """
    header = {"alg": alg, "typ": "JWT"}
    raw = json.dumps(header, separators=(",", ":")).encode("utf-8")
    return b64url_encode(raw)


def encode_payload(payload: Dict[str, Any]) -> str:
    """
    JSON-encode then base64url-encode the JWT payload (claims).
    """
    try:
        raw = json.dumps(payload, separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise InvalidClaimsError(f"claims are not JSON serializable: {exc}") from exc
    return b64url_encode(raw.encode("utf-8"))


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant: {name}")


def decode_segment(segment: str) -> Dict[str, Any]:
    """
    Decode a base64url-encoded JSON segment (header or payload).
    Anything that is not a JSON object raises InvalidTokenError.
    """
    try:
        raw = b64url_decode(segment)
        value = json.loads(raw.decode("utf-8"), parse_constant=_reject_constant)
    except (ValueError, UnicodeDecodeError, RecursionError) as exc:
        # json.JSONDecodeError is a ValueError
        raise InvalidTokenError("malformed segment") from exc

    if not isinstance(value, dict):
        raise InvalidTokenError("segment is not a JSON object")
    return value


def split_jws(token: str) -> Tuple[str, str, str]:
    """
    Split a compact JWS into 3 segments.
    Raises InvalidTokenError if the structure is wrong.
    """
    parts = token.split(".")
    if len(parts) != 3:
        raise InvalidTokenError("malformed_token: expected 3 segments")
    if not parts[2]:
        raise InvalidTokenError("malformed_token: empty signature")
    return parts[0], parts[1], parts[2]

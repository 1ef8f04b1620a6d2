"""
JWT encode / decode.

    token = encode("HS256", {"sub": "alice"}, b"secret", expiration=3600)
    claims = decode(token, b"secret")

decode raises a JWTError subclass on failure; checks always run in the
order structure -> signature -> expiration.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from .algorithms import resolve
from .crypto_backend import sign, verify
from .errors import (
    AlgorithmNotSupportedError,
    ExpiredTokenError,
    InvalidClaimsError,
    InvalidSignatureError,
    InvalidTokenError,
)
from .expiration import Expiration, compute_expiry, is_expired
from .jose_utils import decode_segment, encode_header, encode_payload, split_jws
from .keys import KeyMaterial

logger = logging.getLogger("qjwt.codec")

Claims = Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]


def normalize_claims(claims: Claims) -> Dict[str, Any]:
    """
    Accept a mapping or a list of (key, value) pairs and return a new dict.
    """
    if isinstance(claims, (str, bytes)):
        raise InvalidClaimsError("claims must be a mapping or (key, value) pairs")

    try:
        result = dict(claims)
    except (TypeError, ValueError) as exc:
        raise InvalidClaimsError(f"claims must be a mapping or (key, value) pairs: {exc}") from exc

    for name in result:
        if not isinstance(name, str):
            raise InvalidClaimsError(f"claim names must be strings, got {name!r}")
    return result


def encode(
    alg: str,
    claims: Claims,
    key: KeyMaterial,
    expiration: Optional[Expiration] = None,
    *,
    now: Optional[int] = None,
) -> str:
    """
    Create a signed token.

    Args:
        alg: one of HS256, HS384, HS512, RS256, ES256
        claims: the payload, as a mapping or (key, value) pairs
        key: HMAC secret, PEM private key, or a cryptography private key
        expiration: if given, an exp claim is computed from it (see
            compute_expiry) and replaces any exp already in claims
        now: current epoch seconds, defaults to the system clock

    Raises:
        AlgorithmNotSupportedError, InvalidClaimsError, InvalidKeyError
    """
    descriptor = resolve(alg)
    if descriptor is None:
        raise AlgorithmNotSupportedError("algorithm_not_supported")

    payload = normalize_claims(claims)
    if expiration is not None:
        payload["exp"] = compute_expiry(expiration, now)

    encoded_payload = encode_payload(payload)
    encoded_header = encode_header(alg)
    signing_input = f"{encoded_header}.{encoded_payload}"

    signature = sign(descriptor, signing_input.encode("ascii"), key)
    return f"{signing_input}.{signature}"


def _as_text(token: Union[str, bytes]) -> str:
    if isinstance(token, (bytes, bytearray)):
        try:
            return bytes(token).decode("ascii")
        except UnicodeDecodeError as exc:
            raise InvalidTokenError("token is not ASCII") from exc
    if not isinstance(token, str):
        raise InvalidTokenError(f"token must be str or bytes, got {type(token).__name__}")
    return token


def decode(
    token: Union[str, bytes],
    key: KeyMaterial,
    issuer_keys: Optional[Mapping[str, KeyMaterial]] = None,
    *,
    now: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Verify a token and return its claims.

    When issuer_keys is given and the claims carry an iss found in it, that
    key is used instead of `key`.

    Raises:
        InvalidTokenError: wrong segment count, bad base64url or JSON
        InvalidSignatureError: signature does not verify (also for
            algorithms outside the registry)
        ExpiredTokenError: signature valid, exp not in the future
    """
    h_seg, p_seg, s_seg = split_jws(_as_text(token))
    header = decode_segment(h_seg)
    payload = decode_segment(p_seg)

    if "alg" not in header:
        raise InvalidTokenError("header has no alg")

    issuer = payload.get("iss")
    if issuer_keys and isinstance(issuer, str) and issuer in issuer_keys:
        key = issuer_keys[issuer]

    signing_input = f"{h_seg}.{p_seg}".encode("ascii")
    if not verify(resolve(header["alg"]), signing_input, s_seg, key):
        logger.debug("Rejected token: invalid signature alg=%r iss=%r", header["alg"], issuer)
        raise InvalidSignatureError("invalid_signature")

    try:
        expired = is_expired(payload, now)
    except TypeError as exc:
        raise InvalidTokenError(str(exc)) from exc

    if expired:
        logger.debug("Rejected token: expired exp=%r iss=%r", payload.get("exp"), issuer)
        raise ExpiredTokenError("expired")

    return payload

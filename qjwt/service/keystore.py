from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .config import Settings

logger = logging.getLogger("qjwt.service.keystore")


class KeyStoreError(Exception):
    """Raised when configured key material is missing or cannot be loaded."""


def _read_pem(path: str | Path) -> bytes:
    p = Path(path)
    try:
        return p.read_bytes()
    except OSError as exc:
        raise KeyStoreError(f"cannot read key file {p}: {exc}") from exc


def _load_issuer_record(issuer: str, record: Any, base_dir: Path) -> bytes:
    if not isinstance(record, dict):
        raise KeyStoreError(f"issuer {issuer!r}: expected an object, got {type(record).__name__}")

    if "secret" in record:
        return str(record["secret"]).encode("utf-8")

    if "pem_path" in record:
        pem_path = Path(record["pem_path"])
        if not pem_path.is_absolute():
            pem_path = base_dir / pem_path
        return _read_pem(pem_path)

    raise KeyStoreError(f"issuer {issuer!r}: needs 'secret' or 'pem_path'")


def _is_hmac(alg: Any) -> bool:
    return isinstance(alg, str) and alg.startswith("HS")


@dataclass
class KeyStore:
    """
    Key material the service signs and verifies with.

      - hmac_secret: shared secret for HS256/HS384/HS512
      - private_key: PEM private key for RS256/ES256 signing
      - public_key: PEM key for RS256/ES256 verification
      - issuer_keys: per-issuer verification keys (iss -> key)

    Raw bytes are kept; the qjwt core parses PEM on each call.
    """

    hmac_secret: Optional[bytes] = None
    private_key: Optional[bytes] = None
    public_key: Optional[bytes] = None
    issuer_keys: Dict[str, bytes] = field(default_factory=dict)

    def signing_key_for(self, alg: str) -> bytes:
        key = self.hmac_secret if _is_hmac(alg) else self.private_key
        if key is None:
            raise KeyStoreError(f"no signing key configured for {alg}")
        return key

    def verify_key_for(self, alg: Any) -> Optional[bytes]:
        """
        Default verification key for a header alg. None when nothing is
        configured; the core treats a None key as a failed signature check.
        """
        if _is_hmac(alg):
            key = self.hmac_secret
        else:
            key = self.public_key or self.private_key
        return key

    @classmethod
    def from_settings(cls, settings: Settings) -> "KeyStore":
        store = cls()

        if settings.hmac_secret:
            store.hmac_secret = settings.hmac_secret.encode("utf-8")

        if settings.private_key_path:
            store.private_key = _read_pem(settings.private_key_path)

        if settings.public_key_path:
            store.public_key = _read_pem(settings.public_key_path)

        if settings.issuer_keys_path:
            path = Path(settings.issuer_keys_path)
            try:
                data = json.loads(path.read_text())
            except (OSError, ValueError) as exc:
                raise KeyStoreError(f"cannot load issuer keys from {path}: {exc}") from exc

            if not isinstance(data, dict):
                raise KeyStoreError(f"{path}: expected a JSON object of issuer -> key")

            for issuer, record in data.items():
                store.issuer_keys[issuer] = _load_issuer_record(issuer, record, path.parent)

        logger.info(
            "Key store loaded: hmac=%s private_pem=%s public_pem=%s issuers=%d",
            store.hmac_secret is not None,
            store.private_key is not None,
            store.public_key is not None,
            len(store.issuer_keys),
        )
        return store

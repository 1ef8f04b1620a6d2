import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa

from qjwt.jose_utils import b64url_decode, b64url_encode

HMAC_SECRET = b"0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef"
OTHER_SECRET = b"fedcba9876543210fedcba9876543210fedcba9876543210fedcba9876543210"

# fixed clock for deterministic expiration checks
NOW = 1_700_000_000


def _private_pem(key) -> bytes:
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )


def _public_pem(key) -> bytes:
    return key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )


@pytest.fixture(scope="session")
def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def rsa_private_pem(rsa_key):
    return _private_pem(rsa_key)


@pytest.fixture(scope="session")
def rsa_public_pem(rsa_key):
    return _public_pem(rsa_key)


@pytest.fixture(scope="session")
def ec_key():
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def ec_private_pem(ec_key):
    return _private_pem(ec_key)


@pytest.fixture(scope="session")
def ec_public_pem(ec_key):
    return _public_pem(ec_key)


@pytest.fixture(scope="session")
def key_pairs(rsa_private_pem, rsa_public_pem, ec_private_pem, ec_public_pem):
    """
    alg -> (signing key, verification key)
    """
    return {
        "HS256": (HMAC_SECRET, HMAC_SECRET),
        "HS384": (HMAC_SECRET, HMAC_SECRET),
        "HS512": (HMAC_SECRET, HMAC_SECRET),
        "RS256": (rsa_private_pem, rsa_public_pem),
        "ES256": (ec_private_pem, ec_public_pem),
    }


def flip_signature_bit(token: str, bit: int = 0) -> str:
    """
    Flip one bit of the raw signature bytes and re-encode the token.
    """
    head, payload, sig = token.split(".")
    raw = bytearray(b64url_decode(sig))
    raw[bit // 8] ^= 1 << (bit % 8)
    return f"{head}.{payload}.{b64url_encode(bytes(raw))}"


B64URL_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"


def flip_signature_char(token: str, index: int) -> str:
    """
    Flip the low bit of one base64url character of the signature segment.
    """
    head, payload, sig = token.split(".")
    chars = list(sig)
    chars[index] = B64URL_ALPHABET[B64URL_ALPHABET.index(chars[index]) ^ 1]
    return f"{head}.{payload}.{''.join(chars)}"


def hs256_token(payload: bytes, secret: bytes) -> str:
    """
    Sign an arbitrary raw payload, bypassing encode's JSON serialization.
    """
    import hashlib
    import hmac

    header = b64url_encode(b'{"alg":"HS256","typ":"JWT"}')
    body = b64url_encode(payload)
    mac = hmac.new(secret, f"{header}.{body}".encode("ascii"), hashlib.sha256).digest()
    return f"{header}.{body}.{b64url_encode(mac)}"

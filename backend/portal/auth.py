import secrets
from datetime import UTC, datetime, timedelta
from functools import lru_cache

from cryptography.exceptions import InvalidKey
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt
from jose import JWTError, jwt

from portal.config import settings

SCRYPT_N = 16384
SCRYPT_R = 8
SCRYPT_P = 1
KEY_LENGTH = 64
SALT_BYTES = 16
DELIMITER = "."


def _kdf(salt: str) -> Scrypt:
    # The hex salt text itself is the scrypt salt, matching existing records.
    return Scrypt(
        salt=salt.encode(),
        length=KEY_LENGTH,
        n=SCRYPT_N,
        r=SCRYPT_R,
        p=SCRYPT_P,
    )


def hash_password(password: str) -> str:
    salt = secrets.token_hex(SALT_BYTES)
    return f"{_kdf(salt).derive(password.encode()).hex()}{DELIMITER}{salt}"


def verify_password(plain: str, stored: str) -> bool:
    """Check ``plain`` against a stored record; malformed records never match."""
    hashed, sep, salt = stored.partition(DELIMITER)
    if not sep or not hashed or not salt or DELIMITER in salt:
        return False
    # ValueError also covers passwords that cannot be encoded as UTF-8.
    try:
        expected = bytes.fromhex(hashed)
        _kdf(salt).verify(plain.encode(), expected)
    except (ValueError, InvalidKey):
        return False
    return True


@lru_cache(maxsize=1)
def dummy_password_record() -> str:
    return hash_password(secrets.token_hex(SALT_BYTES))


def sign_session_id(sid: str) -> str:
    expire = datetime.now(UTC) + timedelta(hours=settings.session_ttl_hours)
    return jwt.encode(
        {"sid": sid, "exp": expire},
        settings.secret_key,
        algorithm="HS256",
    )


def read_session_id(cookie: str) -> str | None:
    try:
        payload = jwt.decode(cookie, settings.secret_key, algorithms=["HS256"])
    except JWTError:
        return None
    sid = payload.get("sid")
    return sid if isinstance(sid, str) else None

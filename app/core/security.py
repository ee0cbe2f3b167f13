"""Security utilities"""

from datetime import datetime, timedelta
from typing import Any, Dict, Optional
from jose import jwt, JWTError
from passlib.context import CryptContext
from .config import settings
import secrets
import string


# Password context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.PASSWORD_HASH_ROUNDS,
)


def get_password_hash(password: str) -> str:
    """Hash password"""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password"""
    return pwd_context.verify(plain_password, hashed_password)


class TokenSigner:
    """Signs and verifies bearer tokens.

    Only signature and `exp` are checked here; whether the session behind a
    token is still active is decided by the session store.
    """

    def __init__(self, secret_key: str = None, algorithm: str = None):
        self.secret_key = secret_key or settings.SECRET_KEY
        self.algorithm = algorithm or settings.ALGORITHM

    def sign(self, payload: Dict[str, Any], ttl: timedelta) -> str:
        to_encode = dict(payload)
        to_encode["exp"] = datetime.utcnow() + ttl
        # random jti keeps tokens unique even when issued within the same second
        to_encode.setdefault("jti", secrets.token_urlsafe(16))
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> Optional[Dict[str, Any]]:
        try:
            return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            return None


token_signer = TokenSigner()


def create_access_token(subject: str) -> str:
    """Create access token"""
    expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return token_signer.sign({"sub": subject}, expires_delta)


def verify_token(token: str) -> Optional[str]:
    """Verify token and return subject"""
    payload = token_signer.verify(token)
    if not payload:
        return None
    return payload.get("sub")


def generate_otp_code(length: int = None) -> str:
    """Generate a numeric one-time code."""
    length = length or settings.OTP_LENGTH
    return ''.join(secrets.choice(string.digits) for _ in range(length))

from typing import Union

from passlib.context import CryptContext
from pydantic import SecretStr


pwd_ctx = CryptContext(schemes=["argon2"], deprecated="auto")

def _to_plain(p: Union[str, SecretStr]) -> str:
    return p.get_secret_value() if isinstance(p, SecretStr) else p

def hash_password(password: Union[str, SecretStr]) -> str:
    return pwd_ctx.hash(_to_plain(password))

def verify_password(plain: Union[str, SecretStr], hashed: str) -> bool:
    return pwd_ctx.verify(_to_plain(plain), hashed)

def password_needs_rehash(hashed: str) -> bool:
    # argon2 parameters changed since the hash was stored
    return pwd_ctx.needs_update(hashed)

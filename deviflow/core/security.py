from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional
from jose import ExpiredSignatureError, JWTError, jwt
import bcrypt
from deviflow.core.config import settings
from deviflow.core.exceptions import InvalidToken, Unauthenticated
from deviflow.core.logging_config import logger
from deviflow.models.user import Role

# bcrypt only looks at the first 72 bytes
_BCRYPT_MAX_BYTES = 72


def get_password_hash(password: str, rounds: Optional[int] = None) -> str:
    """Hash a password using bcrypt with the configured cost factor."""
    password_bytes = password.encode('utf-8')[:_BCRYPT_MAX_BYTES]
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    hashed = bcrypt.hashpw(password_bytes, salt)
    return hashed.decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash. Malformed hashes never match."""
    password_bytes = plain_password.encode('utf-8')[:_BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(password_bytes, hashed_password.encode('utf-8'))
    except (ValueError, TypeError):
        return False


@lru_cache(maxsize=1)
def dummy_password_hash() -> str:
    """
    Hash compared against when no user matches a login attempt, so that an
    unknown email costs the same bcrypt work as a wrong password.
    """
    return get_password_hash("not-a-real-password")


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    tenant_id: int
    role: Role
    email: str
    expires_at: datetime


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class TokenService:
    """
    Issues and verifies the signed session token.

    The token is a JWT carrying userId, tenantId, role and email. It is never
    stored server-side; expiry forces a new login since there is no refresh
    token.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", expires_minutes: int = 60 * 24):
        if not secret_key:
            raise ValueError("TokenService requires a non-empty secret key")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expires_minutes = expires_minutes

    @classmethod
    def from_settings(cls, config) -> "TokenService":
        return cls(
            secret_key=config.SECRET_KEY,
            algorithm=config.ALGORITHM,
            expires_minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES,
        )

    def issue(
        self,
        *,
        user_id: int,
        tenant_id: int,
        role: Role,
        email: str,
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """
        Create a signed token for an authenticated principal.

        Args:
            user_id: Principal ID
            tenant_id: Tenant the principal belongs to
            role: Principal role
            email: Principal email
            expires_delta: Optional custom lifetime. Defaults to the configured 24 hours.

        Returns:
            Encoded JWT string
        """
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(minutes=self.expires_minutes))
        payload = {
            "userId": user_id,
            "tenantId": tenant_id,
            "role": Role(role).value,
            "email": email,
            "iat": now,
            "exp": expire,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Verify and decode a token.

        Raises:
            InvalidToken: If the signature does not match, the token is
                malformed or expired, or the claims are incomplete.
        """
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            logger.info("Rejected expired token")
            raise InvalidToken()
        except JWTError:
            raise InvalidToken()

        user_id = payload.get("userId")
        tenant_id = payload.get("tenantId")
        email = payload.get("email")
        exp = payload.get("exp")
        if not _is_int(user_id) or not _is_int(tenant_id) or not isinstance(email, str) or not _is_int(exp):
            raise InvalidToken("Invalid token payload")
        try:
            role = Role(payload.get("role"))
        except ValueError:
            raise InvalidToken("Invalid token payload")

        return TokenClaims(
            user_id=user_id,
            tenant_id=tenant_id,
            role=role,
            email=email,
            expires_at=datetime.fromtimestamp(exp, tz=timezone.utc),
        )


def bearer_token(authorization: Optional[str]) -> str:
    """Extract the token from an `Authorization: Bearer <token>` header."""
    if not authorization:
        raise Unauthenticated()
    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise Unauthenticated()
    return token


token_service = TokenService.from_settings(settings)


def get_token_service() -> TokenService:
    return token_service

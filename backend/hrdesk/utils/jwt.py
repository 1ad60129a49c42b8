"""JWT Token Validation for platform-issued access tokens"""
import jwt
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..config.settings import settings
from ..domain.errors import AuthenticationError
from .logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class TokenIdentity:
    """Identity claims carried by an access token"""
    user_id: str
    organization_id: Optional[str] = None


class JWTValidator:
    """HS256 JWT validator for tokens issued by the platform login service"""

    def __init__(self, secret: Optional[str] = None, algorithm: Optional[str] = None):
        self._secret = secret or settings.jwt_secret
        self._algorithm = algorithm or settings.jwt_algorithm

    def validate_token(self, token: str) -> Dict[str, Any]:
        """
        Validate a JWT and return its claims

        Args:
            token: Bearer token (with or without 'Bearer ' prefix)

        Returns:
            Decoded token claims

        Raises:
            AuthenticationError: If token is missing, expired or invalid
        """
        if not token:
            raise AuthenticationError("Access denied. No token provided.")

        if token.startswith("Bearer "):
            token = token[7:]

        try:
            return jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": True},
            )
        except jwt.ExpiredSignatureError:
            logger.warning("Token expired")
            raise AuthenticationError("Token has expired. Please login again.")
        except jwt.PyJWTError as e:
            logger.warning(f"JWT validation error: {e}")
            raise AuthenticationError("Invalid token. Please login again.")

    def get_identity(self, token: str) -> TokenIdentity:
        """
        Extract the user and organization identifiers from a token

        Tokens from older clients carry ``id`` or ``_id`` instead of ``userId``.
        """
        claims = self.validate_token(token)

        user_id = claims.get("userId") or claims.get("id") or claims.get("_id")
        if not user_id:
            logger.warning(f"No user id in token claims. Available claims: {list(claims.keys())}")
            raise AuthenticationError("Invalid token format")

        organization_id = claims.get("organizationId")
        return TokenIdentity(
            user_id=str(user_id),
            organization_id=str(organization_id) if organization_id else None,
        )

    def issue_token(self, user_id: str, organization_id: Optional[str] = None, **claims: Any) -> str:
        """Sign a token with the configured secret (used by scripts and tests)"""
        payload: Dict[str, Any] = {"userId": user_id, **claims}
        if organization_id:
            payload["organizationId"] = organization_id
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)


# Global validator instance
_jwt_validator: Optional[JWTValidator] = None


def get_jwt_validator() -> JWTValidator:
    """Get global JWT validator instance"""
    global _jwt_validator
    if _jwt_validator is None:
        _jwt_validator = JWTValidator()
    return _jwt_validator


def get_token_identity(authorization: str) -> TokenIdentity:
    """
    Get token identity from authorization header

    Args:
        authorization: Authorization header value

    Returns:
        TokenIdentity
    """
    if not authorization:
        raise AuthenticationError("Access denied. No token provided.")

    validator = get_jwt_validator()
    return validator.get_identity(authorization)

from functools import lru_cache

from fastapi.security import HTTPBearer

from infrastructure.settings import get_auth_settings
from shared_kernel.auth import JWTValidator
from shared_kernel.auth.observability import DefaultJWTValidatorProbe

# auto_error=False so missing credentials surface as 401 from our own handler
bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache
def get_jwt_validator() -> JWTValidator:
    """Get cached JWT validator.

    Returns:
        JWTValidator instance configured from auth settings.
    """
    settings = get_auth_settings()
    return JWTValidator(
        secret=settings.jwt_secret.get_secret_value(),
        probe=DefaultJWTValidatorProbe(),
        algorithm=settings.jwt_algorithm,
        audience=settings.audience,
        user_id_claim=settings.user_id_claim,
        username_claim=settings.username_claim,
        email_claim=settings.email_claim,
        group_id_claim=settings.group_id_claim,
    )

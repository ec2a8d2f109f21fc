"""Session token issuance for local development and tests.

Production tokens come from the portal's identity provider; they only need
to carry the same claims (``sub``, ``email``, ``type``).
"""

from datetime import datetime, timedelta, timezone

from memberportal.config import settings


def create_access_token(user_id: str, email: str = "", expires_minutes: int = 60) -> str:
    from jose import jwt

    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "email": email,
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "iat": now,
        "exp": now + timedelta(minutes=expires_minutes),
        "type": "access",
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)

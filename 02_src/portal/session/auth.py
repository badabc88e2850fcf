"""Session decoding and role-based permissions.

Tokens are issued and enforced by the records API. The portal only reads
the claims to know who is signed in and which views to offer; it does not
verify signatures.
"""

from jose import JWTError, jwt

from ..errors import InvalidSessionError, PermissionDeniedError
from ..logging_config import get_logger, session_context
from ..models import Role, Session, User

logger = get_logger(__name__)

# Older tokens carry "public" for read-only users
_ROLE_ALIASES = {"public": Role.VIEWER}

_STATUS_ROLES = frozenset({Role.ADMIN, Role.INVESTIGATOR})
_EDIT_ROLES = frozenset({Role.ADMIN, Role.INVESTIGATOR})
_ANALYTICS_ROLES = frozenset({Role.ADMIN, Role.INVESTIGATOR})
_ACTIVITY_ROLES = frozenset({Role.ADMIN})

DEV_SIGNING_KEY = "absconders-portal-dev"


def _parse_role(value) -> Role:
    if isinstance(value, str):
        key = value.strip().lower()
        if key in _ROLE_ALIASES:
            return _ROLE_ALIASES[key]
        try:
            return Role(key)
        except ValueError:
            pass
    raise InvalidSessionError(f"Unsupported role claim: {value!r}")


def decode_session(token: str | None) -> Session:
    """Read the user out of a bearer token.

    Raises:
        InvalidSessionError: If the token is missing, not a JWT, or lacks
            the id/name/role claims.
    """
    if not token or not token.strip():
        raise InvalidSessionError("Missing token")

    try:
        claims = jwt.get_unverified_claims(token.strip())
    except JWTError as e:
        raise InvalidSessionError(f"Undecodable token: {e}") from e

    user_id = claims.get("id") or claims.get("sub")
    name = claims.get("name")
    if not user_id or not name:
        raise InvalidSessionError("Token lacks id or name claim")

    user = User(
        id=str(user_id),
        name=str(name),
        email=str(claims.get("email", "")),
        role=_parse_role(claims.get("role")),
        district=claims.get("district"),
        state=claims.get("state"),
        police_station=claims.get("policeStation"),
    )
    return Session(token=token.strip(), user=user)


def session_from_header(authorization: str | None) -> Session:
    """Decode a session from an ``Authorization: Bearer ...`` header value."""
    if not authorization:
        raise InvalidSessionError("Missing Authorization header")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise InvalidSessionError("Authorization header must use the Bearer scheme")
    return decode_session(token)


def issue_dev_token(
    user_id: str = "123",
    name: str = "John Doe",
    email: str = "john@example.com",
    role: Role | str = Role.VIEWER,
    **extra_claims,
) -> str:
    """Fabricate a token for local development logins."""
    claims = {
        "id": user_id,
        "name": name,
        "email": email,
        "role": Role(role).value,
    }
    claims.update({k: v for k, v in extra_claims.items() if v is not None})
    return jwt.encode(claims, DEV_SIGNING_KEY, algorithm="HS256")


def can_view_case(session: Session) -> bool:
    return True


def can_change_status(session: Session) -> bool:
    return session.user.role in _STATUS_ROLES


def can_edit_case(session: Session) -> bool:
    return session.user.role in _EDIT_ROLES


def can_view_analytics(session: Session) -> bool:
    return session.user.role in _ANALYTICS_ROLES


def can_view_activity(session: Session) -> bool:
    """Recorded portal activity names officers and queries; admins only."""
    return session.user.role in _ACTIVITY_ROLES


def permissions(session: Session) -> dict[str, bool]:
    """Permission flags the renderer uses to show or hide controls."""
    return {
        "view_case": can_view_case(session),
        "change_status": can_change_status(session),
        "edit_case": can_edit_case(session),
        "view_analytics": can_view_analytics(session),
        "view_activity": can_view_activity(session),
    }


def require(allowed: bool, action: str, session: Session) -> None:
    """Raise PermissionDeniedError unless ``allowed``."""
    if not allowed:
        logger.warning(
            "Denied %s for user %s (role %s)",
            action,
            session.user.id,
            session.user.role.value,
            extra=session_context(session),
        )
        raise PermissionDeniedError(
            f"Role {session.user.role.value!r} may not {action}"
        )

"""Tests for session decoding and permissions."""

import pytest
from jose import jwt

from portal.errors import InvalidSessionError, PermissionDeniedError
from portal.models import Role
from portal.session import (
    can_change_status,
    can_edit_case,
    can_view_activity,
    can_view_analytics,
    can_view_case,
    decode_session,
    issue_dev_token,
    permissions,
    require,
    session_from_header,
)


class TestDecodeSession:
    """Tests for decode_session."""

    def test_dev_token_defaults(self):
        session = decode_session(issue_dev_token())

        assert session.user.id == "123"
        assert session.user.name == "John Doe"
        assert session.user.email == "john@example.com"
        assert session.user.role is Role.VIEWER

    def test_extra_claims(self):
        token = issue_dev_token(
            role="investigator",
            district="Pune",
            state="Maharashtra",
            policeStation="Shivajinagar",
        )

        user = decode_session(token).user

        assert user.role is Role.INVESTIGATOR
        assert user.district == "Pune"
        assert user.state == "Maharashtra"
        assert user.police_station == "Shivajinagar"

    def test_sub_claim_as_id(self):
        token = jwt.encode({"sub": "u7", "name": "A", "role": "admin"}, "k", algorithm="HS256")

        assert decode_session(token).user.id == "u7"

    def test_public_role_is_viewer(self):
        token = jwt.encode({"id": "u1", "name": "A", "role": "public"}, "k", algorithm="HS256")

        assert decode_session(token).user.role is Role.VIEWER

    def test_signature_not_checked(self):
        """Test that tokens signed with any key are readable."""
        token = jwt.encode({"id": "u1", "name": "A", "role": "admin"}, "other", algorithm="HS256")

        assert decode_session(token).user.role is Role.ADMIN

    @pytest.mark.parametrize("token", [None, "", "   ", "not-a-jwt"])
    def test_unusable_token(self, token):
        with pytest.raises(InvalidSessionError):
            decode_session(token)

    def test_missing_name(self):
        token = jwt.encode({"id": "u1", "role": "admin"}, "k", algorithm="HS256")

        with pytest.raises(InvalidSessionError):
            decode_session(token)

    def test_unknown_role(self):
        token = jwt.encode({"id": "u1", "name": "A", "role": "superuser"}, "k", algorithm="HS256")

        with pytest.raises(InvalidSessionError):
            decode_session(token)

    def test_authorization_header_roundtrip(self):
        session = decode_session(issue_dev_token())

        assert session.authorization_header == {"Authorization": f"Bearer {session.token}"}


class TestSessionFromHeader:
    """Tests for session_from_header."""

    def test_bearer(self):
        token = issue_dev_token(role="admin")

        assert session_from_header(f"Bearer {token}").user.role is Role.ADMIN

    @pytest.mark.parametrize("header", [None, "", "Basic abc", "Bearer"])
    def test_rejected_headers(self, header):
        with pytest.raises(InvalidSessionError):
            session_from_header(header)


class TestPermissions:
    """Tests for role permissions."""

    def test_admin(self, admin_session):
        assert permissions(admin_session) == {
            "view_case": True,
            "change_status": True,
            "edit_case": True,
            "view_analytics": True,
            "view_activity": True,
        }

    def test_investigator(self, investigator_session):
        assert can_change_status(investigator_session)
        assert can_edit_case(investigator_session)
        assert can_view_analytics(investigator_session)
        assert not can_view_activity(investigator_session)

    def test_viewer_is_read_only(self, viewer_session):
        assert can_view_case(viewer_session)
        assert not can_change_status(viewer_session)
        assert not can_edit_case(viewer_session)
        assert not can_view_analytics(viewer_session)
        assert not can_view_activity(viewer_session)

    def test_require_denies(self, viewer_session, caplog):
        with pytest.raises(PermissionDeniedError, match="viewer"):
            require(False, "change case status", viewer_session)

        assert "Denied change case status" in caplog.text

    def test_require_allows(self, admin_session):
        require(True, "change case status", admin_session)

from unittest.mock import patch

import pytest

from pawwalk.core.auth import AuthContext, get_auth_context, require_admin, require_walker
from pawwalk.domains.walk.exception import WalkException
from pawwalk.models import UserRole


class TestGetAuthContext:
    def test_missing_header(self, db):
        with pytest.raises(WalkException) as exc:
            get_auth_context(authorization=None, db=db)
        assert exc.value.code == "AUTH_401_1"

    @pytest.mark.parametrize("header", ["Token abc", "Bearer", "Bearer a b", "bearer abc"])
    def test_malformed_header(self, db, header):
        with pytest.raises(WalkException) as exc:
            get_auth_context(authorization=header, db=db)
        assert exc.value.code == "AUTH_401_2"

    def test_invalid_token(self, db):
        with patch("pawwalk.core.auth.verify_firebase_token", return_value=None):
            with pytest.raises(WalkException) as exc:
                get_auth_context(authorization="Bearer expired", db=db)
        assert exc.value.code == "AUTH_401_2"

    def test_unknown_user(self, db):
        with patch("pawwalk.core.auth.verify_firebase_token", return_value={"uid": "nobody"}):
            with pytest.raises(WalkException) as exc:
                get_auth_context(authorization="Bearer ok", db=db)
        assert exc.value.code == "AUTH_404_1"

    def test_resolves_user(self, db, walker):
        with patch("pawwalk.core.auth.verify_firebase_token", return_value={"uid": walker.firebase_uid}):
            context = get_auth_context(authorization="Bearer ok", db=db)

        assert context.user_id == walker.user_id
        assert context.role == UserRole.WALKER
        assert context.is_walker is True


class TestRequireWalker:
    def test_rejects_owner(self):
        with pytest.raises(WalkException) as exc:
            require_walker(AuthContext(user_id=1, role=UserRole.OWNER, firebase_uid="x"))
        assert exc.value.code == "AUTH_403_1"
        assert exc.value.status == 403

    def test_accepts_walker(self):
        context = AuthContext(user_id=1, role=UserRole.WALKER, firebase_uid="x")
        assert require_walker(context) is context


class TestRequireAdmin:
    @pytest.mark.parametrize("role", [UserRole.OWNER, UserRole.WALKER])
    def test_rejects_non_admin(self, role):
        with pytest.raises(WalkException) as exc:
            require_admin(AuthContext(user_id=1, role=role, firebase_uid="x"))
        assert exc.value.code == "AUTH_403_2"
        assert exc.value.status == 403

    def test_accepts_admin(self):
        context = AuthContext(user_id=1, role=UserRole.ADMIN, firebase_uid="x")
        assert context.is_admin is True
        assert require_admin(context) is context

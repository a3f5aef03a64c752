import pytest
from unittest.mock import MagicMock
from fastapi import HTTPException
from jose import jwt
from sqlalchemy.exc import IntegrityError

from config import settings
from models.dtos import SignupRequest
from models.models import Member
from repositories.member_repository import MemberRepository
from services.auth_service import AuthService, pwd_context

# -------------------------------------------------------------------
# 테스트 픽스처(Fixture)
# -------------------------------------------------------------------

@pytest.fixture
def mock_repo() -> MagicMock:
    """DB 대신 사용하는 가짜 MemberRepository"""
    return MagicMock(spec=MemberRepository)


@pytest.fixture
def auth_service(mock_repo: MagicMock) -> AuthService:
    return AuthService(repo=mock_repo)


@pytest.fixture
def stored_member() -> Member:
    return Member(
        member_id=7,
        email="hong@example.com",
        name="홍길동",
        password_hash=pwd_context.hash("correct-pw"),
    )

# -------------------------------------------------------------------
# 회원가입
# -------------------------------------------------------------------

def test_register_hashes_password_and_creates_member(auth_service, mock_repo):
    mock_repo.get_by_email.return_value = None
    mock_repo.create_member.side_effect = lambda email, name, password_hash: Member(
        member_id=1, email=email, name=name, password_hash=password_hash
    )

    member = auth_service.register(
        SignupRequest(email="new@example.com", password="secret123", name="새회원")
    )

    assert member.member_id == 1
    email, name, password_hash = mock_repo.create_member.call_args.args
    assert email == "new@example.com"
    assert name == "새회원"
    # 평문이 그대로 저장되면 안 됨
    assert password_hash != "secret123"
    assert pwd_context.verify("secret123", password_hash)


def test_register_duplicate_email_is_conflict(auth_service, mock_repo, stored_member):
    mock_repo.get_by_email.return_value = stored_member

    with pytest.raises(HTTPException) as exc_info:
        auth_service.register(
            SignupRequest(email="hong@example.com", password="pw", name="중복")
        )

    assert exc_info.value.status_code == 409
    mock_repo.create_member.assert_not_called()


def test_register_integrity_error_rolls_back(auth_service, mock_repo):
    mock_repo.get_by_email.return_value = None
    mock_repo.create_member.side_effect = IntegrityError("insert", {}, Exception("dup"))

    with pytest.raises(HTTPException) as exc_info:
        auth_service.register(
            SignupRequest(email="race@example.com", password="pw", name="경합")
        )

    assert exc_info.value.status_code == 409
    mock_repo.rollback.assert_called_once()

# -------------------------------------------------------------------
# 로그인 검증
# -------------------------------------------------------------------

def test_validate_member_success(auth_service, mock_repo, stored_member):
    mock_repo.get_by_email.return_value = stored_member

    assert auth_service.validate_member("hong@example.com", "correct-pw") is stored_member


def test_validate_member_wrong_password(auth_service, mock_repo, stored_member):
    mock_repo.get_by_email.return_value = stored_member

    assert auth_service.validate_member("hong@example.com", "wrong-pw") is None


def test_validate_member_unknown_email(auth_service, mock_repo):
    mock_repo.get_by_email.return_value = None

    assert auth_service.validate_member("nobody@example.com", "pw") is None

# -------------------------------------------------------------------
# 토큰 발급/검증
# -------------------------------------------------------------------

def test_access_token_carries_identity(auth_service, stored_member):
    token = auth_service.get_jwt_access_token(stored_member)

    payload = auth_service.decode_access_token(token)
    assert payload["sub"] == "7"
    assert payload["email"] == "hong@example.com"
    assert payload["name"] == "홍길동"
    assert payload["type"] == "access"


def test_refresh_token_embeds_rotation_key(auth_service, stored_member):
    refresh_token, key = auth_service.get_jwt_refresh_token(stored_member)

    payload = auth_service.decode_refresh_token(refresh_token)
    assert payload["sub"] == "7"
    assert payload["key"] == key

    # 발급할 때마다 새 키
    _, other_key = auth_service.get_jwt_refresh_token(stored_member)
    assert other_key != key


def test_access_token_is_not_accepted_as_refresh_token(auth_service, stored_member):
    access_token = auth_service.get_jwt_access_token(stored_member)

    with pytest.raises(ValueError):
        auth_service.decode_refresh_token(access_token)


def test_refresh_token_is_not_accepted_as_access_token(auth_service, stored_member):
    refresh_token, _ = auth_service.get_jwt_refresh_token(stored_member)

    with pytest.raises(ValueError):
        auth_service.decode_access_token(refresh_token)


def test_expired_access_token_is_rejected(auth_service):
    expired = jwt.encode(
        {"sub": "7", "type": "access", "exp": 1},
        settings.JWT_ACCESS_SECRET,
        algorithm=settings.JWT_ALGORITHM,
    )

    with pytest.raises(ValueError):
        auth_service.decode_access_token(expired)


def test_garbage_token_is_rejected(auth_service):
    with pytest.raises(ValueError):
        auth_service.decode_access_token("not-a-jwt")

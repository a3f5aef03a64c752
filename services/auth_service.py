# services/auth_service.py
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from fastapi import Depends, HTTPException, status
from jose import jwt, JWTError
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError

from config import settings
from models.dtos import SignupRequest
from models.models import Member
from repositories.member_repository import MemberRepository

logger = logging.getLogger(__name__)

# 비밀번호 해싱 설정 (Argon2 사용)
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class AuthService:
    def __init__(self, repo: MemberRepository = Depends(MemberRepository)):
        self.repo = repo

    # ===================================================================
    # 회원가입 / 로그인 검증
    # ===================================================================
    def register(self, req: SignupRequest) -> Member:
        email = str(req.email)

        # 1. 이메일 중복 체크
        if self.repo.get_by_email(email):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="이미 가입된 이메일입니다.",
            )

        # 2. 비밀번호 해싱 후 저장
        hashed_pw = pwd_context.hash(req.password)
        try:
            member = self.repo.create_member(email, req.name, hashed_pw)
        except IntegrityError:
            # 중복 체크와 저장 사이에 같은 이메일이 먼저 들어온 경우
            self.repo.rollback()
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="이미 가입된 이메일입니다.",
            )

        logger.info("member registered: member_id=%s", member.member_id)
        return member

    def validate_member(self, email: str, password: str) -> Optional[Member]:
        """
        이메일/비밀번호가 맞으면 회원을, 아니면 None 을 반환한다.
        어느 쪽이 틀렸는지는 호출자에게 알려주지 않음
        """
        member = self.repo.get_by_email(email)
        if not member:
            return None

        if not pwd_context.verify(password, member.password_hash):
            return None

        return member

    # ===================================================================
    # 토큰 발급
    # ===================================================================
    def get_jwt_access_token(self, member) -> str:
        now = datetime.now(timezone.utc)
        exp = now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

        payload = {
            "sub": str(member.member_id),
            "email": member.email,
            "name": member.name,
            "type": ACCESS_TOKEN_TYPE,
            "iat": int(now.timestamp()),
            "exp": int(exp.timestamp()),
        }
        return jwt.encode(payload, settings.JWT_ACCESS_SECRET, algorithm=settings.JWT_ALGORITHM)

    def get_jwt_refresh_token(self, member) -> Tuple[str, str]:
        """
        (refresh_token, key) 를 반환한다.
        key 는 회원 쪽에 저장해 두었다가 refresh 요청 때 대조하는 회전 키
        """
        key = secrets.token_urlsafe(32)
        now = datetime.now(timezone.utc)
        exp = now + timedelta(hours=settings.REFRESH_TOKEN_EXPIRE_HOURS)

        payload = {
            "sub": str(member.member_id),
            "key": key,
            "type": REFRESH_TOKEN_TYPE,
            "iat": int(now.timestamp()),
            "exp": int(exp.timestamp()),
        }
        refresh_token = jwt.encode(
            payload, settings.JWT_REFRESH_SECRET, algorithm=settings.JWT_ALGORITHM
        )
        return refresh_token, key

    # ===================================================================
    # 토큰 검증
    # ===================================================================
    def decode_access_token(self, token: str) -> dict:
        return _decode(token, settings.JWT_ACCESS_SECRET, ACCESS_TOKEN_TYPE)

    def decode_refresh_token(self, token: str) -> dict:
        return _decode(token, settings.JWT_REFRESH_SECRET, REFRESH_TOKEN_TYPE)


def _decode(token: str, secret: str, token_type: str) -> dict:
    try:
        payload = jwt.decode(token, secret, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as e:
        raise ValueError(f"Invalid token: {e}")

    if payload.get("type") != token_type or payload.get("sub") is None:
        raise ValueError(f"Invalid token: expected {token_type} token")

    return payload

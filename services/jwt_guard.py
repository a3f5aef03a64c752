# services/jwt_guard.py
"""
라우터 핸들러 앞에서 실행되는 인증 의존성(Guard).

- jwt_auth_guard    : accessToken 쿠키 검증
- jwt_refresh_guard : refreshToken 쿠키 검증 + DB에 저장된 회전 키 대조

둘 다 통과하면 AuthenticatedMember 를 반환하고, 실패하면 401 을 던진다.
"""
import logging
from typing import Optional

from fastapi import Cookie, Depends, HTTPException, status

from models.dtos import AuthenticatedMember
from services.auth_service import AuthService
from services.member_service import MemberService

logger = logging.getLogger(__name__)

ACCESS_COOKIE = "accessToken"
REFRESH_COOKIE = "refreshToken"


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


def jwt_auth_guard(
    access_token: Optional[str] = Cookie(default=None, alias=ACCESS_COOKIE),
    auth_service: AuthService = Depends(AuthService),
) -> AuthenticatedMember:
    if not access_token:
        raise _unauthorized("Authentication required")

    try:
        payload = auth_service.decode_access_token(access_token)
    except ValueError as e:
        logger.info("access token rejected: %s", e)
        raise _unauthorized("Could not validate credentials")

    return AuthenticatedMember(
        member_id=int(payload["sub"]),
        email=payload.get("email", ""),
        name=payload.get("name", ""),
    )


def jwt_refresh_guard(
    refresh_token: Optional[str] = Cookie(default=None, alias=REFRESH_COOKIE),
    auth_service: AuthService = Depends(AuthService),
    member_service: MemberService = Depends(MemberService),
) -> AuthenticatedMember:
    if not refresh_token:
        raise _unauthorized("Authentication required")

    try:
        payload = auth_service.decode_refresh_token(refresh_token)
    except ValueError as e:
        logger.info("refresh token rejected: %s", e)
        raise _unauthorized("Could not validate credentials")

    member = member_service.get_member_if_refresh_key_matches(
        payload.get("key", ""), payload["sub"]
    )
    if not member:
        # 로그아웃했거나 다른 로그인으로 키가 교체된 토큰
        logger.info("refresh token revoked: member_id=%s", payload["sub"])
        raise _unauthorized("Refresh token is no longer valid")

    return AuthenticatedMember.model_validate(member)

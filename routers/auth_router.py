# routers/auth_router.py
import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from config import settings
from models.dtos import (
    AuthenticatedMember,
    CheckEmailRequest,
    LoginRequest,
    MemberAuthResponse,
    SignupRequest,
)
from services.auth_service import AuthService
from services.jwt_guard import ACCESS_COOKIE, REFRESH_COOKIE, jwt_auth_guard, jwt_refresh_guard
from services.member_service import MemberService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/v1/member",
    tags=["Authentication"]
)


def _set_auth_cookie(response: Response, key: str, value: str, max_age: int):
    response.set_cookie(
        key=key,
        value=value,
        max_age=max_age,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE,
    )


def _issue_tokens(response: Response, member, auth_service: AuthService, member_service: MemberService):
    """access/refresh 토큰 발급 -> 회전 키 저장 -> 쿠키 세팅"""
    access_token = auth_service.get_jwt_access_token(member)
    refresh_token, key = auth_service.get_jwt_refresh_token(member)

    member_service.set_current_refresh_token(key, member.member_id)

    _set_auth_cookie(response, ACCESS_COOKIE, access_token, settings.AUTH_COOKIE_MAX_AGE)
    _set_auth_cookie(response, REFRESH_COOKIE, refresh_token, settings.AUTH_COOKIE_MAX_AGE)


# ===================================================================
# 이메일 중복 확인
# ===================================================================
@router.post("/check-email", status_code=status.HTTP_200_OK, summary="이메일 중복 확인")
def check_email(
    request: CheckEmailRequest,
    member_service: MemberService = Depends(MemberService)
):
    member = member_service.find_by_email(str(request.inputEmail))
    if member:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="email was existed already"
        )

    return Response(status_code=status.HTTP_200_OK)


# ===================================================================
# 회원가입
# ===================================================================
@router.post(
    "/signup",
    response_model=MemberAuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="회원가입"
)
def signup(
    request: SignupRequest,
    response: Response,
    auth_service: AuthService = Depends(AuthService),
    member_service: MemberService = Depends(MemberService)
):
    member = auth_service.register(request)
    _issue_tokens(response, member, auth_service, member_service)

    return MemberAuthResponse(member_id=member.member_id, name=member.name)


# ===================================================================
# 로그인
# ===================================================================
@router.post(
    "/login",
    response_model=MemberAuthResponse,
    status_code=status.HTTP_200_OK,
    summary="로그인"
)
def login(
    request: LoginRequest,
    response: Response,
    auth_service: AuthService = Depends(AuthService),
    member_service: MemberService = Depends(MemberService)
):
    member = auth_service.validate_member(str(request.inputEmail), request.inputPw)
    if not member:
        logger.info("login failed: invalid credentials")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="이메일 또는 비밀번호가 올바르지 않습니다."
        )

    _issue_tokens(response, member, auth_service, member_service)
    logger.info("member logged in: member_id=%s", member.member_id)

    return MemberAuthResponse(member_id=member.member_id, name=member.name)


# ===================================================================
# 로그아웃 (accessToken 필요)
# ===================================================================
@router.get("/logout", status_code=status.HTTP_202_ACCEPTED, summary="로그아웃")
def logout(
    current: AuthenticatedMember = Depends(jwt_auth_guard),
    member_service: MemberService = Depends(MemberService)
):
    member_service.remove_refresh_token(current.member_id)

    response = Response(status_code=status.HTTP_202_ACCEPTED)
    # max_age=0 으로 덮어써서 브라우저 쿠키를 즉시 만료
    _set_auth_cookie(response, ACCESS_COOKIE, "", 0)
    _set_auth_cookie(response, REFRESH_COOKIE, "", 0)

    logger.info("member logged out: member_id=%s", current.member_id)
    return response


# ===================================================================
# accessToken 재발급 (refreshToken 필요)
# ===================================================================
@router.get("/refresh", status_code=status.HTTP_202_ACCEPTED, summary="액세스 토큰 재발급")
def refresh(
    current: AuthenticatedMember = Depends(jwt_refresh_guard),
    auth_service: AuthService = Depends(AuthService)
):
    access_token = auth_service.get_jwt_access_token(current)

    response = Response(status_code=status.HTTP_202_ACCEPTED)
    _set_auth_cookie(response, ACCESS_COOKIE, access_token, settings.AUTH_COOKIE_MAX_AGE)
    return response


# ===================================================================
# 세션(accessToken) 유효성 확인
# ===================================================================
@router.get(
    "/check-jwt",
    status_code=status.HTTP_202_ACCEPTED,
    dependencies=[Depends(jwt_auth_guard)],
    summary="로그인 상태 확인"
)
def check_jwt():
    return True

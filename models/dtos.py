# models/dtos.py
from pydantic import BaseModel, ConfigDict, EmailStr, Field

# ===================================================================
# 1. 요청 DTO (Frontend -> API)
# ===================================================================
class CheckEmailRequest(BaseModel):
    """[POST] /v1/member/check-email"""
    inputEmail: EmailStr


class SignupRequest(BaseModel):
    """[POST] /v1/member/signup"""
    email: EmailStr
    password: str = Field(min_length=1)
    name: str = Field(min_length=1, max_length=100)


class LoginRequest(BaseModel):
    """[POST] /v1/member/login"""
    inputEmail: EmailStr
    inputPw: str


# ===================================================================
# 2. 응답 DTO (API -> Frontend)
# ===================================================================
class MemberAuthResponse(BaseModel):
    """회원가입/로그인 성공 시 응답"""
    member_id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


# ===================================================================
# 3. 인증 결과 (Guard -> Router)
# ===================================================================
class AuthenticatedMember(BaseModel):
    """
    토큰 검증을 통과한 회원 정보.
    Guard 의존성이 반환하고, 라우터 핸들러가 주입받아 사용한다.
    """
    member_id: int
    email: str
    name: str

    model_config = ConfigDict(from_attributes=True)

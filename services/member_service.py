# services/member_service.py
import logging
from typing import Optional, Union

from fastapi import Depends
from passlib.context import CryptContext

from models.models import Member
from repositories.member_repository import MemberRepository

logger = logging.getLogger(__name__)

# 리프레시 키도 비밀번호처럼 해시해서 저장
key_context = CryptContext(schemes=["argon2"], deprecated="auto")


class MemberService:
    def __init__(self, repo: MemberRepository = Depends(MemberRepository)):
        self.repo = repo

    def find_by_email(self, email: str) -> Optional[Member]:
        return self.repo.get_by_email(email)

    def find_by_id(self, member_id: Union[int, str]) -> Optional[Member]:
        return self.repo.get_by_id(int(member_id))

    def set_current_refresh_token(self, key: str, member_id: Union[int, str]) -> None:
        """
        새로 발급한 리프레시 토큰의 회전 키를 회원에게 저장한다.
        이전 키는 덮어써지므로 예전 리프레시 토큰은 더 이상 통과하지 못함
        """
        hashed_key = key_context.hash(key)
        self.repo.update_refresh_key(int(member_id), hashed_key)

    def remove_refresh_token(self, member_id: Union[int, str]) -> None:
        """로그아웃: 저장된 회전 키 삭제"""
        if not self.repo.update_refresh_key(int(member_id), None):
            logger.warning("remove_refresh_token: member %s not found", member_id)

    def get_member_if_refresh_key_matches(
        self, key: str, member_id: Union[int, str]
    ) -> Optional[Member]:
        """
        토큰에 담긴 키가 DB에 저장된 키와 같을 때만 회원을 돌려준다.
        로그아웃했거나 다른 곳에서 재로그인해서 키가 바뀌었으면 None
        """
        member = self.repo.get_by_id(int(member_id))
        if not member or not member.current_refresh_key:
            return None

        if not key_context.verify(key, member.current_refresh_key):
            return None

        return member

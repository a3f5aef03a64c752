# /repositories/member_repository.py
from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from database import get_db
from models.models import Member


class MemberRepository:
    def __init__(self, db: Session = Depends(get_db)):
        self.db = db

    def get_by_email(self, email: str) -> Optional[Member]:
        """이메일로 회원 찾기"""
        return self.db.query(Member).filter(Member.email == email).first()

    def get_by_id(self, member_id: int) -> Optional[Member]:
        return self.db.query(Member).filter(Member.member_id == member_id).first()

    def create_member(self, email: str, name: str, password_hash: str) -> Member:
        """회원 생성 (비번은 이미 해시된 상태로 받아옴)"""
        new_member = Member(
            email=email,
            name=name,
            password_hash=password_hash,
        )
        self.db.add(new_member)
        self.db.commit()
        self.db.refresh(new_member)
        return new_member

    def update_refresh_key(self, member_id: int, hashed_key: Optional[str]) -> bool:
        """
        저장된 리프레시 키를 교체한다. (None 이면 삭제)
        회원이 없으면 False
        """
        member = self.get_by_id(member_id)
        if not member:
            return False

        member.current_refresh_key = hashed_key
        self.db.commit()
        return True

    def rollback(self):
        self.db.rollback()

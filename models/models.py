#models/models.py
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from database import Base

# =========================================================
# 회원 (members)
# =========================================================
class Member(Base):
    __tablename__ = "members"

    member_id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(100), nullable=False)
    password_hash = Column(String(255), nullable=False)

    # 리프레시 토큰의 회전 키 (해시 상태로 저장, 로그아웃 시 NULL)
    current_refresh_key = Column(String(255), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

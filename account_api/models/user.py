from sqlalchemy import Column, Integer, String, Boolean, DateTime

from account_api.core.db import Base, utcnow


class User(Base):
    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)

    # logo: 공개 URL (OAuth 프로필 사진일 수도 있음), logo_file: 업로드 디렉터리 안의 파일명
    logo = Column(String(1024), nullable=True)
    logo_file = Column(String(255), nullable=True)
    is_email_verified = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self):
        return f"<User id={self.id} email={self.email}>"

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from account_api.core.db import Base, utcnow
from account_api.models.user import User


class OAuthProfile(Base):
    __tablename__ = "oauth_profiles"
    __table_args__ = (
        UniqueConstraint("provider", "profile_id", name="uq_oauth_profiles_provider_profile_id"),
    )

    id = Column(Integer, primary_key=True)
    provider = Column(String(50), nullable=False)
    profile_id = Column(String(255), nullable=False)

    email = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=False, default="")
    last_name = Column(String(100), nullable=False, default="")
    profile_image = Column(String(1024), nullable=True)

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    user = relationship(User)

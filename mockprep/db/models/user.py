from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from mockprep.db.base import Base, generate_id


class User(Base):
    """Account mirrored 1:1 from an identity-provider subject."""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_id)
    external_id = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, index=True, nullable=False, default="")
    name = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    interviews = relationship("Interview", back_populates="user")

    def __repr__(self):
        return f"<User(id={self.id}, external_id='{self.external_id}')>"

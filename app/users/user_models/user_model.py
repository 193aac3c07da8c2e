# app/users/user_models/user_model.py
from sqlalchemy import Column, String, Boolean, DateTime, CheckConstraint
from sqlalchemy.orm import relationship
from app.database.connection import Base
from app.helpers.ids import new_id
from app.helpers.time import utcnow
from app.shared.enums import Role, sql_values


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    is_active = Column(Boolean, default=True)
    role = Column(String, nullable=False)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    tokens = relationship("Token", back_populates="user")

    # Add check constraints for validation at database level
    __table_args__ = (
        CheckConstraint(f"role IN ({sql_values(Role)})", name="check_role_values"),
    )

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"

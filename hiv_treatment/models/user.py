from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from ..core.database import Base


class Role(Base):
    __tablename__ = "roles"

    role_id = Column(String(10), primary_key=True)
    role_name = Column(String(50), nullable=False)

    users = relationship("User", back_populates="role")

    def __repr__(self):
        return f"<Role(role_id='{self.role_id}', name='{self.role_name}')>"


class User(Base):
    __tablename__ = "users"

    user_id = Column(String(50), primary_key=True)
    fullname = Column(String(150), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    address = Column(String(255), nullable=True)
    role_id = Column(String(10), ForeignKey("roles.role_id"), nullable=False)

    # Timestamps
    created_at = Column(DateTime, server_default=func.now())
    last_login = Column(DateTime, nullable=True)

    # Relationships
    role = relationship("Role", back_populates="users")
    patient = relationship("Patient", back_populates="user", uselist=False)
    doctor = relationship("Doctor", back_populates="user", uselist=False)

    def __repr__(self):
        return f"<User(user_id='{self.user_id}', email='{self.email}', role='{self.role_id}')>"

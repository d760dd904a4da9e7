import enum
import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, Enum, String

from booking_app.core.database import Base


class UserRole(str, enum.Enum):
    USER = "USER"
    ADMIN = "ADMIN"
    BARBER = "BARBER"


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    phone_number = Column(String, nullable=True)
    image = Column(String, nullable=True)

    role = Column(Enum(UserRole, name="user_role"), nullable=False, default=UserRole.USER)

    created_at = Column(DateTime, default=datetime.utcnow)

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    Integer,
    String,
    Text,
)

from .database import Base
from .shared.validators import generate_object_id, utcnow

USER_ROLES = ("admin", "provider", "client")
AUTH_PROVIDERS = ("google", "credentials")
APPOINTMENT_STATUSES = ("scheduled", "confirmed", "completed", "cancelled")


class User(Base):
    __tablename__ = "users"

    id = Column(String(24), primary_key=True, default=generate_object_id)
    auth_provider = Column(String(20), nullable=False)  # google, credentials
    auth_id = Column(String(255), nullable=True, index=True)  # External subject id (google)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=True)  # bcrypt, credentials users only
    name = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    role = Column(String(20), nullable=False, default="client")  # admin, provider, client
    avatar_url = Column(String(500), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)


class Provider(Base):
    __tablename__ = "providers"

    id = Column(String(24), primary_key=True, default=generate_object_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    phone = Column(String(50), nullable=True)
    specialties = Column(JSON, default=list, nullable=False)
    availability = Column(JSON, nullable=True)  # Opaque, interpreted by callers
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)


class Service(Base):
    __tablename__ = "services"

    id = Column(String(24), primary_key=True, default=generate_object_id)
    name = Column(String(255), nullable=False)
    duration_min = Column(Integer, nullable=False)  # Drives appointment end times
    price = Column(Float, nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(100), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(String(24), primary_key=True, default=generate_object_id)
    # Soft references: no FK constraints, deleting a user/provider/service leaves these as-is
    client_id = Column(String(24), index=True, nullable=False)
    provider_id = Column(String(24), index=True, nullable=False)
    service_id = Column(String(24), index=True, nullable=False)
    start_at = Column(DateTime, nullable=False)
    end_at = Column(DateTime, nullable=False)
    status = Column(String(20), default="scheduled", nullable=False)
    notes = Column(Text, nullable=True)
    created_by = Column(String(24), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

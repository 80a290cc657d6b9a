"""
Organization, staff and appointment tables read by the daily agenda job
"""

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


class Organization(Base):
    __tablename__ = "organizations"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    members = relationship("Profile", back_populates="organization")
    agenda_configs = relationship("AgendaNotificationConfig", back_populates="organization")


class Profile(Base):
    """Staff member that appointments are assigned to"""

    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True, index=True)
    organization_id = Column(Integer, ForeignKey("organizations.id"), nullable=False, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=True)

    organization = relationship("Organization", back_populates="members")


class Contact(Base):
    __tablename__ = "contacts"

    id = Column(Integer, primary_key=True, index=True)
    organization_id = Column(Integer, ForeignKey("organizations.id"), nullable=False, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=True)
    phone = Column(String(30), nullable=True)
    country_code = Column(String(6), nullable=True)


class Service(Base):
    __tablename__ = "services"

    id = Column(Integer, primary_key=True, index=True)
    organization_id = Column(Integer, ForeignKey("organizations.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    duration_minutes = Column(Integer, nullable=True)


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)
    organization_id = Column(Integer, ForeignKey("organizations.id"), nullable=False, index=True)
    member_id = Column(Integer, ForeignKey("profiles.id"), nullable=True, index=True)
    contact_id = Column(Integer, ForeignKey("contacts.id"), nullable=False)
    service_id = Column(Integer, ForeignKey("services.id"), nullable=True)

    appointment_date = Column(Date, nullable=False, index=True)
    start_time = Column(String(10), nullable=False)  # HH:MM or HH:MM:SS
    end_time = Column(String(10), nullable=True)

    # Status workflow: scheduled → confirmed → in_progress → completed
    # cancelled and no_show are terminal
    status = Column(String(50), default="scheduled", nullable=False, index=True)

    member = relationship("Profile")
    contact = relationship("Contact")
    service = relationship("Service")


class AgendaNotificationConfig(Base):
    """Per-organization settings for the daily agenda image notification"""

    __tablename__ = "agenda_notification_configs"

    id = Column(Integer, primary_key=True, index=True)
    organization_id = Column(Integer, ForeignKey("organizations.id"), nullable=False, index=True)
    is_enabled = Column(Boolean, default=True, nullable=False)
    send_time = Column(String(10), nullable=False)  # Local time, HH:MM or HH:MM:SS
    timezone = Column(String(64), nullable=False, default="America/Bogota")
    country_code = Column(String(6), nullable=True)
    recipient_phone = Column(String(30), nullable=False)
    recipient_name = Column(String(255), nullable=True)

    organization = relationship("Organization", back_populates="agenda_configs")

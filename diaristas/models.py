from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base

# Enumerations (stored as strings)
BOOKING_STATUSES = ("scheduled", "completed", "canceled")
PAYMENT_METHODS = ("cash", "pix", "bank_transfer", "card")
PAYMENT_STATUSES = ("pending", "paid", "canceled")


class User(Base):
    """Coordinator / admin account"""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    open_id = Column(String(64), unique=True, index=True, nullable=False)  # External identity
    name = Column(Text, nullable=True)
    email = Column(String(320), nullable=True)
    login_method = Column(String(64), nullable=True)
    role = Column(String(20), default="user", nullable=False)  # user, admin
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
    last_signed_in = Column(DateTime, server_default=func.now())


class StaffMember(Base):
    """Cleaning-service worker (diarista)"""

    __tablename__ = "staff_members"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)  # Coordinator who registered
    name = Column(String(255), nullable=False)
    phone = Column(String(20), nullable=False)  # WhatsApp channel
    email = Column(String(320), nullable=True)
    address = Column(Text, nullable=True)
    city = Column(String(100), nullable=True)
    postal_code = Column(String(10), nullable=True)
    active = Column(Boolean, default=True, nullable=False)
    hired_at = Column(DateTime, server_default=func.now())
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    specialty_links = relationship(
        "StaffSpecialty", back_populates="staff_member", cascade="all, delete-orphan"
    )


class Specialty(Base):
    """Named service category"""

    __tablename__ = "specialties"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())


class StaffSpecialty(Base):
    """Which specialties each staff member offers"""

    __tablename__ = "staff_specialties"
    __table_args__ = (UniqueConstraint("staff_member_id", "specialty_id"),)

    id = Column(Integer, primary_key=True, index=True)
    staff_member_id = Column(Integer, ForeignKey("staff_members.id"), nullable=False)
    specialty_id = Column(Integer, ForeignKey("specialties.id"), nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    staff_member = relationship("StaffMember", back_populates="specialty_links")
    specialty = relationship("Specialty")


class Booking(Base):
    """Scheduled cleaning job (agendamento)"""

    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    staff_member_id = Column(Integer, ForeignKey("staff_members.id"), nullable=False)
    specialty_id = Column(Integer, ForeignKey("specialties.id"), nullable=False)
    service_address = Column(Text, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)  # Inclusive
    description = Column(Text, nullable=True)
    status = Column(String(20), default="scheduled", nullable=False)  # scheduled, completed, canceled
    daily_rate = Column(Integer, nullable=False)  # Cents
    total_price = Column(Integer, nullable=True)  # Cents: daily_rate x days
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    staff_member = relationship("StaffMember")
    specialty = relationship("Specialty")

    @property
    def staff_name(self):
        return self.staff_member.name if self.staff_member else None

    @property
    def specialty_name(self):
        return self.specialty.name if self.specialty else None


class Payment(Base):
    """Payment made to a staff member"""

    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    staff_member_id = Column(Integer, nullable=False)  # Not enforced: payments persist regardless
    booking_id = Column(Integer, ForeignKey("bookings.id"), nullable=True)
    amount = Column(Integer, nullable=False)  # Cents
    payment_date = Column(Date, nullable=False)
    method = Column(String(20), nullable=False)  # cash, pix, bank_transfer, card
    status = Column(String(20), default="pending", nullable=False)  # pending, paid, canceled
    description = Column(Text, nullable=True)
    proof_reference = Column(String(255), nullable=True)  # URL or path of the proof of payment
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class Rating(Base):
    """Score given to a staff member for a booking"""

    __tablename__ = "ratings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    staff_member_id = Column(Integer, ForeignKey("staff_members.id"), nullable=False)
    booking_id = Column(Integer, ForeignKey("bookings.id"), nullable=False)
    score = Column(Integer, nullable=False)  # 1-5
    comment = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class Receipt(Base):
    """Receipt issued to a staff member for a paid booking"""

    __tablename__ = "receipts"

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(Integer, ForeignKey("bookings.id"), nullable=False)
    payment_id = Column(Integer, ForeignKey("payments.id"), nullable=False)
    staff_member_id = Column(Integer, ForeignKey("staff_members.id"), nullable=False)
    document_url = Column(String(500), nullable=False)
    signed = Column(Boolean, default=False, nullable=False)
    signed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class WhatsAppNotification(Base):
    """Track WhatsApp messages dispatched through the gateway"""

    __tablename__ = "whatsapp_notifications"

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(Integer, nullable=True)
    payment_id = Column(Integer, nullable=True)
    staff_member_id = Column(Integer, nullable=True)
    phone = Column(String(20), nullable=False)
    type = Column(String(20), nullable=False)  # booking, payment, receipt, rating, notice
    message = Column(Text, nullable=False)
    status = Column(String(20), default="pending", nullable=False)  # pending, sent, failed
    sent_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())


class AuditLog(Base):
    """Record of every mutating action taken in the system"""

    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False)
    user_name = Column(String(255), nullable=False)
    user_email = Column(String(320), nullable=False)
    action = Column(String(100), nullable=False)  # create, update, delete, ...
    table_name = Column(String(100), nullable=False)
    record_id = Column(Integer, nullable=True)
    description = Column(Text, nullable=True)
    old_data = Column(Text, nullable=True)  # JSON
    new_data = Column(Text, nullable=True)  # JSON
    ip_address = Column(String(45), nullable=True)
    user_agent = Column(Text, nullable=True)
    status = Column(String(20), default="success", nullable=False)  # success, error
    error_message = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())


class Notification(Base):
    """Admin-facing notification feed entry"""

    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)  # Recipient
    type = Column(String(50), nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    icon = Column(String(50), nullable=True)
    color = Column(String(20), nullable=True)
    read = Column(Boolean, default=False, nullable=False)
    whatsapp_sent = Column(Boolean, default=False, nullable=False)
    record_id = Column(Integer, nullable=True)
    related_table = Column(String(100), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

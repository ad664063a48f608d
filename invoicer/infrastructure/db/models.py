import uuid

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from invoicer.infrastructure.db.base import Base


class User(Base):
    __tablename__ = "users"
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255))

    # Business profile (seller details printed on invoices)
    business_name = Column(String(255), default="")
    business_address = Column(Text, default="")
    business_state = Column(String(100))
    business_gst = Column(String(15))
    business_phone = Column(String(15))
    business_email = Column(String(255))

    created_at = Column(DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"))
    updated_at = Column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=text("CURRENT_TIMESTAMP"),
    )

    customers = relationship("Customer", back_populates="user", cascade="all, delete-orphan")
    invoices = relationship("Invoice", back_populates="user", cascade="all, delete-orphan")
    frequently_used_items = relationship(
        "FrequentlyUsedItem", back_populates="user", cascade="all, delete-orphan"
    )


class Customer(Base):
    __tablename__ = "customers"
    __table_args__ = (UniqueConstraint("user_id", "gst_number", name="uq_customer_user_gst"),)

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    name = Column(String(255), nullable=False)
    gst_number = Column(String(15))
    address = Column(Text, nullable=False)
    state = Column(String(100), default="")
    phone = Column(String(15))
    email = Column(String(255))
    created_at = Column(DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"))
    updated_at = Column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=text("CURRENT_TIMESTAMP"),
    )

    user = relationship("User", back_populates="customers")
    invoices = relationship("Invoice", back_populates="customer")


class Invoice(Base):
    __tablename__ = "invoices"
    __table_args__ = (UniqueConstraint("user_id", "invoice_number", name="uq_invoice_user_number"),)

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    customer_id = Column(UUID(as_uuid=True), ForeignKey("customers.id", ondelete="SET NULL"), nullable=True)

    invoice_number = Column(String(50), nullable=False)
    status = Column(String(20), nullable=False, default="DRAFT")  # DRAFT | GENERATED | CANCELLED
    payment_status = Column(String(20), nullable=False, default="PENDING")  # PENDING | PARTIAL | PAID
    invoice_date = Column(Date, nullable=False)
    due_date = Column(Date)

    # Buyer snapshot at the time of invoicing
    customer_name = Column(String(255), nullable=False)
    customer_gst = Column(String(15))
    customer_address = Column(Text, nullable=False)
    customer_phone = Column(String(15))
    customer_email = Column(String(255))
    customer_state = Column(String(100))

    is_inter_state = Column(Boolean, nullable=False, default=False)
    subtotal = Column(Numeric(12, 2), nullable=False, default=0)
    cgst = Column(Numeric(12, 2), nullable=False, default=0)
    sgst = Column(Numeric(12, 2), nullable=False, default=0)
    igst = Column(Numeric(12, 2), nullable=False, default=0)
    total_amount = Column(Numeric(12, 2), nullable=False, default=0)

    terms_conditions = Column(Text)
    notes = Column(Text)

    created_at = Column(DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"), index=True)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=text("CURRENT_TIMESTAMP"),
    )

    user = relationship("User", back_populates="invoices")
    customer = relationship("Customer", back_populates="invoices")
    items = relationship(
        "InvoiceItem",
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by="InvoiceItem.position",
    )


class InvoiceItem(Base):
    __tablename__ = "invoice_items"
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    invoice_id = Column(UUID(as_uuid=True), ForeignKey("invoices.id", ondelete="CASCADE"), index=True, nullable=False)
    position = Column(Integer, nullable=False, default=0)

    description = Column(Text, nullable=False)
    hsn_sac_code = Column(String(8))
    hsn_sac_type = Column(String(3), default="HSN")
    unit_of_measurement = Column(String(10), default="NOS")

    quantity = Column(Numeric(12, 3), nullable=False)
    rate = Column(Numeric(12, 2), nullable=False)
    gst_rate = Column(Numeric(5, 2), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    cgst = Column(Numeric(12, 2), nullable=False, default=0)
    sgst = Column(Numeric(12, 2), nullable=False, default=0)
    igst = Column(Numeric(12, 2), nullable=False, default=0)
    total_amount = Column(Numeric(12, 2), nullable=False)

    invoice = relationship("Invoice", back_populates="items")


class HsnSacCode(Base):
    __tablename__ = "hsn_sac_codes"
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    code = Column(String(8), unique=True, index=True, nullable=False)
    type = Column(String(3), nullable=False)  # HSN | SAC
    description = Column(Text, nullable=False)
    category = Column(String(100), nullable=False)
    sub_category = Column(String(100))
    gst_rate = Column(Numeric(5, 2))
    unit_of_measurement = Column(String(10), nullable=False, default="NOS")
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"))


class FrequentlyUsedItem(Base):
    __tablename__ = "frequently_used_items"
    __table_args__ = (UniqueConstraint("user_id", "item_name", name="uq_frequent_item_user_name"),)

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    item_name = Column(String(255), nullable=False)
    hsn_sac_code = Column(String(8))
    hsn_sac_type = Column(String(3), nullable=False, default="HSN")
    default_rate = Column(Numeric(12, 2))
    default_gst_rate = Column(Numeric(5, 2), nullable=False, default=18)
    unit_of_measurement = Column(String(10), nullable=False, default="NOS")
    category = Column(String(100))
    usage_count = Column(Integer, nullable=False, default=1)
    last_used_at = Column(DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"))

    user = relationship("User", back_populates="frequently_used_items")

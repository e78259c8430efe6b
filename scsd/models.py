from sqlalchemy import Column, Integer, String, Float, DateTime, Text, ForeignKey, Enum, Boolean, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from .database import Base
from .enums import ClientType, LabourRole, Ownership, MaterialType, Phase, QuoteStatus


# --- Clients & jobs ---

class Client(Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False, default="")
    email = Column(String)
    phone = Column(String)
    client_type = Column(Enum(ClientType), default=ClientType.PRIVATE)
    notes = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    quotes = relationship("Quote", back_populates="client")
    jobs = relationship("Job", back_populates="client")


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    job_name = Column(String, nullable=False)
    site_address = Column(String)
    notes = Column(Text)
    job_dates = Column(JSON, default=list)  # ISO date strings, in entry order
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    client = relationship("Client", back_populates="jobs")


# --- Resource catalogs ---

class LabourResource(Base):
    __tablename__ = "labour_resources"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    role = Column(Enum(LabourRole), default=LabourRole.GENERAL_LABOUR)
    cost_rate = Column(Float, default=0.0)
    charge_out_rate = Column(Float, default=0.0)  # day rate
    night_rate = Column(Float, default=0.0)
    notes = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class EquipmentResource(Base):
    __tablename__ = "equipment_resources"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    category = Column(String)
    charge_out_rate = Column(Float, default=0.0)  # day rate
    night_rate = Column(Float, default=0.0)
    owned_or_hired = Column(Enum(Ownership), default=Ownership.OWNED)
    supplier = Column(String)
    notes = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class MaterialResource(Base):
    __tablename__ = "material_resources"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    purchase_price = Column(Float, default=0.0)
    material_type = Column(Enum(MaterialType), nullable=False)
    measurement_unit = Column(String)
    formula = Column(Float, nullable=True)  # quantity constant, NULL means 1
    supplier = Column(String)
    notes = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


# --- Quotes ---

class Quote(Base):
    __tablename__ = "quotes"

    id = Column(Integer, primary_key=True, index=True)
    quote_number = Column(String, unique=True, nullable=False)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False)
    title = Column(String, default="Untitled")
    summary = Column(String, default="")
    job_site_address = Column(String, default="")
    status = Column(Enum(QuoteStatus), default=QuoteStatus.DRAFT)
    date_created = Column(DateTime, default=datetime.utcnow)
    total_area = Column(Float, default=0.0)
    notes = Column(Text, default="")

    # Job particulars
    preparation = Column(Boolean, default=False)
    asphalt = Column(Boolean, default=False)
    two_coat_seal = Column(Boolean, default=False)
    profiling = Column(Boolean, default=False)

    # Money, written by the pricing engine only
    markup = Column(Float, default=0.0)  # percent
    cost_base = Column(Float, default=0.0)
    markup_amount = Column(Float, default=0.0)
    subtotal = Column(Float, default=0.0)
    gst = Column(Float, default=0.0)
    total = Column(Float, default=0.0)
    profit = Column(Float, default=0.0)
    margin = Column(Float, default=0.0)

    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    client = relationship("Client", back_populates="quotes")
    labour_lines = relationship(
        "QuoteLabourLine", back_populates="quote",
        cascade="all, delete-orphan", order_by="QuoteLabourLine.position",
    )
    equipment_lines = relationship(
        "QuoteEquipmentLine", back_populates="quote",
        cascade="all, delete-orphan", order_by="QuoteEquipmentLine.position",
    )
    material_lines = relationship(
        "QuoteMaterialLine", back_populates="quote",
        cascade="all, delete-orphan", order_by="QuoteMaterialLine.position",
    )


class QuoteLabourLine(Base):
    __tablename__ = "quote_labour_lines"

    id = Column(Integer, primary_key=True, index=True)
    quote_id = Column(Integer, ForeignKey("quotes.id"), nullable=False)
    position = Column(Integer, default=0)
    labour_id = Column(Integer, ForeignKey("labour_resources.id"), nullable=True)
    quantity = Column(Float, nullable=False)
    charge_rate = Column(Float, nullable=False)  # snapshot at time of adding
    total = Column(Float, nullable=False)
    required_for = Column(Enum(Phase), nullable=False)
    is_night = Column(Boolean, default=False)

    quote = relationship("Quote", back_populates="labour_lines")
    labour = relationship("LabourResource")


class QuoteEquipmentLine(Base):
    __tablename__ = "quote_equipment_lines"

    id = Column(Integer, primary_key=True, index=True)
    quote_id = Column(Integer, ForeignKey("quotes.id"), nullable=False)
    position = Column(Integer, default=0)
    equipment_id = Column(Integer, ForeignKey("equipment_resources.id"), nullable=True)
    quantity = Column(Float, nullable=False)
    charge_rate = Column(Float, nullable=False)
    total = Column(Float, nullable=False)
    required_for = Column(Enum(Phase), nullable=False)
    is_night = Column(Boolean, default=False)

    quote = relationship("Quote", back_populates="equipment_lines")
    equipment = relationship("EquipmentResource")


class QuoteMaterialLine(Base):
    __tablename__ = "quote_material_lines"

    id = Column(Integer, primary_key=True, index=True)
    quote_id = Column(Integer, ForeignKey("quotes.id"), nullable=False)
    position = Column(Integer, default=0)
    material_id = Column(Integer, ForeignKey("material_resources.id"), nullable=True)
    material_type = Column(Enum(MaterialType), nullable=False)
    sqm = Column(Float, nullable=False)
    depth = Column(Float, nullable=False)  # spray rate for Bitumen/Stone
    quantity = Column(Float, nullable=False)
    sell_price = Column(Float, nullable=False)
    charge = Column(Float, nullable=False)

    quote = relationship("Quote", back_populates="material_lines")
    material = relationship("MaterialResource")

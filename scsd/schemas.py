from pydantic import BaseModel, Field, model_validator
from typing import ClassVar, Optional, List, Union
from datetime import date, datetime
from .enums import ClientType, LabourRole, Ownership, MaterialType, QuoteStatus
from .pricing.types import LabourLine, EquipmentLine, MaterialLine

# Form entries arrive as numbers or as the raw text of an input box
NumberEntry = Optional[Union[float, str]]


class PatchModel(BaseModel):
    """PATCH body. Omitted fields are left alone; NOT_NULL fields may be omitted but not sent as null."""
    NOT_NULL: ClassVar[tuple] = ()

    @model_validator(mode="after")
    def _reject_nulls(self):
        nulls = [f for f in self.NOT_NULL if f in self.model_fields_set and getattr(self, f) is None]
        if nulls:
            raise ValueError(f"{', '.join(nulls)} cannot be null")
        return self


# --- Clients ---

class ClientBase(BaseModel):
    first_name: str
    last_name: str = ""
    email: Optional[str] = None
    phone: Optional[str] = None
    client_type: ClientType = ClientType.PRIVATE
    notes: Optional[str] = None

class ClientCreate(ClientBase):
    pass

class ClientUpdate(PatchModel):
    NOT_NULL: ClassVar[tuple] = ("first_name", "last_name", "client_type")

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    client_type: Optional[ClientType] = None
    notes: Optional[str] = None

class Client(ClientBase):
    id: int
    created_at: datetime
    class Config:
        from_attributes = True


# --- Jobs ---

class JobBase(BaseModel):
    job_name: str
    site_address: Optional[str] = None
    notes: Optional[str] = None
    job_dates: List[date] = []
    client_id: Optional[int] = None

class JobCreate(JobBase):
    pass

class Job(JobBase):
    id: int
    created_at: datetime
    class Config:
        from_attributes = True


# --- Resource catalogs ---

class LabourResourceBase(BaseModel):
    name: str
    role: LabourRole = LabourRole.GENERAL_LABOUR
    cost_rate: float = Field(0.0, ge=0)
    charge_out_rate: float = Field(0.0, ge=0)
    night_rate: float = Field(0.0, ge=0)
    notes: Optional[str] = None

class LabourResourceCreate(LabourResourceBase):
    pass

class LabourResourceUpdate(PatchModel):
    NOT_NULL: ClassVar[tuple] = ("name", "role", "cost_rate", "charge_out_rate", "night_rate")

    name: Optional[str] = None
    role: Optional[LabourRole] = None
    cost_rate: Optional[float] = Field(None, ge=0)
    charge_out_rate: Optional[float] = Field(None, ge=0)
    night_rate: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None

class LabourResource(LabourResourceBase):
    id: int
    updated_at: datetime
    class Config:
        from_attributes = True


class EquipmentResourceBase(BaseModel):
    name: str
    category: Optional[str] = None
    charge_out_rate: float = Field(0.0, ge=0)
    night_rate: float = Field(0.0, ge=0)
    owned_or_hired: Ownership = Ownership.OWNED
    supplier: Optional[str] = None
    notes: Optional[str] = None

class EquipmentResourceCreate(EquipmentResourceBase):
    pass

class EquipmentResourceUpdate(PatchModel):
    NOT_NULL: ClassVar[tuple] = ("name", "charge_out_rate", "night_rate", "owned_or_hired")

    name: Optional[str] = None
    category: Optional[str] = None
    charge_out_rate: Optional[float] = Field(None, ge=0)
    night_rate: Optional[float] = Field(None, ge=0)
    owned_or_hired: Optional[Ownership] = None
    supplier: Optional[str] = None
    notes: Optional[str] = None

class EquipmentResource(EquipmentResourceBase):
    id: int
    updated_at: datetime
    class Config:
        from_attributes = True


class MaterialResourceBase(BaseModel):
    name: str
    purchase_price: float = Field(0.0, ge=0)
    material_type: MaterialType
    measurement_unit: Optional[str] = None
    formula: Optional[float] = Field(None, ge=0)  # None -> 1
    supplier: Optional[str] = None
    notes: Optional[str] = None

class MaterialResourceCreate(MaterialResourceBase):
    pass

class MaterialResourceUpdate(PatchModel):
    NOT_NULL: ClassVar[tuple] = ("name", "purchase_price", "material_type")

    name: Optional[str] = None
    purchase_price: Optional[float] = Field(None, ge=0)
    material_type: Optional[MaterialType] = None
    measurement_unit: Optional[str] = None
    formula: Optional[float] = Field(None, ge=0)
    supplier: Optional[str] = None
    notes: Optional[str] = None

class MaterialResource(MaterialResourceBase):
    id: int
    updated_at: datetime
    class Config:
        from_attributes = True


# --- Quote builder: picker selections ---

class LabourPick(BaseModel):
    labour_id: int
    quantity: NumberEntry = None
    required_for: Optional[str] = None
    is_night: bool = False

class EquipmentPick(BaseModel):
    equipment_id: int
    quantity: NumberEntry = None
    required_for: Optional[str] = None
    is_night: bool = False

class MaterialPick(BaseModel):
    material_id: int
    sqm: NumberEntry = None
    depth: NumberEntry = None
    sell_price: NumberEntry = None

class MaterialLineView(MaterialLine):
    """Material line plus its display labels."""
    unit: str
    depth_label: str


# --- Quotes ---

class QuoteLines(BaseModel):
    labour_lines: List[LabourLine] = []
    equipment_lines: List[EquipmentLine] = []
    material_lines: List[MaterialLine] = []

class QuotePreview(QuoteLines):
    markup: NumberEntry = 0

class QuoteHeader(BaseModel):
    title: str = "Untitled"
    summary: str = ""
    job_site_address: str = ""
    status: QuoteStatus = QuoteStatus.DRAFT
    date_created: Optional[datetime] = None
    total_area: float = Field(0.0, ge=0)
    notes: str = ""
    preparation: bool = False
    asphalt: bool = False
    two_coat_seal: bool = False
    profiling: bool = False

class QuoteCreate(QuoteHeader, QuoteLines):
    client_id: int
    markup: NumberEntry = None  # None -> settings.MARKUP_DEFAULT

class QuoteUpdate(PatchModel):
    NOT_NULL: ClassVar[tuple] = ("title", "status", "total_area", "preparation", "asphalt", "two_coat_seal", "profiling")

    title: Optional[str] = None
    summary: Optional[str] = None
    job_site_address: Optional[str] = None
    status: Optional[QuoteStatus] = None
    total_area: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None
    preparation: Optional[bool] = None
    asphalt: Optional[bool] = None
    two_coat_seal: Optional[bool] = None
    profiling: Optional[bool] = None
    markup: NumberEntry = None

class QuoteLabourLine(LabourLine):
    id: int

class QuoteEquipmentLine(EquipmentLine):
    id: int

class QuoteMaterialLine(MaterialLine):
    id: int

class Quote(BaseModel):
    id: int
    quote_number: str
    client_id: int
    client: Optional[Client] = None
    title: Optional[str] = None
    summary: Optional[str] = None
    job_site_address: Optional[str] = None
    status: QuoteStatus
    date_created: datetime
    total_area: Optional[float] = None
    notes: Optional[str] = None
    preparation: bool = False
    asphalt: bool = False
    two_coat_seal: bool = False
    profiling: bool = False
    markup: float
    cost_base: float
    markup_amount: float
    subtotal: float
    gst: float
    total: float
    profit: float
    margin: float
    labour_lines: List[QuoteLabourLine] = []
    equipment_lines: List[QuoteEquipmentLine] = []
    material_lines: List[QuoteMaterialLine] = []
    class Config:
        from_attributes = True

class QuoteListItem(BaseModel):
    id: int
    quote_number: str
    client_id: int
    title: Optional[str] = None
    status: QuoteStatus
    date_created: datetime
    subtotal: float
    total: float
    class Config:
        from_attributes = True


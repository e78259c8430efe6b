import enum


# Client / catalog enums
class ClientType(str, enum.Enum):
    PRIVATE = "Private"
    CONTRACTOR = "Contractor"
    GOVERNMENT = "Government"


class LabourRole(str, enum.Enum):
    GENERAL_LABOUR = "General Labour"
    FOREMAN = "Foreman"


class Ownership(str, enum.Enum):
    OWNED = "Owned"
    HIRED = "Hired"


class MaterialType(str, enum.Enum):
    BITUMEN = "Bitumen"
    ASPHALT = "Asphalt"
    ROADBASE = "Roadbase"
    STONE = "Stone"


# Quote enums
class Phase(str, enum.Enum):
    """Construction stage a labour or equipment line is required for."""
    PREPARATION = "Preparation"
    SEAL = "Seal"
    ASPHALT = "Asphalt"


class QuoteStatus(str, enum.Enum):
    DRAFT = "Draft"
    READY = "Ready"
    SENT = "Sent"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"

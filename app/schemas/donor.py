from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import date

class DonorSchema(BaseModel):
    # JSON uses camelCase (fullName, birthDate, ...); attribute names are accepted too
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class DonorPayload(DonorSchema):
    """Create/update body. Required fields are checked by donor_rules.validate_donor."""
    id: Optional[int] = None
    full_name: Optional[str] = None
    phone: Optional[str] = None
    birth_date: Optional[date] = None
    gender: Optional[str] = None
    address: Optional[str] = None
    generated_id: Optional[str] = None
    number_of_donations: Optional[int] = None

class DonorResponse(DonorSchema):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    full_name: str
    phone: str
    birth_date: date
    age: Optional[int] = None
    gender: str
    address: Optional[str] = None
    generated_id: str
    number_of_donations: int

class MessageResponse(BaseModel):
    message: str

class HealthResponse(BaseModel):
    status: str
    database: str
    timestamp: str

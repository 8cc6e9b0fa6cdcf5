# api/lookups/models.py
from pydantic import BaseModel, ConfigDict


class CategoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    code: str
    name: str
    useful_life: int


class BusinessUnitRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    code: str
    name: str
    description: str | None = None
    is_active: bool


class LocationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    business_unit_id: int
    name: str
    floor: str | None = None
    room: str | None = None


class EmployeeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_code: str
    name: str
    position: str | None = None
    department: str | None = None
    business_unit_id: int
    is_active: bool

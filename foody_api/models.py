"""
Foody API request/response Pydantic models
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class LoginBody(BaseModel):
    username: str
    password: str


class FoodDTO(BaseModel):
    """Food review payload for the create endpoint"""
    name: str
    description: str


class PatchOperation(BaseModel):
    """Single JSON-patch style operation"""
    path: str
    op: str = "replace"
    value: str

    @classmethod
    def replace(cls, path: str, value: str) -> "PatchOperation":
        return cls(path=path, op="replace", value=value)


class ApiResponseDTO(BaseModel):
    """Message/id envelope returned by the food endpoints"""
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True, extra="ignore")

    msg: Optional[str] = None
    food_id: Optional[str] = Field(None, alias="foodId")


def patch_document(*operations: PatchOperation) -> List[dict]:
    """Serialize operations into the JSON array the edit endpoint expects"""
    return [operation.model_dump() for operation in operations]

# app/models/products.py

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# Range of the INTEGER columns backing Product.
INT32_MIN = -2**31
INT32_MAX = 2**31 - 1


class Product(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(default=0, ge=INT32_MIN, le=INT32_MAX)
    name: Optional[str] = None
    description: Optional[str] = None
    quantity: int = Field(default=0, ge=INT32_MIN, le=INT32_MAX)

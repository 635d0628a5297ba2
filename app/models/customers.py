# app/models/customers.py

from pydantic import BaseModel, EmailStr


class CustomerRecord(BaseModel):
    id: str
    name: str
    email: EmailStr
    image_url: str

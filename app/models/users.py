# app/models/users.py

from pydantic import BaseModel, EmailStr


class UserRecord(BaseModel):
    id: str
    name: str
    email: EmailStr
    password: str  # plaintext; hashed before it is stored

from pydantic import BaseModel, Field
from typing import Optional

# Contexto de autenticação já validado (claims do token)
class AuthContext(BaseModel):
    role: str = ""
    user_doc_id: str = Field("", alias="userDocId")
    daycare_id: Optional[str] = Field(None, alias="daycareId")
    location_id: Optional[str] = Field(None, alias="locationId")

    class Config:
        populate_by_name = True

from pydantic import BaseModel
from typing import Optional, Union
from uuid import UUID


class UserToken(BaseModel):
    user_id: str
    org_id: Optional[UUID] = None
    name: Optional[str] = None
    account_type: Optional[str] = None
    exp: Optional[int] = None

    @property
    def tenant_id(self) -> UUID:
        """Rows are scoped to the organization, or to the user when the token carries none."""
        return self.org_id or UUID(self.user_id)


class Lookup(BaseModel):
    id: Union[str, UUID]  # accepts both UUID and str
    name: str

    class Config:
        from_attributes = True

from uuid import UUID

from pydantic import BaseModel


class Principal(BaseModel):
    """Authenticated identity supplied by the identity provider"""

    id: UUID
    email: str

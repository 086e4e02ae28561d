from pydantic import BaseModel


class Actor(BaseModel):
    """Identity of the caller, recorded on ledger rows and activity entries."""
    id: str
    name: str
    role: str

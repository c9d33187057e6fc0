from pydantic import BaseModel, Field


# -------- AUTH --------
class CredentialsSchema(BaseModel):
    user: str = Field(..., min_length=1)
    pwd: str = Field(..., min_length=1)


class AccessTokenSchema(BaseModel):
    accessToken: str


class CurrentUser(BaseModel):
    """Identity resolved from a verified access token."""
    id: int

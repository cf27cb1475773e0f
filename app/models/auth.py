from pydantic import BaseModel


class AuthenticatedUser(BaseModel):
    """The caller resolved from a Supabase access token."""

    id: str
    email: str | None = None

from typing import Optional

from pydantic import BaseModel, Field


class ContactRequest(BaseModel):
    """
    Booking inquiry submitted from the contact page.

    All three fields are required; the route reports missing ones as 400.
    """
    name: Optional[str] = Field(default=None, max_length=200)
    email: Optional[str] = Field(default=None, max_length=320)
    message: Optional[str] = Field(default=None, max_length=10000)

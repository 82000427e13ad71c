from fastapi import Header, HTTPException
from pydantic import EmailStr, TypeAdapter, ValidationError

_email = TypeAdapter(EmailStr)

async def get_acting_member(x_member_email: str | None = Header(default=None)) -> str:
    """
    The member on whose behalf the request is made.

    Passed explicitly by the caller on every request; identity itself is
    established upstream.
    """
    if not x_member_email:
        raise HTTPException(status_code=401, detail="Missing X-Member-Email header")

    try:
        return _email.validate_python(x_member_email.strip())
    except ValidationError:
        raise HTTPException(status_code=401, detail="Invalid member email")

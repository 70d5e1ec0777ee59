# api/schemas/common.py
from pydantic import BaseModel

class ErrorResponse(BaseModel):
    code: str
    message: str

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from typing import Any


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class LoginRequest(CamelModel):
    user_id: str

class HistoryRequest(CamelModel):
    sender_id: str
    receiver_id: str

class ApiResponse(BaseModel):
    """
    Envelope shared by every JSON endpoint:
    {status, success, data} on success, {status, success, message} on failure.
    """
    status: int
    success: bool
    data: Any | None = None
    message: str | None = None


def ok_response(data: Any) -> JSONResponse:
    envelope = ApiResponse(status=status.HTTP_200_OK, success=True, data=data)
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=jsonable_encoder(envelope, exclude={"message"})
    )

def error_response(status_code: int, message: str) -> JSONResponse:
    envelope = ApiResponse(status=status_code, success=False, message=message)
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(envelope, exclude={"data"})
    )

from pydantic import BaseModel, ConfigDict, Field


class EchoRequest(BaseModel):
    # strict: a number or null is never turned into a string
    model_config = ConfigDict(strict=True)

    message: str = Field(..., description="Text to echo back; must not be blank")


class EchoResponse(BaseModel):
    original_message: str = Field(..., description="The message as received, untrimmed")
    echoed_message: str = Field(..., description='Server says: "<message>" at <timestamp>')
    timestamp: str = Field(..., description="ISO-8601 UTC processing time, millisecond precision")


class ErrorResponse(BaseModel):
    error: str

"""The value object every sample endpoint decodes into."""

from pydantic import BaseModel, Field

from src.decoding import TargetSchema


class HelloData(BaseModel):
    """A username and an age.

    Unbound fields keep their zero values: no username and age ``0``.
    """

    username: str | None = Field(
        default=None,
        description="User name as supplied by the client",
        examples=["hello", "kim"],
    )
    age: int = Field(
        default=0,
        description="Age in years",
        examples=[20],
    )


# Built once; shared by the parameter and JSON body samples
HELLO_DATA = TargetSchema.from_model(HelloData)

"""Pydantic schema for generic device/asset records."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Data(BaseModel):
    """Generic device record (pricing, serial number and free-form description)."""

    model_config = ConfigDict(strict=True)

    id: int = Field(default=0, description="Assigned by the store; 0 until persisted")
    device_id: str = ""
    device_name: str = ""
    price: float = 0.0
    # Older clients send the key as "SerialNumber".
    serial_number: float = Field(
        default=0.0,
        validation_alias=AliasChoices("serial_number", "SerialNumber"),
    )
    type: str = ""
    date_time: str = ""
    description: str = ""

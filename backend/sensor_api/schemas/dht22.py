"""Pydantic schema for DHT22 sensor readings."""

from pydantic import BaseModel, ConfigDict, Field


class DHT22Data(BaseModel):
    """A single temperature/humidity reading from a DHT22 sensor."""

    # Type decoding only: wrong JSON types are rejected, missing keys take zero values.
    model_config = ConfigDict(strict=True)

    id: int = Field(default=0, description="Assigned by the store; 0 until persisted")
    device_name: str = ""
    temperature: float = 0.0
    humidity: float = 0.0
    date_time: str = Field(default="", description="ISO-8601 timestamp, stored as received")

"""SQLAlchemy model for the dht22_data table (source of the CREATE TABLE DDL)."""

from sqlalchemy import Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from sensor_api.models.data import Base


class DHT22Record(Base):
    __tablename__ = "dht22_data"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    device_name: Mapped[str] = mapped_column(String, nullable=False)
    temperature: Mapped[float] = mapped_column(Float, nullable=False)
    humidity: Mapped[float] = mapped_column(Float, nullable=False)
    date_time: Mapped[str] = mapped_column(String, nullable=False)

    def __repr__(self) -> str:
        return f"<DHT22Record {self.id} {self.device_name} t={self.temperature} h={self.humidity}>"

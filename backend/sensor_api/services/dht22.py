from sensor_api.schemas.dht22 import DHT22Data
from sensor_api.services.base import RepositoryService


class DHT22Service(RepositoryService[DHT22Data]):
    """Business logic for DHT22 readings (currently a straight pass-through)."""

from sensor_api.schemas.data import Data
from sensor_api.services.base import RepositoryService


class DataService(RepositoryService[Data]):
    """Business logic for generic device records.

    update() and delete() report rows affected, like DHT22Service, so the
    handlers can treat both record types the same way.
    """

import enum

from sqlalchemy.orm import declarative_base

Base = declarative_base()


class CatalogKind(enum.Enum):
    YACHT = "yacht"
    WATER_SPORT = "water_sport"
    FOOD = "food"
    ADDITIONAL_SERVICE = "additional_service"

from typing import Type, TypeVar, Union

from pydantic import BaseModel, Field, ValidationError

from nztm.exceptions import InvalidInputError

ModelT = TypeVar("ModelT", bound=BaseModel)


class GridCoordinate(BaseModel):
    """NZTM easting/northing in metres."""
    easting: float = Field(allow_inf_nan=False)
    northing: float = Field(allow_inf_nan=False)


class GeodeticCoordinate(BaseModel):
    """NZGD2000 latitude/longitude in decimal degrees."""
    latitude: float = Field(ge=-90.0, le=90.0, allow_inf_nan=False)
    longitude: float = Field(allow_inf_nan=False)


class GeodeticResult(BaseModel):
    """Grid to geodetic: the input grid coordinate plus the computed degrees."""
    easting: float
    northing: float
    latitude: float
    longitude: float


class GridResult(BaseModel):
    """Geodetic to grid: the input degrees plus the computed grid coordinate."""
    latitude: float
    longitude: float
    easting: Union[int, float]
    northing: Union[int, float]


def parse_coordinate(model: Type[ModelT], **values) -> ModelT:
    """Validates raw caller values, raising InvalidInputError on failure."""
    try:
        return model(**values)
    except ValidationError as e:
        raise InvalidInputError(str(e)) from e

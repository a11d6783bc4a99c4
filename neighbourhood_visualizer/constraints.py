from pydantic import BaseModel, ConfigDict, Field, model_validator


class NeighbourhoodParameters(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    front_yard_percent: float = Field(20, ge=0, le=100)
    side_yard_percent: float = Field(10, ge=0, le=100)
    back_yard_percent: float = Field(45, ge=0, le=100)
    lot_depth_in_m: float = Field(37.2, gt=0, le=300)
    lot_width_in_m: float = Field(10.1, gt=0, le=300)
    storeys: int = Field(3, ge=0, le=50)
    road_width_in_m: float = Field(11, ge=0, le=30)
    laneway_width_in_m: float = Field(6, ge=0, le=30)
    sidewalk_width_in_m: float = Field(8, ge=0, le=30)
    # If 1 more lot would put a block over this length, it is not built
    max_block_length_in_m: float = Field(100, ge=1, le=300)
    include_parks: bool = False
    one_park_per_this_many_housing_blocks: int = Field(4, ge=1, le=20)

    @model_validator(mode="after")
    def check_block_length_allows_one_lot(self):
        if self.max_block_length_in_m < self.lot_width_in_m:
            raise ValueError(
                f"max_block_length_in_m ({self.max_block_length_in_m}) is shorter "
                f"than lot_width_in_m ({self.lot_width_in_m})"
            )
        return self

    @model_validator(mode="after")
    def check_park_period(self):
        if self.include_parks and self.one_park_per_this_many_housing_blocks < 2:
            raise ValueError("one_park_per_this_many_housing_blocks must be at least 2 when parks are included")
        return self


DEFAULT_PARAMETERS = NeighbourhoodParameters()

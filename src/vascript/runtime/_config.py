"""Engine configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, model_validator


class EngineConfig(BaseModel):
    """Tunable constants of the action engine.

    The defaults are the values scripts have always run with; change them
    only when the host needs larger render buffers or a different timer id
    range.
    """

    model_config = ConfigDict(frozen=True)

    min_string_capacity: int = 32
    render_capacity: int = 64
    max_timer_id: int = 254
    uint16_format: str = "%d"
    uint32_format: str = "%d"
    float_format: str = "%f"

    @model_validator(mode="after")
    def _check_limits(self):
        if self.min_string_capacity < 1:
            raise ValueError(
                f"min_string_capacity ({self.min_string_capacity}) must be >= 1"
            )
        if self.render_capacity < 1:
            raise ValueError(
                f"render_capacity ({self.render_capacity}) must be >= 1"
            )
        if not 1 <= self.max_timer_id <= 0xFFFF:
            raise ValueError(
                f"max_timer_id ({self.max_timer_id}) must be in 1..65535"
            )
        return self

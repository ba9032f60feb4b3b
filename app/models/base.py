"""Base models shared by the relay: orientations, control config and telemetry."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional
from enum import Enum


class WireModel(BaseModel):
    """Model serialised with camelCase keys on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ControlMode(str, Enum):
    """Who decides the solar panel orientation."""

    AUTOMATIC = "AUTOMATIC"
    MANUAL = "MANUAL"


class Orientation(WireModel):
    """Physical orientation in degrees. Ranges are not enforced."""

    model_config = ConfigDict(frozen=True)

    azimuth: float = 0.0
    inclination: float = 0.0


class ControlConfig(WireModel):
    """The shared control configuration."""

    model_config = ConfigDict(frozen=True)

    control_mode: ControlMode = ControlMode.AUTOMATIC
    manual_orientation: Orientation = Field(default_factory=Orientation)


class ControlConfigUpdate(WireModel):
    """Partial control configuration sent by a client.

    Fields that are absent or null are left as ``None`` and do not
    override the stored value. Unknown keys are ignored.
    """

    control_mode: Optional[ControlMode] = None
    manual_orientation: Optional[Orientation] = None


class SystemState(WireModel):
    """One telemetry snapshot. Absent fields are omitted on the wire."""

    timestamp: Optional[int] = None
    motor_orientation: Optional[Orientation] = None
    platform_orientation: Optional[Orientation] = None
    solar_panel_orientation: Optional[Orientation] = None
    solar_panel_voltage: Optional[float] = None
    sun_orientation: Optional[Orientation] = None

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

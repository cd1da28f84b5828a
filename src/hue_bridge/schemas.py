from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class LightState(BaseModel):
    on: bool = Field(default=False, description="Power state.")
    bri: int = Field(default=0, ge=0, le=255, description="Brightness, 0–255.")
    alert: str = Field(default="", description="Alert mode (none, select, lselect).")
    effect: str = Field(default="", description="Effect mode (none, colorloop).")
    colormode: str = Field(default="", description="Active color mode (hs, xy, ct).")
    hue: int = Field(default=0, ge=0, le=65535, description="Hue, 0–65535.")
    sat: int = Field(default=0, ge=0, le=255, description="Saturation, 0–255.")
    xy: tuple[float, float] = Field(default=(0.0, 0.0), description="CIE xy chromaticity pair.")
    ct: int = Field(default=0, ge=0, le=65535, description="Color temperature in mired.")
    reachable: bool = Field(default=False, description="Whether the bridge can reach the light.")


class Light(BaseModel):
    name: str = ""
    state: LightState = Field(default_factory=LightState)


class Group(BaseModel):
    name: str = ""
    lights: list[str] = Field(default_factory=list, description="Member light ids.")
    action: LightState = Field(
        default_factory=LightState,
        description="Last state commanded to the group.",
    )


class Datastore(BaseModel):
    lights: dict[str, Light] = Field(default_factory=dict)
    groups: dict[str, Group] = Field(default_factory=dict)


class BridgeErrorDetail(BaseModel):
    type: int = 0
    address: str = ""
    description: str = ""


class BridgeErrorEntry(BaseModel):
    error: BridgeErrorDetail


class DiscoveredBridge(BaseModel):
    id: str = ""
    internalipaddress: str
    macaddress: str = ""


class RegistrationRequest(BaseModel):
    devicetype: str | None = None
    username: str | None = None


class StateUpdate(BaseModel):
    """Partial light state or group action; unset fields are not sent."""

    model_config = ConfigDict(extra="forbid")

    on: bool | None = None
    bri: int | None = Field(default=None, ge=0, le=255)
    alert: str | None = None
    effect: str | None = None
    hue: int | None = Field(default=None, ge=0, le=65535)
    sat: int | None = Field(default=None, ge=0, le=255)
    xy: tuple[float, float] | None = None
    ct: int | None = Field(default=None, ge=0, le=65535)
    transitiontime: int | None = Field(default=None, ge=0, description="Transition time in 100ms steps.")

"""Agenda domain schemas - engine input contract and the resolved layout model"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OrganizationInfo(BaseModel):
    id: Union[int, str]
    name: str


class MemberInfo(BaseModel):
    id: Optional[Union[int, str]] = None
    firstName: str
    lastName: Optional[str] = ""

    @property
    def display_name(self) -> str:
        return f"{self.firstName} {self.lastName or ''}".strip()


class AppointmentInput(BaseModel):
    """One appointment as handed to the layout engine"""

    startTime: str
    endTime: Optional[str] = None
    serviceDurationMinutes: Optional[int] = None
    clientName: str
    serviceName: str
    status: Optional[str] = None

    @field_validator("endTime", mode="before")
    @classmethod
    def blank_end_time_is_missing(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class MemberAppointments(BaseModel):
    member: MemberInfo
    appointments: list[AppointmentInput] = Field(default_factory=list)


class AgendaRenderRequest(BaseModel):
    """Body of POST /agenda/preview"""

    organization: OrganizationInfo
    membersWithAppointments: list[MemberAppointments] = Field(default_factory=list)
    date: str

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: str) -> str:
        from datetime import date

        date.fromisoformat(v)
        return v


# ============================================================================
# RESOLVED LAYOUT
# ============================================================================


class ScheduleWindow(BaseModel):
    model_config = ConfigDict(frozen=True)

    start_hour: int
    end_hour: int

    @property
    def total_minutes(self) -> int:
        return (self.end_hour - self.start_hour) * 60

    @property
    def start_minutes(self) -> int:
        return self.start_hour * 60


class PlacedAppointment(BaseModel):
    """Appointment with derived times, column and pixel geometry"""

    model_config = ConfigDict(frozen=True)

    start_time: str
    end_time: str
    start_minutes: int
    end_minutes: int
    client: str
    service: str
    status: str
    column: int
    max_columns: int = 1
    top: float = 0.0
    height: float = 0.0

    @property
    def duration(self) -> int:
        return self.end_minutes - self.start_minutes

    @property
    def left_percent(self) -> float:
        return self.column * 100 / self.max_columns

    @property
    def width_percent(self) -> float:
        return 100 / self.max_columns


class MemberLane(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Optional[Union[int, str]] = None
    name: str
    appointments: list[PlacedAppointment]
    max_columns: int


class AgendaLayout(BaseModel):
    model_config = ConfigDict(frozen=True)

    organization: OrganizationInfo
    date: str
    window: ScheduleWindow
    track_height: int
    slot_height: int
    members: list[MemberLane]

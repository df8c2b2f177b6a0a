from __future__ import annotations

from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator

from app.core.exceptions import InvalidDayError
from app.services.schedule_time import TIME_PATTERN, time_to_minutes


class DayOfWeek(str, Enum):
    monday = "Monday"
    tuesday = "Tuesday"
    wednesday = "Wednesday"
    thursday = "Thursday"
    friday = "Friday"
    saturday = "Saturday"
    sunday = "Sunday"


# Canonical display order; Monday is index 0.
DAY_ORDER: tuple[DayOfWeek, ...] = (
    DayOfWeek.monday,
    DayOfWeek.tuesday,
    DayOfWeek.wednesday,
    DayOfWeek.thursday,
    DayOfWeek.friday,
    DayOfWeek.saturday,
    DayOfWeek.sunday,
)
DAY_INDEX: dict[DayOfWeek, int] = {day: index for index, day in enumerate(DAY_ORDER)}

_DAY_ALIASES: dict[str, DayOfWeek] = {}
for _day, _aliases in (
    (DayOfWeek.monday, ("monday", "mon", "lunes")),
    (DayOfWeek.tuesday, ("tuesday", "tue", "martes")),
    (DayOfWeek.wednesday, ("wednesday", "wed", "miércoles", "miercoles")),
    (DayOfWeek.thursday, ("thursday", "thu", "jueves")),
    (DayOfWeek.friday, ("friday", "fri", "viernes")),
    (DayOfWeek.saturday, ("saturday", "sat", "sábado", "sabado")),
    (DayOfWeek.sunday, ("sunday", "sun", "domingo")),
):
    for _alias in _aliases:
        _DAY_ALIASES[_alias] = _day


def normalize_day(value: DayOfWeek | str) -> DayOfWeek:
    if isinstance(value, DayOfWeek):
        return value
    if not isinstance(value, str):
        raise InvalidDayError(value)
    day = _DAY_ALIASES.get(value.strip().casefold())
    if day is None:
        raise InvalidDayError(value)
    return day


class ScheduleBlock(BaseModel):
    """One weekly time block of a course section.

    Times are validated for format only. Ordering and duration are business
    rules checked by ``validate_new_block`` so they can be reported inline;
    the other schedule operations refuse blocks that end before they start.
    """

    model_config = ConfigDict(frozen=True)

    day: DayOfWeek = Field(validation_alias=AliasChoices("day", "dia"))
    start_time: str = Field(
        validation_alias=AliasChoices("start_time", "startTime", "horaInicio"),
        serialization_alias="startTime",
    )
    end_time: str = Field(
        validation_alias=AliasChoices("end_time", "endTime", "horaFin"),
        serialization_alias="endTime",
    )
    room: str = Field(default="", validation_alias=AliasChoices("room", "aula"))

    # Parsed once on validation; every comparison runs on these integers.
    _start_minutes: int = PrivateAttr(default=0)
    _end_minutes: int = PrivateAttr(default=0)

    @field_validator("day", mode="before")
    @classmethod
    def validate_day(cls, value: DayOfWeek | str) -> DayOfWeek:
        return normalize_day(value)

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time_format(cls, value: str) -> str:
        value = value.strip()
        if not TIME_PATTERN.match(value):
            raise ValueError("Time must be in HH:MM 24-hour format")
        return value

    @field_validator("room")
    @classmethod
    def normalize_room(cls, value: str) -> str:
        return value.strip()

    @model_validator(mode="after")
    def parse_minutes(self) -> "ScheduleBlock":
        self._start_minutes = time_to_minutes(self.start_time)
        self._end_minutes = time_to_minutes(self.end_time)
        return self

    @property
    def start_minutes(self) -> int:
        return self._start_minutes

    @property
    def end_minutes(self) -> int:
        return self._end_minutes

    @property
    def duration_minutes(self) -> int:
        return self.end_minutes - self.start_minutes

    @property
    def label(self) -> str:
        return f"{self.start_time}-{self.end_time}"


class ScheduleConflict(BaseModel):
    block_a: ScheduleBlock = Field(serialization_alias="blockA")
    block_b: ScheduleBlock = Field(serialization_alias="blockB")
    message: str


class ConflictScan(BaseModel):
    has_conflicts: bool = Field(serialization_alias="hasConflicts")
    conflicts: list[ScheduleConflict] = Field(default_factory=list)


class BlockValidation(BaseModel):
    valid: bool
    error: str | None = None


class ConsolidatedRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: DayOfWeek
    start_time: str = Field(serialization_alias="startTime")
    end_time: str = Field(serialization_alias="endTime")
    rooms: list[str] = Field(default_factory=list)

    @property
    def duration_minutes(self) -> int:
        return time_to_minutes(self.end_time) - time_to_minutes(self.start_time)


class ScheduleOverview(BaseModel):
    summary: str
    weekly_hours: float = Field(serialization_alias="weeklyHours")
    class_days: list[DayOfWeek] = Field(default_factory=list, serialization_alias="classDays")
    ranges: list[ConsolidatedRange] = Field(default_factory=list)
    has_conflicts: bool = Field(serialization_alias="hasConflicts")
    conflicts: list[ScheduleConflict] = Field(default_factory=list)


class ScheduleRequest(BaseModel):
    blocks: list[ScheduleBlock] = Field(
        default_factory=list,
        max_length=200,
        validation_alias=AliasChoices("blocks", "horarioJson"),
    )


class BlockValidationRequest(BaseModel):
    candidate: ScheduleBlock
    existing: list[ScheduleBlock] = Field(default_factory=list, max_length=200)

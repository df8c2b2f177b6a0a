class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(self, message: str, status_code: int = 500, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

class ScheduleContractError(AppError, ValueError):
    """Raised when a caller hands the schedule core input it must never receive."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=400, details=details)

class InvalidTimeFormatError(ScheduleContractError):
    """Raised for time text that is not HH:MM or minute values outside one day."""
    def __init__(self, value):
        super().__init__(
            f"Invalid time value {value!r}: expected HH:MM between 00:00 and 23:59",
            details={"value": str(value)},
        )

class InvalidDayError(ScheduleContractError):
    """Raised for a day label outside the seven canonical week days."""
    def __init__(self, value):
        super().__init__(f"Invalid day value {value!r}", details={"value": str(value)})

class InvalidTimeRangeError(ScheduleContractError):
    """Raised when a block that should already be validated ends before it starts."""
    def __init__(self, day, start_time: str, end_time: str):
        super().__init__(
            f"Block on {day} must start before it ends: {start_time}-{end_time}",
            details={"day": str(day), "startTime": start_time, "endTime": end_time},
        )

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class TimeOfDay:
    hour: int  # 0-23
    minute: int  # 0-59

    @property
    def total_minutes(self) -> int:
        return self.hour * 60 + self.minute

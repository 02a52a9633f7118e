from pydantic import BaseModel, computed_field


class MemorizationStatistics(BaseModel):
    total_verses: int = 0
    phase1_count: int = 0
    phase2_count: int = 0
    phase3_count: int = 0
    due_today: int = 0

    @computed_field
    @property
    def completion_rate(self) -> float:
        if self.total_verses <= 0:
            return 0.0
        return (self.total_verses - self.due_today) / self.total_verses

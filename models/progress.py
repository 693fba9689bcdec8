"""Progress value object."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Progress:
    """
    Completion progress of the loaded dataset.
    
    Attributes:
        completed_count: Rows marked as completed
        total_count: All rows in the dataset
        percent: Rounded percentage, 0 for an empty dataset
    """
    
    completed_count: int = 0
    total_count: int = 0
    percent: int = 0
    
    @classmethod
    def from_counts(cls, completed_count: int, total_count: int) -> "Progress":
        if total_count <= 0:
            return cls(completed_count, 0, 0)
        # Round half up on integers: floor(100 * c / t + 0.5)
        percent = (200 * completed_count + total_count) // (2 * total_count)
        return cls(completed_count, total_count, percent)
    
    @property
    def remaining_count(self) -> int:
        return self.total_count - self.completed_count
    
    @property
    def is_complete(self) -> bool:
        return self.percent == 100

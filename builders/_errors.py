from __future__ import annotations

class UnsupportedOperationError(Exception):
    """Builder does not implement the requested capability."""

    builder: str
    operation: str

    def __init__(self, builder: str, operation: str) -> None:
        self.builder = builder
        self.operation = operation
        super().__init__(f"{builder} does not support {operation}()")

class StepLimitExceededError(Exception):
    """Driver took max_steps steps without reaching Done."""

    steps: int

    def __init__(self, steps: int) -> None:
        self.steps = steps
        super().__init__(f"Computation not done after {steps} steps")

__all__ = ("StepLimitExceededError", "UnsupportedOperationError")

from __future__ import annotations


class BindingError(Exception):
    """Base class for failures while binding a tag to a page model."""


class BindingTargetNotFound(BindingError):
    def __init__(self, expression: str, model_name: str) -> None:
        super().__init__(f"{model_name} has no field matching {expression!r}")
        self.expression = expression
        self.model_name = model_name

"""Serializable error shape that crosses process boundaries."""

from __future__ import annotations

from typing import Any, ClassVar, Iterator

from pydantic import BaseModel, ConfigDict, Field, field_validator

from faultline.core.errors import Category


class WireError(BaseModel):
    """Structured error embedded into a transport status message.

    JSON keys are camelCase. Decoders ignore unknown keys so that newer peers
    can add fields without breaking older ones.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    # Two-valued and numeric categories emitted by older peers.
    LEGACY_CATEGORIES: ClassVar[dict[Any, Category]] = {
        "System": Category.SYSTEM_TEMPORARY,
        "Business": Category.BUSINESS_FAIL,
        1: Category.BUSINESS_FAIL,
        2: Category.BUSINESS_TEMPORARY,
        3: Category.SYSTEM_TEMPORARY,
    }

    code: str = Field(min_length=1, alias="code")
    module_name: str = Field(default="", alias="moduleName")
    user_message: str = Field(default="", alias="userMessage")
    debug_message: str = Field(default="", alias="debugMessage")
    stack_trace: str = Field(default="", alias="stackTrace")
    category: Category = Field(alias="category")
    causes: tuple[WireError, ...] = Field(default=(), alias="causes")

    @field_validator("category", mode="before")
    @classmethod
    def _coerce_category(cls, value: object) -> Category:
        if isinstance(value, Category):
            return value
        if isinstance(value, bool):
            return Category.UNCLASSIFIED
        if isinstance(value, (str, int)) and value in cls.LEGACY_CATEGORIES:
            return cls.LEGACY_CATEGORIES[value]
        try:
            return Category(value)
        except (TypeError, ValueError):
            return Category.UNCLASSIFIED

    @field_validator("stack_trace", mode="before")
    @classmethod
    def _none_as_empty(cls, value: object) -> object:
        return "" if value is None else value

    @property
    def retryable(self) -> bool:
        return self.category.resolve().retryable

    def walk(self) -> Iterator["WireError"]:
        """Yield this error and every nested cause, depth first."""
        yield self
        for cause in self.causes:
            yield from cause.walk()


class RemoteError(Exception):
    """Raisable carrier for a WireError decoded from another process."""

    def __init__(self, wire: WireError) -> None:
        super().__init__(wire.code)
        self._wire = wire

    @property
    def wire(self) -> WireError:
        return self._wire

    @property
    def code(self) -> str:
        return self._wire.code

    @property
    def category(self) -> Category:
        return self._wire.category

    def __str__(self) -> str:
        return self._wire.debug_message or self._wire.user_message or self._wire.code


WireError.model_rebuild()

__all__ = ["RemoteError", "WireError"]

"""
Contract models for the decision table.

`InputRecord` is the parsed request, `ClassificationResult` is what the
evaluator produces and `ErrorMessage` is the uniform error body returned by
the HTTP layer.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Dict, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    field_validator,
)

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1

Int32 = Annotated[StrictInt, Field(ge=INT32_MIN, le=INT32_MAX)]
FiniteFloat = Annotated[StrictFloat, Field(allow_inf_nan=False)]


class RuleSet(str, Enum):
    """Active variant of the decision table"""
    BASE = "Base"
    VARIANT1 = "Variant1"
    VARIANT2 = "Variant2"


# Codes accepted by earlier clients in the `case` field
LEGACY_RULE_SET_CODES: Dict[str, RuleSet] = {
    "B": RuleSet.BASE,
    "C1": RuleSet.VARIANT1,
    "C2": RuleSet.VARIANT2,
}


class Outcome(str, Enum):
    """Classification tag; the enum value is the wire tag"""
    M = "M"
    P = "P"
    T = "T"
    ERROR = "E"


class InputRecord(BaseModel):
    """Raw request record. Absent fields stay None, they are never defaulted."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    a: Optional[StrictBool] = None
    b: Optional[StrictBool] = None
    c: Optional[StrictBool] = None
    d: Optional[FiniteFloat] = None
    e: Optional[Int32] = None
    f: Optional[Int32] = None
    rule_set: RuleSet = Field(
        default=RuleSet.BASE,
        validation_alias=AliasChoices("ruleSet", "case", "rule_set"),
        serialization_alias="ruleSet",
    )

    @field_validator("rule_set", mode="before")
    @classmethod
    def resolve_rule_set(cls, v: Any) -> Any:
        """Null means Base; legacy B/C1/C2 codes map onto the named variants"""
        if v is None:
            return RuleSet.BASE
        if isinstance(v, str) and v in LEGACY_RULE_SET_CODES:
            return LEGACY_RULE_SET_CODES[v]
        return v


class ClassificationResult(BaseModel):
    """Evaluation result; serialized on the wire as {"h": tag, "k": value}"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    outcome: Outcome = Field(alias="h")
    value: float = Field(default=0.0, alias="k")

    @property
    def is_error(self) -> bool:
        return self.outcome is Outcome.ERROR

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_wire(cls, payload: Dict[str, Any]) -> "ClassificationResult":
        return cls.model_validate(payload)


class ErrorMessage(BaseModel):
    code: int
    message: str
    field: Optional[str] = None

    def to_body(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)

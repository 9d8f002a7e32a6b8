"""
Violation records produced by the schema validator.

Violations are plain data: the validator collects them and returns them in a
ValidationResult instead of raising.
"""
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Tuple

ROOT_PATH = "$"


@dataclass(frozen=True)
class Violation:
    path: str

    rule: ClassVar[str] = "violation"

    @property
    def reason(self) -> str:
        raise NotImplementedError

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "rule": self.rule, "reason": self.reason}

    def __str__(self):
        return f"{self.path}: {self.reason}"


@dataclass(frozen=True)
class MissingRequiredField(Violation):
    rule: ClassVar[str] = "required"

    @property
    def reason(self):
        return "required field is missing"


@dataclass(frozen=True)
class TypeMismatch(Violation):
    expected: str
    actual: str

    rule: ClassVar[str] = "bsonType"

    @property
    def reason(self):
        return f"expected type '{self.expected}', got '{self.actual}'"


@dataclass(frozen=True)
class RangeViolation(Violation):
    bound: Any
    actual: Any
    keyword: str
    exclusive: bool = False

    rule: ClassVar[str] = "range"

    @property
    def reason(self):
        if self.keyword == "minimum":
            op = ">" if self.exclusive else ">="
        else:
            op = "<" if self.exclusive else "<="
        return f"value {self.actual!r} must be {op} {self.bound!r}"


@dataclass(frozen=True)
class LengthViolation(Violation):
    bound: int
    actual: int
    keyword: str

    rule: ClassVar[str] = "length"

    @property
    def reason(self):
        if self.keyword == "minLength":
            return f"length {self.actual} is shorter than minLength {self.bound}"
        return f"length {self.actual} is longer than maxLength {self.bound}"


@dataclass(frozen=True)
class PatternViolation(Violation):
    pattern: str
    actual: str

    rule: ClassVar[str] = "pattern"

    @property
    def reason(self):
        return f"value {self.actual!r} does not match pattern {self.pattern!r}"


@dataclass(frozen=True)
class EnumViolation(Violation):
    allowed: Tuple[Any, ...]
    actual: Any

    rule: ClassVar[str] = "enum"

    @property
    def reason(self):
        return f"value {self.actual!r} is not one of {list(self.allowed)!r}"


@dataclass(frozen=True)
class ArityViolation(Violation):
    bound: int
    actual: int
    keyword: str

    rule: ClassVar[str] = "arity"

    @property
    def reason(self):
        if self.keyword == "minItems":
            return f"array has {self.actual} item(s), at least {self.bound} required"
        return f"array has {self.actual} item(s), at most {self.bound} allowed"


@dataclass(frozen=True)
class UnknownFieldViolation(Violation):
    rule: ClassVar[str] = "additionalProperties"

    @property
    def reason(self):
        return "field is not declared in the schema"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of one validation: accepted iff no violations were collected."""

    violations: Tuple[Violation, ...] = ()

    @property
    def accepted(self) -> bool:
        return not self.violations

    @property
    def status(self) -> str:
        return "accepted" if self.accepted else "rejected"

    def __bool__(self):
        return self.accepted

    def by_path(self, path):
        return [v for v in self.violations if v.path == path]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "accepted": self.accepted,
            "status": self.status,
            "violations": [v.to_dict() for v in self.violations],
        }

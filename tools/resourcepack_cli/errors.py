"""Typed error hierarchy with explicit failure states.

- All domain errors extend PackError and carry structured context
- Input errors are raised before any store is mutated
- Errors are caught at the CLI boundary and formatted cleanly
"""

from __future__ import annotations

from dataclasses import dataclass, field


# -----------------------------------------------------------------------------
# Error Hierarchy
# -----------------------------------------------------------------------------

class PackError(RuntimeError):
    """Base error for all pack operations.

    Never raise PackError directly; always use a specific subclass.
    """
    pass


class InvalidInputError(PackError):
    """Caller-supplied input was rejected before any mutation."""
    pass


class InvalidIdentifierError(InvalidInputError):
    """Resource identifier or namespace is malformed.

    Attributes:
        value: The rejected identifier
        detail: Explanation of the problem
    """
    def __init__(self, value: str, detail: str) -> None:
        self.value = value
        self.detail = detail
        super().__init__(f"Invalid identifier '{value}': {detail}")


class InvalidVariantTagError(InvalidInputError):
    """Custom model data value is not a finite positive integer.

    Attributes:
        value: The rejected value
    """
    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Custom model data must be a positive integer, got {value!r}")


class InvalidMetadataError(InvalidInputError):
    """Pack metadata field is invalid.

    Attributes:
        field_name: The offending pack.mcmeta field
        detail: Explanation of the problem
    """
    def __init__(self, field_name: str, detail: str) -> None:
        self.field_name = field_name
        self.detail = detail
        super().__init__(f"Invalid {field_name}: {detail}")


class InvalidPathError(InvalidInputError):
    """Store path or JSON path expression is malformed.

    Attributes:
        path: The invalid path string
        detail: Explanation of the problem
    """
    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid path '{path}': {detail}")


class PathAccessError(InvalidInputError):
    """Cannot access a JSON path in the target document.

    Attributes:
        path: The path being accessed
        detail: Explanation of the structural mismatch
    """
    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(detail)


class InvalidValueError(InvalidInputError):
    """CLI value could not be parsed.

    Attributes:
        raw_value: The original string
        detail: Explanation of the parse failure
    """
    def __init__(self, raw_value: str, detail: str) -> None:
        self.raw_value = raw_value
        self.detail = detail
        super().__init__(f"Invalid value: {detail}")


class GlyphConflictError(InvalidInputError):
    """Character is already mapped by a bitmap provider in the font.

    Attributes:
        codepoint: The conflicting code point
        font_path: Font document that already declares it
    """
    def __init__(self, codepoint: int, font_path: str) -> None:
        self.codepoint = codepoint
        self.font_path = font_path
        super().__init__(f"U+{codepoint:04X} is already declared in {font_path}")


class DocumentDecodeError(PackError):
    """Structured document bytes could not be parsed.

    Attributes:
        path: The store path that failed to parse
        detail: Parser error message
    """
    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid JSON in {path}: {detail}")


class CodepointSpaceExhaustedError(PackError):
    """Every code point in the reserved private use range is taken.

    Attributes:
        start: First code point of the range
        end: Last code point of the range
    """
    def __init__(self, start: int, end: int) -> None:
        self.start = start
        self.end = end
        super().__init__(f"No free private-use codepoints left in U+{start:04X}-U+{end:04X}")


class NotFoundError(PackError):
    """Entity with the given key does not exist.

    Attributes:
        entity_type: "Template", "Sound", "Document", ...
        entity_id: The key that was searched for
    """
    def __init__(self, entity_type: str, entity_id: str) -> None:
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} '{entity_id}' not found")


class ContainerError(PackError):
    """Pack archive or directory could not be read or written.

    Attributes:
        source: Archive path or description
        detail: Underlying error message
    """
    def __init__(self, source: str, detail: str) -> None:
        self.source = source
        self.detail = detail
        super().__init__(f"Cannot access pack {source}: {detail}")


class ValidationError(PackError):
    """Pack failed validation.

    Attributes:
        issues: List of validation messages
    """
    def __init__(self, issues: list[str]) -> None:
        self.issues = issues
        joined = "\n".join(f" - {issue}" for issue in issues[:30])
        extra = "" if len(issues) <= 30 else f"\n - ... and {len(issues) - 30} more"
        super().__init__(f"Validation failed:\n{joined}{extra}")


# -----------------------------------------------------------------------------
# Validation Results
# -----------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """Single validation issue with structured location.

    Attributes:
        path: Store path of the problematic file (e.g., "pack.mcmeta")
        message: Human-readable description of the problem
        severity: "error" for blocking issues, "warning" or "info" for advisories
        fix: Optional suggestion for resolving the issue
    """
    path: str
    message: str
    severity: str = "error"
    fix: str | None = None

    def __str__(self) -> str:
        text = f"[{self.severity}] {self.path}: {self.message}"
        if self.fix:
            text += f" ({self.fix})"
        return text


@dataclass
class ValidationResult:
    """Aggregated validation result.

    Invariants:
        - is_valid is True iff no issue has severity "error"
    """
    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """True if no errors (warnings and info don't count)."""
        return all(issue.severity != "error" for issue in self.issues)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == "error"]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == "warning"]

    def add(self, path: str, message: str, *, severity: str = "error", fix: str | None = None) -> None:
        """Record a validation issue."""
        self.issues.append(ValidationIssue(path=path, message=message, severity=severity, fix=fix))

    def merge(self, other: "ValidationResult") -> None:
        """Combine issues from another result."""
        self.issues.extend(other.issues)

    def to_error(self) -> ValidationError:
        """Convert to a ValidationError for raising."""
        return ValidationError([str(issue) for issue in self.errors])

    def __bool__(self) -> bool:
        """True if valid (no blocking errors)."""
        return self.is_valid

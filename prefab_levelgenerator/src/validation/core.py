"""
Core data structures for the validation system.

Defines the fundamental types used throughout the validation package:
- Severity: Issue severity levels (INFO, WARN, FAIL)
- ValidationStage: Points where validation occurs
- ValidationIssue: Individual validation finding
- ValidationResult: Collection of issues with pass/fail status
- ValidationError: Exception raised when validation fails
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional


class Severity(Enum):
    """Validation issue severity levels.

    - INFO: Informational, logged but doesn't affect pass/fail
    - WARN: Warning, logged but doesn't block generation
    - FAIL: Error, the catalog or level must not be used
    """
    INFO = auto()
    WARN = auto()
    FAIL = auto()

    def __str__(self) -> str:
        return self.name


class ValidationStage(Enum):
    """Points where validation occurs.

    - CATALOG: When a room template catalog is loaded
    - PLACEMENT: After a level has been generated
    """
    CATALOG = "catalog"
    PLACEMENT = "placement"

    def __str__(self) -> str:
        return self.value


@dataclass
class ValidationIssue:
    """Represents a single validation finding.

    Attributes:
        severity: Issue severity (INFO, WARN, FAIL)
        code: Rule code (e.g., "LVL-001")
        message: Human-readable description
        remediation: Optional suggested fix
        template: Optional template id the issue concerns
        room: Optional room index (or pair) the issue concerns
        entrance: Optional entrance reference the issue concerns
    """
    severity: Severity
    code: str
    message: str
    remediation: Optional[str] = None
    template: Optional[str] = None
    room: Optional[str] = None
    entrance: Optional[str] = None

    def format(self) -> str:
        """Format issue for display.

        Returns:
            [SEVERITY] RULE_ID template=T room=R entrance=E :: message :: fix=FIX
        """
        return (
            f"[{self.severity}] {self.code} "
            f"template={self.template or '-'} room={self.room or '-'} "
            f"entrance={self.entrance or '-'} :: "
            f"{self.message} :: fix={self.remediation or 'N/A'}"
        )

    def __str__(self) -> str:
        return self.format()


@dataclass
class ValidationResult:
    """Collection of validation issues with pass/fail determination."""
    issues: List[ValidationIssue] = field(default_factory=list)
    stage: Optional[ValidationStage] = None

    @property
    def passed(self) -> bool:
        """Check if validation passed (no FAIL issues)."""
        return not any(i.severity == Severity.FAIL for i in self.issues)

    @property
    def failed(self) -> bool:
        return not self.passed

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.WARN]

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.FAIL]

    @property
    def infos(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.INFO]

    def codes(self) -> List[str]:
        return [i.code for i in self.issues]

    def add_issue(self, issue: ValidationIssue) -> None:
        self.issues.append(issue)

    def merge(self, other: 'ValidationResult') -> 'ValidationResult':
        """Merge another result into this one. Returns self for chaining."""
        self.issues.extend(other.issues)
        return self

    def report(self) -> str:
        """Generate a formatted multi-line report of all issues."""
        if not self.issues:
            return "Validation passed: No issues found"

        lines = []
        stage_str = f" ({self.stage})" if self.stage else ""
        status = "PASSED" if self.passed else "FAILED"
        lines.append(f"Validation {status}{stage_str}: {len(self.issues)} issue(s)")
        lines.append("-" * 60)

        # Group by severity
        for severity in [Severity.FAIL, Severity.WARN, Severity.INFO]:
            severity_issues = [i for i in self.issues if i.severity == severity]
            if severity_issues:
                lines.append(f"\n{severity.name} ({len(severity_issues)}):")
                for issue in severity_issues:
                    lines.append(issue.format())

        return "\n".join(lines)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'passed': self.passed,
            'stage': str(self.stage) if self.stage else None,
            'fail_count': len(self.errors),
            'warn_count': len(self.warnings),
            'info_count': len(self.infos),
            'issues': [
                {
                    'severity': str(issue.severity),
                    'code': issue.code,
                    'message': issue.message,
                    'remediation': issue.remediation,
                    'template': issue.template,
                    'room': issue.room,
                    'entrance': issue.entrance,
                }
                for issue in self.issues
            ]
        }


class ValidationError(Exception):
    """Exception raised when validation fails with FAIL severity issues.

    Attributes:
        result: The ValidationResult that caused the failure
    """

    def __init__(self, result: ValidationResult):
        self.result = result
        super().__init__(result.report())

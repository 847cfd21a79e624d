"""
Validation rule definitions.

Each rule has:
- Code: Unique identifier (e.g., "LVL-001")
- Severity: FAIL, WARN, or INFO
- Message template: Human-readable description
- Remediation: Suggested fix

Rules are organized by category:
- CAT: Room template catalog
- LVL: Generated level structure
"""

from dataclasses import dataclass
from typing import Dict, Optional

from .core import Severity, ValidationIssue


@dataclass(frozen=True)
class ValidationRule:
    """Definition of a validation rule."""
    code: str
    severity: Severity
    message_template: str
    remediation_template: Optional[str] = None
    description: Optional[str] = None

    def format_message(self, **kwargs) -> str:
        return self.message_template.format(**kwargs)

    def format_remediation(self, **kwargs) -> Optional[str]:
        if self.remediation_template:
            return self.remediation_template.format(**kwargs)
        return None

    def issue(self, template: Optional[str] = None, room: Optional[str] = None,
              entrance: Optional[str] = None, **kwargs) -> ValidationIssue:
        """Build an issue for this rule, filling both templates from kwargs.

        The location fields are also available to the templates by name.
        """
        fmt = dict(kwargs, template=template, room=room, entrance=entrance)
        return ValidationIssue(
            severity=self.severity,
            code=self.code,
            message=self.format_message(**fmt),
            remediation=self.format_remediation(**fmt),
            template=template,
            room=room,
            entrance=entrance,
        )


# =============================================================================
# CATALOG RULES (CAT)
# =============================================================================

CAT_001 = ValidationRule(
    code="CAT-001",
    severity=Severity.FAIL,
    message_template="Degenerate bounding volume: size={size}",
    remediation_template="Give every bounds axis a positive size",
    description="Overlap tests need a box with positive volume"
)

CAT_002 = ValidationRule(
    code="CAT-002",
    severity=Severity.WARN,
    message_template="Template has no entrances",
    remediation_template="Add at least one entrance socket, or use it only as a root",
    description="A template without sockets can never be attached to another room"
)

CAT_003 = ValidationRule(
    code="CAT-003",
    severity=Severity.INFO,
    message_template="Entrance '{name}' lies {distance:.2f} units outside the bounds",
    remediation_template="Move the socket onto the bounds surface",
    description="Sockets normally sit on the surface of the bounding volume"
)

# =============================================================================
# LEVEL RULES (LVL)
# =============================================================================

LVL_001 = ValidationRule(
    code="LVL-001",
    severity=Severity.FAIL,
    message_template="Rooms {a} and {b} penetrate by {depth:.3f} (tolerance {tolerance})",
    remediation_template="Check the overlap oracle and tolerance used during generation",
    description="No two committed rooms may overlap beyond the tolerance"
)

LVL_002 = ValidationRule(
    code="LVL-002",
    severity=Severity.FAIL,
    message_template="Connected entrances {parent} and {child} are {distance:.3f} apart",
    remediation_template="Entrances joined by a connection must coincide",
    description="The candidate builder aligns the child socket exactly onto the parent entrance"
)

LVL_003 = ValidationRule(
    code="LVL-003",
    severity=Severity.WARN,
    message_template="Connected entrances {parent} ({parent_facing}) and {child} ({child_facing}) do not face each other",
    remediation_template="Enable rotation or author sockets with matching facings",
    description="Alignment is translation-only, so facings can disagree beyond the quarter-turn steps"
)

LVL_004 = ValidationRule(
    code="LVL-004",
    severity=Severity.FAIL,
    message_template="Entrance {entrance} was processed {count} times",
    remediation_template="Each entrance must be visited at most once",
    description="The visited set must guard against reprocessing an entrance"
)

LVL_005 = ValidationRule(
    code="LVL-005",
    severity=Severity.INFO,
    message_template="Repeat window fallback: {message}",
    description="The repeat window excluded every template at least once"
)


ALL_RULES: Dict[str, ValidationRule] = {
    rule.code: rule
    for rule in (CAT_001, CAT_002, CAT_003, LVL_001, LVL_002, LVL_003, LVL_004, LVL_005)
}


def get_rule(code: str) -> Optional[ValidationRule]:
    return ALL_RULES.get(code)

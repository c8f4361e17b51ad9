"""
Reporting and output formatting.

Handles:
- Finding dataclass
- Human-readable, line-oriented output
- JSON output
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import Optional

MALFORMED_SPEC = "malformed-spec"
UNRESOLVABLE_TYPE = "unresolvable-type"
FORBIDDEN_TYPE_PRESENT = "forbidden-type-present"
UNKNOWN_SCHEME = "unknown-scheme"

FAILING_RULES = (MALFORMED_SPEC, UNRESOLVABLE_TYPE, FORBIDDEN_TYPE_PRESENT)

FOUND_HEADER = "The output contained the following forbidden types:"
MALFORMED_FOOTER = "Invalid forbidden type formats. Exiting."
FAILED_FOOTER = "Forbidden types found. Failing."
PASSED_FOOTER = "No forbidden types found."


@dataclass
class Finding:
    """A single result of checking one forbidden-type spec."""
    rule_id: str
    severity: str  # "ERROR", "WARN"
    spec: str
    message: str
    evidence: str = ""
    source: Optional[str] = None

    @property
    def fails(self) -> bool:
        return self.rule_id in FAILING_RULES

    def __str__(self) -> str:
        return f"{self.severity} {self.rule_id} [{self.spec}] -- {self.message}"


class Reporter:
    """Collects findings in encounter order and renders the verdict."""

    def __init__(self) -> None:
        self.findings: list[Finding] = []
        self.checked: list[str] = []

    def add(self, finding: Finding) -> None:
        self.findings.append(finding)

    def of_rule(self, rule_id: str) -> list[Finding]:
        return [f for f in self.findings if f.rule_id == rule_id]

    @property
    def malformed(self) -> list[Finding]:
        return self.of_rule(MALFORMED_SPEC)

    @property
    def errors(self) -> list[Finding]:
        return [f for f in self.findings if f.severity == "ERROR"]

    @property
    def warnings(self) -> list[Finding]:
        return [f for f in self.findings if f.severity == "WARN"]

    @property
    def passed(self) -> bool:
        return not any(f.fails for f in self.findings)

    @property
    def exit_code(self) -> int:
        return 0 if self.passed else 1

    def render_human(self) -> str:
        """Render findings as the line-oriented report."""
        out: list[str] = []
        for f in self.findings:
            if f.rule_id in (UNKNOWN_SCHEME, MALFORMED_SPEC):
                out.append(f.message)
            elif f.rule_id == UNRESOLVABLE_TYPE and f.evidence:
                out.append(f.evidence)

        found = [f for f in self.findings if f.rule_id in (UNRESOLVABLE_TYPE, FORBIDDEN_TYPE_PRESENT)]
        if found:
            out.append(FOUND_HEADER)
            out.extend(f.message for f in found)

        if self.malformed:
            out.append(MALFORMED_FOOTER)
        elif not self.passed:
            out.append(FAILED_FOOTER)
        else:
            out.append(PASSED_FOOTER)
        return "\n".join(out)

    def to_dict(self) -> dict:
        return {
            "passed": self.passed,
            "checked": list(self.checked),
            "findings": [asdict(f) for f in self.findings],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

"""Role-keyword department assignment rules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ..core.constants import FALLBACK_ROLE_DEPARTMENT
from .model import Department


@dataclass(frozen=True)
class RoleRule:
    keywords: tuple[str, ...]
    department_name: str

    def matches(self, role: str) -> bool:
        role = role.lower()
        return any(k in role for k in self.keywords)


# Order matters: first matching rule wins.
ROLE_RULES: tuple[RoleRule, ...] = (
    RoleRule(("software", "developer", "engineer", "technical", "programmer", "architect"), "Information Technology"),
    RoleRule(("hr", "human"), "Human Resources"),
    RoleRule(("finance", "accounting", "financial"), "Finance"),
    RoleRule(("marketing", "promotion"), "Marketing"),
    RoleRule(("sales", "business"), "Sales"),
    RoleRule(("qa", "quality", "test"), "Quality Assurance"),
    RoleRule(("research", "r&d"), "Research and Development"),
    RoleRule(("manager", "lead", "director"), "Operations"),
)

# (name, description) of the standard departments, in creation order.
DEFAULT_DEPARTMENTS: tuple[tuple[str, str], ...] = (
    ("Information Technology", "IT Department handling software development and infrastructure"),
    ("Human Resources", "HR Department managing employee relations and policies"),
    ("Finance", "Finance Department handling accounting and financial operations"),
    ("Marketing", "Marketing Department managing promotions and customer relations"),
    ("Operations", "Operations Department managing day-to-day business operations"),
    ("Sales", "Sales Department managing customer acquisition and revenue"),
    ("Research and Development", "R&D Department focusing on innovation and product development"),
    ("Quality Assurance", "QA Department ensuring product and service quality"),
)


def department_name_for_role(role: Optional[str], rules: Sequence[RoleRule] = ROLE_RULES) -> Optional[str]:
    """Name of the first rule matching the role, or None."""
    if not role or not role.strip():
        return None
    for rule in rules:
        if rule.matches(role):
            return rule.department_name
    return None


def default_department(departments: Sequence[Department]) -> Optional[Department]:
    for d in departments:
        if (d.dept_name or "").lower() == FALLBACK_ROLE_DEPARTMENT.lower():
            return d
    return departments[0] if departments else None


def assign_department_by_role(
    role: Optional[str],
    departments: Sequence[Department],
    rules: Sequence[RoleRule] = ROLE_RULES,
) -> Optional[Department]:
    """Pick a department for the role; falls back to the default department."""
    wanted = department_name_for_role(role, rules)
    if wanted:
        for d in departments:
            if (d.dept_name or "").lower() == wanted.lower():
                return d
    return default_department(departments)

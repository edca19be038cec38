"""Directory entries: workers grouped under links."""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Employee:
    """A worker and the rotation week they start on."""

    name: str
    wk: int

    def to_dict(self) -> dict:
        return {"name": self.name, "wk": self.wk}


@dataclass
class Link:
    """A named group of workers from the directory sheet."""

    link: str
    employees: List[Employee] = field(default_factory=list)

    def find(self, name: str) -> Optional[Employee]:
        """Case-insensitive lookup of an employee by name."""
        key = name.strip().lower()
        for emp in self.employees:
            if emp.name.lower() == key:
                return emp
        return None

    def to_dict(self) -> dict:
        return {
            "link": self.link,
            "employees": [e.to_dict() for e in self.employees],
        }

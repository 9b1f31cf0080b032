from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee known to the directory.

    Note: `credential` holds the raw stored value (column `password_hash`);
    interpretation happens in `credentials.classify`.
    """

    id: str
    employee_number: str
    name: str
    credential: Optional[str] = field(default=None, repr=False)
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def has_credential(self) -> bool:
        return bool(self.credential)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Employee":
        return cls(
            id=str(row["id"]),
            employee_number=str(row["employee_number"]),
            name=row["name"],
            credential=row.get("password_hash"),
            last_login=row.get("last_login"),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )

    def to_public_dict(self) -> dict:
        return {
            "id": self.id,
            "employee_number": self.employee_number,
            "name": self.name,
            "has_credential": self.has_credential,
            "last_login": self.last_login.isoformat() if self.last_login else None,
        }

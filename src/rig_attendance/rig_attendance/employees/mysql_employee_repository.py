from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.constants import EMPLOYEE_ID_WIDTH, UNRANKED_DESIGNATION
from ..core.enums import EmployeeStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "id, workspace_id, employee_id, name, designation, designation_order, status, serial_number"


def _to_employee(r: Dict[str, Any]) -> Employee:
    return Employee(
        id=int(r["id"]),
        workspace_id=r["workspace_id"],
        employee_id=r["employee_id"],
        name=r["name"],
        designation=r.get("designation"),
        designation_order=int(r.get("designation_order") or UNRANKED_DESIGNATION),
        status=EmployeeStatus(r.get("status") or EmployeeStatus.ACTIVE.value),
        serial_number=int(r["serial_number"]),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_pk: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE id=%s", (int(employee_pk),))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def list_for_workspace(self, workspace_id: str) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employees
                WHERE workspace_id=%s
                ORDER BY designation_order ASC, name ASC
                """,
                (workspace_id,),
            )
            return [_to_employee(r) for r in fetchall(cur)]

    def list_active(self, workspace_id: str) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employees
                WHERE workspace_id=%s AND status=%s
                ORDER BY designation_order ASC, name ASC
                """,
                (workspace_id, EmployeeStatus.ACTIVE.value),
            )
            return [_to_employee(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        workspace_id: str,
        name: str,
        designation: Optional[str],
        designation_order: int,
        status: EmployeeStatus,
    ) -> Employee:
        with db_cursor(self._conn_factory) as (_, cur):
            # Lock the workspace's serial range so concurrent creates mint distinct numbers.
            cur.execute(
                "SELECT COALESCE(MAX(serial_number), 0) AS max_serial FROM employees WHERE workspace_id=%s FOR UPDATE",
                (workspace_id,),
            )
            r = fetchone(cur)
            serial = int(r["max_serial"] if r else 0) + 1
            employee_id = str(serial).zfill(EMPLOYEE_ID_WIDTH)

            cur.execute(
                """
                INSERT INTO employees(workspace_id, employee_id, name, designation, designation_order, status, serial_number)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (workspace_id, employee_id, name, designation, int(designation_order), status.value, serial),
            )
            return Employee(
                id=int(cur.lastrowid),
                workspace_id=workspace_id,
                employee_id=employee_id,
                name=name,
                designation=designation,
                designation_order=int(designation_order),
                status=status,
                serial_number=serial,
            )

    def update(
        self,
        employee_pk: int,
        *,
        name: str,
        designation: Optional[str],
        designation_order: int,
        status: EmployeeStatus,
    ) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET name=%s, designation=%s, designation_order=%s, status=%s
                WHERE id=%s
                """,
                (name, designation, int(designation_order), status.value, int(employee_pk)),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE id=%s", (int(employee_pk),))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def delete(self, employee_pk: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE id=%s", (int(employee_pk),))
            return cur.rowcount > 0

    def refresh_designation_orders(self, ranks: Dict[str, int], *, default_rank: int) -> int:
        """Re-rank every stored employee from the designation table. Returns rows changed."""
        changed = 0
        with db_cursor(self._conn_factory) as (_, cur):
            for designation, rank in ranks.items():
                cur.execute(
                    "UPDATE employees SET designation_order=%s WHERE designation=%s AND designation_order<>%s",
                    (int(rank), designation, int(rank)),
                )
                changed += cur.rowcount
            placeholders = ",".join(["%s"] * len(ranks))
            cur.execute(
                f"""
                UPDATE employees SET designation_order=%s
                WHERE (designation IS NULL OR designation NOT IN ({placeholders}))
                  AND designation_order<>%s
                """,
                (int(default_rank), *ranks.keys(), int(default_rank)),
            )
            changed += cur.rowcount
        return changed

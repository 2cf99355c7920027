from datetime import date, timedelta

from app.core.config import settings
from app.core.passwords import hash_password
from app.db.session import Database
from app.models.assigned_task import AssignedTask
from app.models.employee import Employee, EmployeeRole
from app.models.todo import Todo

DEMO_PASSWORD = "changeme"


def upsert_employee(
    db,
    email: str,
    name: str,
    department: str,
    manager: Employee | None = None,
    role: EmployeeRole = EmployeeRole.STAFF,
    phone_number: str | None = None,
):
    emp = db.query(Employee).filter(Employee.email == email).one_or_none()
    if emp:
        return emp

    emp = Employee(
        email=email,
        name=name,
        password=hash_password(DEMO_PASSWORD),
        department=department,
        manager_id=manager.employee_id if manager else None,
        role=role,
        phone_number=phone_number,
    )
    db.add(emp)
    db.flush()
    return emp


def seed_tasks(db, manager: Employee, employees: list[Employee]):
    for e in employees:
        if db.query(AssignedTask).filter(AssignedTask.employee_id == e.employee_id).count():
            continue
        db.add(
            AssignedTask(
                employee_id=e.employee_id,
                assigned_by=manager.employee_id,
                title=f"Onboarding checklist for {e.name}",
                due_date=date.today() + timedelta(days=14),
            )
        )
        db.add(Todo(user_id=e.employee_id, title="Read the team handbook"))


def main():
    database = Database(settings.DATABASE_URL)
    try:
        with database.session() as db:
            boss = upsert_employee(
                db, "manager@local.test", "Local Manager", "Management", role=EmployeeRole.MANAGER
            )
            e1 = upsert_employee(db, "alice@local.test", "Alice Engineer", "Engineering", boss, phone_number="555-0101")
            e2 = upsert_employee(db, "bob@local.test", "Bob Engineer", "Engineering", boss, phone_number="555-0102")
            e3 = upsert_employee(db, "carol@local.test", "Carol Sales", "Sales", boss)
            seed_tasks(db, boss, [e1, e2, e3])

            print(f"Seeded employees (password: {DEMO_PASSWORD}):")
            for e in [boss, e1, e2, e3]:
                print(e.employee_id, e.email, e.department, e.role.value)
    finally:
        database.dispose()

if __name__ == "__main__":
    main()

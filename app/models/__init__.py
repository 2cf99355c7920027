from app.models.assigned_task import AssignedTask
from app.models.employee import Employee, EmployeeRole
from app.models.message import Message
from app.models.todo import Todo

__all__ = [ "AssignedTask", "Employee", "EmployeeRole", "Message", "Todo" ]

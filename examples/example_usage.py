"""Example: use the service layer directly (no web layer).

Shows the payslip and department services wired by the container.
"""

from src.employee_management.employee_management.main import create_container


def main():
    container = create_container()

    print(container.dashboard_service.summary())
    print(container.reconciliation_service.reconcile())

    employees = container.employee_service.list_employees(limit=5)
    for emp in employees:
        statement = container.payslip_service.get_payslip(emp.emp_id)
        print(
            f"{statement.emp_name} ({statement.department_name}) "
            f"{statement.month} {statement.year}: net {statement.breakdown.net_salary}"
        )

    print(container.metrics.snapshot())


if __name__ == "__main__":
    main()

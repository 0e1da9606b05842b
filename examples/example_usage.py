"""Example: use the service layer directly (no Flask).

Loads the current month's payroll, prints the totals and the client summary.
"""

from datetime import date

from src.guard_payroll.guard_payroll.config import load_settings
from src.guard_payroll.guard_payroll.container import build_container


def main():
    settings = load_settings()
    container = build_container(backend_config=settings.BACKEND_CONFIG)
    service = container.payroll_sheet_service

    service.load(date.today())
    print(service.build_sheet().totals)
    for client in service.client_summary():
        print(client.client_name, client.guard_count, client.total_net)

    service.gateway.shutdown()


if __name__ == "__main__":
    main()

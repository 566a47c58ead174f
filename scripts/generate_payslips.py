from __future__ import annotations

import argparse
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.employee_management.employee_management.main import create_container


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Generate payslips for every employee for one period.")
    parser.add_argument("--month", help="month number or name (default: current month)")
    parser.add_argument("--year", help="four-digit year (default: current year)")
    args = parser.parse_args(argv)

    container = create_container()
    result = container.payslip_service.generate_all(args.month, args.year)

    print(f"{result.month} {result.year}: generated={result.success_count} failed={result.error_count}")
    for line in result.errors:
        print(f"  - {line}")
    return 1 if result.error_count else 0


if __name__ == "__main__":
    sys.exit(main())

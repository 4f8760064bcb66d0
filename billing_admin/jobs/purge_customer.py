# billing_admin/jobs/purge_customer.py
"""
Deletes a customer and its dependent rows through the HTTP API, one row at a
time, the same way the admin UI does.

    python -m billing_admin.jobs.purge_customer <customer_id> [base_url]
"""
import logging
import sys

from billing_admin.core.logging import setup_logging
from billing_admin.domain.services.cascade import CascadeDeleteOrchestrator, GatewayClient

logger = logging.getLogger(__name__)


def run(customer_id: str, base_url: str | None = None) -> int:
    client = GatewayClient(base_url=base_url)
    report = CascadeDeleteOrchestrator(client).delete_customer(customer_id)

    for table, count in report.deleted.items():
        logger.info("%s: %d deleted", table, count)
    for table, ids in report.failed.items():
        logger.warning("%s: failed for %s", table, ids)
    return 0 if report.complete else 1


def main(argv: list[str]) -> int:
    if len(argv) < 2:
        print(__doc__.strip())
        return 2
    setup_logging()
    return run(argv[1], argv[2] if len(argv) > 2 else None)


if __name__ == "__main__":
    sys.exit(main(sys.argv))

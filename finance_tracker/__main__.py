"""Entry point for `python -m finance_tracker`."""

import logging

from finance_tracker.config import get_settings, setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    setup_logging(settings)
    logger.info(f"Starting finance tracker against {settings.api_url}")

    # Import app after config so argparse runs first
    from finance_tracker.api.client import TransactionsAPI
    from finance_tracker.app import FinanceTrackerApp
    from finance_tracker.store import TransactionStore

    api = TransactionsAPI(settings.api_url, timeout=settings.request_timeout)
    app = FinanceTrackerApp(store=TransactionStore(api))
    app.run()


if __name__ == "__main__":
    main()

from datetime import UTC, datetime

import pytest

from work_orders.domain.models import WorkOrder


@pytest.fixture
def make_order():
    def _make_order(**overrides) -> WorkOrder:
        fields = dict(
            order_id="665599",
            size="1",
            filled="0",
            status="Accepted",
            ticker="BTCUSD",
            mic="LIQD",
            action="BUY",
            timestamp=datetime(2024, 3, 1, 12, 0, tzinfo=UTC),
            last_modified=datetime(2024, 3, 1, 12, 0, tzinfo=UTC),
        )
        fields.update(overrides)
        return WorkOrder(**fields)

    return _make_order

import logging
from unittest.mock import patch

import pytest

from work_orders.cli import parse_args, validate_args
from work_orders.main import main
from work_orders.utils import create_logger


def test_fewer_than_three_arguments_exits_with_usage(capsys):
    with pytest.raises(SystemExit) as exc:
        parse_args(["mongodb://localhost", "user"])

    assert exc.value.code != 0
    assert "usage" in capsys.readouterr().err


def test_defaults():
    args = parse_args(["mongodb://localhost", "user", "pass"])

    assert args.uri == "mongodb://localhost"
    assert args.username == "user"
    assert args.password == "pass"
    assert args.database == "finfabrik"
    assert args.collection == "workOrder"
    assert args.max_pool_size == 10
    assert args.order_id is None


def test_environment_defaults(monkeypatch):
    monkeypatch.setenv("MONGO_DATABASE", "orders")
    monkeypatch.setenv("MONGO_MAX_POOL_SIZE", "3")

    args = parse_args(["mongodb://localhost", "user", "pass"])

    assert args.database == "orders"
    assert args.max_pool_size == 3


def test_validate_rejects_non_positive_pool_size():
    args = parse_args(["mongodb://localhost", "u", "p", "--max-pool-size", "0"])

    with pytest.raises(ValueError, match="max-pool-size"):
        validate_args(args)


def test_main_invalid_uri_fails():
    assert main(["not-a-uri", "user", "pass"]) == 1


@patch("work_orders.main.MongoDataStore")
@patch("work_orders.main.ConnectionManager")
def test_main_prints_latest_orders(mock_manager, mock_store, make_order, capsys):
    mock_store.return_value.get_data.return_value = [make_order(), None]

    assert main(["mongodb://localhost", "user", "pass"]) == 0

    out = capsys.readouterr().out
    assert "order_id: 665599" in out
    assert "(unreadable record)" in out
    mock_manager.return_value.__exit__.assert_called_once()


@patch("work_orders.main.MongoDataStore")
@patch("work_orders.main.ConnectionManager")
def test_main_order_id_not_found(mock_manager, mock_store):
    mock_store.return_value.get_data_by_id.return_value = None

    assert main(["mongodb://localhost", "u", "p", "--order-id", "1"]) == 1
    mock_store.return_value.get_data_by_id.assert_called_once_with("1")


def test_create_logger_defaults_to_project_name():
    logger = create_logger()

    assert logger.name == "work-orders"
    assert logger.level == logging.INFO

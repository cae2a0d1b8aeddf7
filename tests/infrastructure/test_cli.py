"""End-to-end tests for the click request layer."""

import json

import pytest
from click.testing import CliRunner

from storefront.domain.exceptions import (
    ConflictError,
    InsufficientStockError,
    InvalidStatusError,
    NotFoundError,
    ValidationError,
)
from storefront.infrastructure.cli import envelope
from storefront.infrastructure.cli.main import cli


@pytest.fixture
def run(tmp_path):
    runner = CliRunner()
    env = {
        "STOREFRONT_DB_PATH": str(tmp_path / "cli.db"),
        "STOREFRONT_LOG_LEVEL": "CRITICAL",
    }

    def _run(*args):
        result = runner.invoke(cli, list(args), env=env)
        return result, json.loads(result.output) if result.output.strip() else None

    return _run


@pytest.fixture
def pizza(run):
    result, body = run(
        "product", "add", "--name", "Pizza", "--price", "25.90", "--stock", "10",
        "--option", "size=small|large",
    )
    assert result.exit_code == 0, result.output
    return body["data"]["id"]


class TestOrderCommands:

    def test_create_then_show(self, run, pizza):
        items = json.dumps([{"productId": pizza, "quantity": 2, "options": {"size": "large"}}])
        result, body = run("order", "create", "--user", "1", "--items", items)

        assert result.exit_code == 0, result.output
        assert body["status"] == "success"
        assert body["data"]["total"] == "51.80"
        order_id = body["data"]["id"]

        result, body = run("order", "show", "--id", str(order_id))
        assert body["data"]["items"][0]["options"] == {"size": "large"}

        _, body = run("product", "list")
        assert body["data"][0]["stock"] == 8

    def test_insufficient_stock_envelope(self, run, pizza):
        items = json.dumps([{"productId": pizza, "quantity": 11}])
        result, body = run("order", "create", "--user", "1", "--items", items)

        assert result.exit_code == 1
        assert body["status"] == "error"
        assert body["code"] == 400
        assert body["details"]["product_name"] == "Pizza"
        assert "Pizza" in body["message"]

    def test_show_missing_order_is_404(self, run):
        result, body = run("order", "show", "--id", "77")
        assert result.exit_code == 1
        assert body["code"] == 404

    def test_status_then_delete_conflict(self, run, pizza):
        items = json.dumps([{"productId": pizza, "quantity": 1}])
        _, body = run("order", "create", "--user", "1", "--items", items)
        order_id = str(body["data"]["id"])

        _, body = run("order", "status", "--id", order_id, "--status", "confirmed")
        assert body["data"]["status"] == "confirmed"

        result, body = run("order", "delete", "--id", order_id)
        assert result.exit_code == 1
        assert body["code"] == 409

    def test_delete_pending(self, run, pizza):
        items = json.dumps([{"productId": pizza, "quantity": 4}])
        _, body = run("order", "create", "--user", "1", "--items", items)

        result, body = run("order", "delete", "--id", str(body["data"]["id"]))

        assert result.exit_code == 0
        assert body["data"]["deleted"] is True
        _, body = run("product", "list")
        assert body["data"][0]["stock"] == 10

    def test_list(self, run, pizza):
        items = json.dumps([{"productId": pizza, "quantity": 1}])
        for user in ("1", "1", "2"):
            run("order", "create", "--user", user, "--items", items)

        result, body = run("order", "list", "--user", "1", "--status", "pending", "--limit", "1")

        assert result.exit_code == 0
        assert body["data"]["total"] == 2
        assert body["data"]["total_pages"] == 2
        assert len(body["data"]["data"]) == 1

    def test_malformed_items_json(self, tmp_path):
        result = CliRunner().invoke(
            cli,
            ["order", "create", "--user", "1", "--items", "[{oops"],
            env={"STOREFRONT_DB_PATH": str(tmp_path / "x.db"), "STOREFRONT_LOG_LEVEL": "CRITICAL"},
        )
        assert result.exit_code == 2
        assert "must be a JSON array" in result.output


class TestEnvelope:

    @pytest.mark.parametrize(
        "exc, code",
        [
            (NotFoundError("x"), 404),
            (ConflictError("x"), 409),
            (ValidationError("x"), 400),
            (InvalidStatusError("lost"), 400),
            (InsufficientStockError(1, "Pizza", 2, 1), 400),
        ],
    )
    def test_status_codes(self, exc, code):
        assert envelope.status_code_for(exc) == code

    def test_success_wraps_data(self):
        body = envelope.success({"id": 1})
        assert body["status"] == "success"
        assert body["data"] == {"id": 1}
        assert "timestamp" in body

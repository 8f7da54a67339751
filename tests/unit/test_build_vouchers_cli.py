"""
Unit tests - Offline voucher conversion from an orders JSON file.
"""

import json

import pytest

from ordervoucher import cli


@pytest.fixture
def orders_file(tmp_path, order_payload):
    path = tmp_path / "orders.json"
    path.write_text(json.dumps([order_payload]), encoding="utf-8")
    return path


@pytest.fixture
def config_file(tmp_path, accounts_payload):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(accounts_payload), encoding="utf-8")
    return path


class TestBuildVouchers:

    def test_writes_voucher_json(self, orders_file, config_file, tmp_path):
        output = tmp_path / "vouchers.json"

        cli.main([str(orders_file), "-c", str(config_file), "-o", str(output)])

        previews = json.loads(output.read_text(encoding="utf-8"))
        assert len(previews) == 1
        assert previews[0]["isBalanced"] is True
        assert previews[0]["voucher"]["VoucherRows"][0] == {
            "Account": "1510",
            "Debit": 100.0,
            "TransactionInformation": "Receivables",
            "Quantity": 1,
        }

    def test_accepts_orders_object(self, tmp_path, order_payload, config_file, capsys):
        path = tmp_path / "orders.json"
        path.write_text(json.dumps({"orders": [order_payload, order_payload]}), encoding="utf-8")

        cli.main([str(path), "-c", str(config_file)])

        previews = json.loads(capsys.readouterr().out)
        assert previews[0]["orderCount"] == 2
        assert previews[0]["totalDebit"] == 200.0

    def test_unbalanced_voucher_exits_with_1(self, tmp_path, order_payload, accounts_payload):
        accounts_payload["accounts"]["order_shipping"] = "3520"
        order_payload["total_price"] = "150.00"
        order_payload["shipping_lines"] = [{"price": "50.00"}]
        orders = tmp_path / "orders.json"
        orders.write_text(json.dumps([order_payload]), encoding="utf-8")
        config = tmp_path / "config.json"
        config.write_text(json.dumps(accounts_payload), encoding="utf-8")
        output = tmp_path / "vouchers.json"

        with pytest.raises(SystemExit) as exc_info:
            cli.main([str(orders), "-c", str(config), "-o", str(output)])

        assert exc_info.value.code == 1
        previews = json.loads(output.read_text(encoding="utf-8"))
        assert previews[0]["isBalanced"] is False

    @pytest.mark.parametrize("flag", ["-c", "-o"])
    def test_flag_without_value_prints_usage(self, orders_file, flag):
        with pytest.raises(SystemExit) as exc_info:
            cli.main([str(orders_file), flag])

        assert exc_info.value.code == cli.__doc__

    def test_flag_followed_by_flag_prints_usage(self, orders_file, config_file):
        with pytest.raises(SystemExit) as exc_info:
            cli.main([str(orders_file), "-o", "-c", str(config_file)])

        assert exc_info.value.code == cli.__doc__

    def test_missing_input_file(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            cli.main([str(tmp_path / "missing.json")])

        assert "File not found" in exc_info.value.code

    def test_broken_config_file(self, orders_file, tmp_path):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"accounts": {}}), encoding="utf-8")

        with pytest.raises(SystemExit) as exc_info:
            cli.main([str(orders_file), "-c", str(config)])

        assert "Invalid config file" in exc_info.value.code

import json

import pytest

from core.exceptions import BaselineLoadException, ConfigLoadException
from pnl.loaders import load_baseline, load_run_config
from conftest import MULTICALL, TOKEN_X, TOKEN_Y, WALLET_A


def _write(path, data) -> str:
    path.write_text(data if isinstance(data, str) else json.dumps(data))
    return str(path)


def _config(**overrides) -> dict:
    config = {
        "chains": [{"name": "eth", "rpc": "http://localhost:8545", "multicall": MULTICALL}],
        "wallets": [WALLET_A],
        "tokens": [TOKEN_X, TOKEN_Y],
    }
    config.update(overrides)
    return config


class TestLoadRunConfig:
    """
    Tests for config file loading.
    """

    def test_valid_config(self, tmp_path):
        config = load_run_config(_write(tmp_path / "config.json", _config()))

        assert [c.name for c in config.chains] == ["eth"]
        assert config.chains[0].multicall == MULTICALL
        assert config.wallets == [WALLET_A]
        assert config.tokens == [TOKEN_X, TOKEN_Y]
        assert config.decimals == {}

    def test_decimals_override(self, tmp_path):
        path = _write(tmp_path / "config.json", _config(decimals={TOKEN_X: 6}))

        assert load_run_config(path).decimals_by_token() == {TOKEN_X.lower(): 6}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigLoadException):
            load_run_config(tmp_path / "absent.json")

    @pytest.mark.parametrize("data", [
        "{not json",
        {"chains": [], "wallets": []},
        _config(wallets=["0x123"]),
        _config(tokens=["b" * 40]),
        _config(chains=[
            {"name": "eth", "rpc": "a", "multicall": MULTICALL},
            {"name": "eth", "rpc": "b", "multicall": MULTICALL},
        ]),
        _config(chains=[{"name": "eth", "rpc": "http://localhost:8545"}]),
        _config(chains=[{"name": "eth", "rpc": "http://localhost:8545", "multicall": ""}]),
        _config(chains=[{"name": "eth", "rpc": "http://localhost:8545", "multicall": "0x5BA1"}]),
        _config(decimals={TOKEN_X: -1}),
    ])
    def test_malformed_config(self, tmp_path, data):
        """
        Test structural and address errors abort the load.

        Parameters
        ----------
        data : str | dict
            Config file content
        """
        with pytest.raises(ConfigLoadException):
            load_run_config(_write(tmp_path / "config.json", data))


class TestLoadBaseline:
    """
    Tests for baseline file loading.
    """

    def test_valid_baseline(self, tmp_path):
        key = f"eth:{WALLET_A}:{TOKEN_X}"
        path = _write(tmp_path / "baseline.json", {key: 5.0, "arb:x:y": 1})

        assert load_baseline(path) == {key: 5.0, "arb:x:y": 1.0}

    def test_missing_file(self, tmp_path):
        with pytest.raises(BaselineLoadException):
            load_baseline(tmp_path / "absent.json")

    @pytest.mark.parametrize("data", [
        "[1, 2]",
        '{"a": "lots"}',
        '{"a": {"b": 1}}',
        "",
        '{"a": "5"}',
        '{"a": true}',
    ])
    def test_malformed_baseline(self, tmp_path, data: str):
        with pytest.raises(BaselineLoadException):
            load_baseline(_write(tmp_path / "baseline.json", data))

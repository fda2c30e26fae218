"""
Tests for configuration tables, source normalization and loaders.
"""

import json
from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from zns_resolution.config import (
    DEFAULT_SOURCE,
    NETWORK_ID_MAP,
    REGISTRY_MAP,
    URL_MAP,
    URL_NETWORK_MAP,
    ClientConfig,
    LoggingConfig,
    ResolutionConfig,
    SourceDefinition,
    load_config_from_env,
    load_config_from_file,
    normalize_source,
    parse_network,
)


class TestTables:
    def test_tables_are_read_only(self) -> None:
        with pytest.raises(TypeError):
            URL_MAP["devnet"] = "http://example.invalid"  # type: ignore[index]
        with pytest.raises(TypeError):
            REGISTRY_MAP["testnet"] = "zil1..."  # type: ignore[index]

    def test_url_network_map_inverts_url_map(self) -> None:
        for network, url in URL_MAP.items():
            assert URL_NETWORK_MAP[url] == network

    def test_network_ids(self) -> None:
        assert NETWORK_ID_MAP[1] == "mainnet"
        assert NETWORK_ID_MAP[333] == "testnet"
        assert NETWORK_ID_MAP[111] == "localnet"


class TestNormalizeSource:
    def test_boolean_selects_mainnet_defaults(self) -> None:
        assert normalize_source(True) == SourceDefinition(url=DEFAULT_SOURCE, network="mainnet")

    def test_known_url_infers_network(self) -> None:
        assert normalize_source("https://dev-api.zilliqa.com") == SourceDefinition(
            url="https://dev-api.zilliqa.com", network="testnet",
        )

    def test_unknown_url_leaves_network_empty(self) -> None:
        source = normalize_source("https://rpc.example.invalid")
        assert source.url == "https://rpc.example.invalid"
        assert source.network is None

    def test_numeric_network_id(self) -> None:
        source = normalize_source({"network": 333})
        assert source.network == "testnet"
        assert source.url == "https://dev-api.zilliqa.com"

    def test_registry_implies_mainnet_defaults(self) -> None:
        source = normalize_source({"registry": "zil1r5verznnwvrzrz6uhveyrlxuhkvccwnju4aehf"})
        assert source.network == "mainnet"
        assert source.url == DEFAULT_SOURCE

    def test_url_with_registry_keeps_url(self) -> None:
        source = normalize_source(SourceDefinition(url="http://localhost:4201", registry="zil1abc"))
        assert source.url == "http://localhost:4201"
        assert source.network == "mainnet"

    @given(network=st.sampled_from(sorted(URL_MAP)))
    @settings(max_examples=10)
    def test_network_name_fills_url(self, network: str) -> None:
        assert normalize_source({"network": network}).url == URL_MAP[network]

    def test_parse_network(self) -> None:
        assert parse_network("333") == 333
        assert parse_network("testnet") == "testnet"
        assert parse_network("") is None
        assert parse_network(None) is None


ENV_NAMES = ("ZNS_URL", "ZNS_NETWORK", "ZNS_REGISTRY", "ZNS_TIMEOUT", "ZNS_LOG_LEVEL", "ZNS_LOG_FORMAT")


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    # setenv first so teardown restores the original state even for
    # variables a .env file sets during the test
    for name in ENV_NAMES:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


class TestLoaders:
    def test_load_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / "zns.json"
        path.write_text(json.dumps({
            "source": {"network": "testnet"},
            "client": {"timeout_seconds": 3},
            "logging": {"level": "debug", "output_format": "json"},
        }), encoding="utf-8")

        config = load_config_from_file(path)

        assert config == ResolutionConfig(
            source=SourceDefinition(url="https://dev-api.zilliqa.com", network="testnet"),
            client=ClientConfig(timeout_seconds=3.0),
            logging=LoggingConfig(level="debug", output_format="json"),
        )

    def test_missing_file(self, tmp_path: Path) -> None:
        assert load_config_from_file(tmp_path / "absent.json") is None

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        assert load_config_from_file(path) is None

    def test_load_from_env(self, tmp_path: Path, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("ZNS_NETWORK", "111")
        clean_env.setenv("ZNS_TIMEOUT", "2.5")
        clean_env.setenv("ZNS_LOG_FORMAT", "both")

        config = load_config_from_env(dotenv_path=tmp_path / ".env")

        assert config.source == SourceDefinition(url="http://localhost:4201", network="localnet")
        assert config.client.timeout_seconds == 2.5
        assert config.logging.output_format == "both"

    def test_env_defaults(self, tmp_path: Path, clean_env: pytest.MonkeyPatch) -> None:
        config = load_config_from_env(dotenv_path=tmp_path / ".env")

        assert config.source == normalize_source(True)
        assert config.client.timeout_seconds == 10.0
        assert config.logging == LoggingConfig()

    def test_bad_timeout_falls_back(self, tmp_path: Path, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("ZNS_TIMEOUT", "soon")
        assert load_config_from_env(dotenv_path=tmp_path / ".env").client.timeout_seconds == 10.0

    def test_dotenv_file_is_read(self, tmp_path: Path, clean_env: pytest.MonkeyPatch) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("ZNS_URL=https://dev-api.zilliqa.com\n", encoding="utf-8")

        config = load_config_from_env(dotenv_path=env_file)

        assert config.source.network == "testnet"

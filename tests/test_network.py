import ipaddress
import logging

import pytest

from bwd.config.errors import MalformedDocumentError, UnknownVariantError
from bwd.config.network import (
    DnsNetworkConfig,
    PeersNetworkConfig,
    SocketAddress,
    parse_networks,
    parse_socket_address,
)


class TestSocketAddress:
    def test_ipv4(self):
        address = parse_socket_address("1.2.3.4:124")
        assert address == SocketAddress(ipaddress.ip_address("1.2.3.4"), 124)
        assert str(address) == "1.2.3.4:124"

    def test_ipv6(self):
        address = parse_socket_address("[::1]:8080")
        assert address.ip == ipaddress.ip_address("::1")
        assert str(address) == "[::1]:8080"

    @pytest.mark.parametrize("text", [
        "1.2.3.4",
        ":124",
        "::1:80",
        "example.com:80",
        "1.2.3.4:port",
        "1.2.3.4:70000",
        "1.2.3.4:\u00b2",
        "1.2.3.4:\u0661\u0662\u0664",
    ])
    def test_invalid(self, text):
        with pytest.raises(MalformedDocumentError):
            parse_socket_address(text, "network[0].peers[0]")


class TestParseNetworks:
    def test_declared_order(self):
        networks = parse_networks([
            {"type": "dns", "domain": "zer.ooo"},
            {"type": "peers", "peers": ["1.2.3.4:124", "1.2.3.4:124", "5.6.7.8:1"]},
        ])
        assert len(networks) == 2
        assert networks[0] == DnsNetworkConfig(domain="zer.ooo")
        assert isinstance(networks[1], PeersNetworkConfig)
        assert [str(p) for p in networks[1].peers] == ["1.2.3.4:124", "1.2.3.4:124", "5.6.7.8:1"]

    def test_empty(self):
        assert parse_networks([]) == []

    def test_peers_default_empty(self):
        assert parse_networks([{"type": "peers"}]) == [PeersNetworkConfig()]

    def test_unknown_type(self):
        with pytest.raises(UnknownVariantError) as exc:
            parse_networks([{"type": "carrier-pigeon"}])
        assert exc.value.value == "carrier-pigeon"
        assert "carrier-pigeon" in str(exc.value)
        assert exc.value.path == "network[0].type"

    def test_missing_type(self):
        with pytest.raises(MalformedDocumentError):
            parse_networks([{"domain": "zer.ooo"}])

    def test_unknown_field(self):
        with pytest.raises(MalformedDocumentError) as exc:
            parse_networks([{"type": "dns", "domain": "zer.ooo", "port": 53}])
        assert exc.value.path == "network[0].port"

    def test_every_entry_evaluated(self, caplog):
        with caplog.at_level(logging.ERROR, logger="bwd.config.network"):
            with pytest.raises(UnknownVariantError) as exc:
                parse_networks([
                    {"type": "carrier-pigeon"},
                    {"type": "dns", "domain": "zer.ooo"},
                    {"type": "dns"},
                ])
        assert exc.value.path == "network[0].type"
        assert "network[2].domain" in caplog.text

    def test_not_an_array(self):
        with pytest.raises(MalformedDocumentError):
            parse_networks({"type": "dns"})

    def test_document(self):
        networks = parse_networks([
            {"type": "dns", "domain": "zer.ooo"},
            {"type": "peers", "peers": ["[::1]:5"]},
        ])
        assert [n.to_document() for n in networks] == [
            {"type": "dns", "domain": "zer.ooo"},
            {"type": "peers", "peers": ["[::1]:5"]},
        ]

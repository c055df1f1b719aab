import pytest

from bwclient.cli import main, normalize_endpoint, read_name
from bwclient.connection import parse_endpoint


def test_normalize_adds_scheme_and_device():
    assert normalize_endpoint("localhost:9002") == "n1:tcp://localhost:9002"


@pytest.mark.parametrize("url", ["tcp://localhost:9002", "TCP://localhost:9002"])
def test_normalize_keeps_existing_scheme(url):
    assert normalize_endpoint(url) == "n1:" + url


def test_normalize_round_trips_through_parse_endpoint():
    assert parse_endpoint(normalize_endpoint(" example.com:9002\n")) == ("example.com", 9002)


def test_normalize_limits_input_length():
    result = normalize_endpoint("tcp://" + "h" * 200)
    assert result.startswith("n1:tcp://")
    assert len(result) == len("n1:") + 59


def test_read_name_truncates_to_eight():
    assert read_name("alexander\n") == "alexande"


def test_read_name_drops_unprintable():
    assert read_name("b\x01o\tb\r\n") == "bob"


def test_main_rejects_endpoint_without_port(capsys):
    assert main(["localhost", "--name", "bob"]) == 1
    assert "Error" in capsys.readouterr().err


def test_main_rejects_unknown_platform():
    with pytest.raises(SystemExit):
        main(["localhost:9002", "--platform", "vic20"])
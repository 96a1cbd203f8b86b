# tests/test_cli.py
import pytest

from routecheck.cli import main
from routecheck.exceptions import TransportInitError
from routecheck.prober.fake import PathProber

DEST = "203.0.113.9"
PATH = ["10.0.0.1", "10.0.1.1", "192.168.5.1", "198.51.100.1"]


class Factory:
    """Counts transport creations and hands back one prober."""
    def __init__(self, prober=None, error=None):
        self.prober = prober or PathProber(DEST, PATH)
        self.error = error
        self.created = 0

    def __call__(self):
        self.created += 1
        if self.error:
            raise self.error
        return self.prober


def test_no_arguments_prints_usage(capsys):
    factory = Factory()
    assert main([], prober_factory=factory) == 1
    assert "usage: routecheck" in capsys.readouterr().out
    assert factory.created == 0


def test_report_success(capsys):
    factory = Factory()
    code = main(["-d", DEST, "-gw", "192.168.5.1", "-gw", "172.16.0.1"], prober_factory=factory)
    out = capsys.readouterr().out.splitlines()

    assert code == 0
    assert out == [
        f"Destination:{DEST}:replied",
        "Gateway:192.168.5.1:replied",
        "Gateway:172.16.0.1:no reply",
    ]
    assert factory.prober.closed


def test_flags_are_order_independent(capsys):
    factory = Factory()
    code = main(["-gw", "10.0.0.1", "-ttl", "8", "-timeout", "250", "-d", DEST], prober_factory=factory)
    assert code == 0
    assert [ttl for _, ttl, _ in factory.prober.calls] == [8, 1, 2, 3, 4, 5, 6, 7]
    assert {t for _, _, t in factory.prober.calls} == {250}


def test_no_gateways_still_checks_destination(capsys):
    code = main(["-d", DEST], prober_factory=Factory())
    out = capsys.readouterr().out.splitlines()
    assert code == 0
    assert out == ["No gateways specified", f"Destination:{DEST}:replied"]


def test_invalid_destination_exits_without_probing(capsys):
    factory = Factory()
    code = main(["-d", "not-an-ip", "-gw", "10.0.0.1"], prober_factory=factory)
    assert code == 2
    assert "No destination specified" in capsys.readouterr().out
    assert factory.created == 0
    assert factory.prober.calls == []


def test_invalid_repeat_keeps_earlier_destination(capsys):
    code = main(["-d", DEST, "-d", "999.1.1.1"], prober_factory=Factory())
    assert code == 0
    assert f"Destination:{DEST}:replied" in capsys.readouterr().out


def test_invalid_gateway_is_skipped(capsys):
    code = main(["-d", DEST, "-gw", "bogus", "-gw", "10.0.1.1"], prober_factory=Factory())
    lines = [l for l in capsys.readouterr().out.splitlines() if l.startswith("Gateway:")]
    assert code == 0
    assert lines == ["Gateway:10.0.1.1:replied"]


def test_duplicate_gateways_both_reply(capsys):
    code = main(["-d", DEST, "-gw", "10.0.1.1", "-gw", "10.0.1.1"], prober_factory=Factory())
    lines = [l for l in capsys.readouterr().out.splitlines() if l.startswith("Gateway:")]
    assert code == 0
    assert lines == ["Gateway:10.0.1.1:replied", "Gateway:10.0.1.1:replied"]


def test_icmp_init_failure(capsys):
    factory = Factory(error=TransportInitError("no raw sockets"))
    assert main(["-v", "-d", DEST], prober_factory=factory) == 3
    assert "Could not create ICMP handle" in capsys.readouterr().out


def test_unreachable_destination(capsys):
    factory = Factory(prober=PathProber(DEST, PATH, reachable=False))
    code = main(["-v", "-d", DEST, "-gw", "10.0.0.1", "-timeout", "750"], prober_factory=factory)
    out = capsys.readouterr().out

    assert code == 4
    assert len(factory.prober.calls) == 1
    assert "Destination:" not in out
    assert factory.prober.closed
    assert f"Destination {DEST} did not reply within 750ms" in out


def test_verbose_diagnostics(capsys):
    code = main(["-d", DEST, "-gw", "192.168.5.1", "-ttl", "12", "-timeout", "300", "-v"], prober_factory=Factory())
    out = capsys.readouterr().out

    assert code == 0
    assert f"Destination: {DEST}" in out
    assert "Gateway: 192.168.5.1" in out
    assert "Specified Timeout 300" in out
    assert "Specified TTL 12" in out
    assert f"Destination {DEST} replied" in out
    assert "Gateway 192.168.5.1 replied at hop 3" in out


def test_quiet_mode_has_no_diagnostics(capsys):
    main(["-d", DEST, "-gw", "192.168.5.1"], prober_factory=Factory())
    out = capsys.readouterr().out
    assert "replied at hop" not in out
    assert "Destination: " not in out


def test_help_flag_prints_usage_and_continues(capsys):
    code = main(["-help", "-d", DEST], prober_factory=Factory())
    out = capsys.readouterr().out
    assert code == 0
    assert "-timeout" in out
    assert f"Destination:{DEST}:replied" in out


def test_missing_flag_value_is_usage_error():
    with pytest.raises(SystemExit) as exc:
        main(["-d"], prober_factory=Factory())
    assert exc.value.code == 2


def test_stray_token_is_ignored(capsys):
    code = main(["-d", DEST, "extra", "-gw", "10.0.1.1"], prober_factory=Factory())
    out = capsys.readouterr().out.splitlines()
    assert code == 0
    assert out == [f"Destination:{DEST}:replied", "Gateway:10.0.1.1:replied"]


def test_verbose_invalid_literals_print_usage(capsys):
    code = main(["-v", "-d", DEST, "-gw", "bogus"], prober_factory=Factory())
    out = capsys.readouterr().out
    assert code == 0
    assert "Gateway address is invalid bogus" in out
    assert "usage: routecheck" in out


def test_quiet_invalid_literal_prints_no_usage(capsys):
    main(["-d", DEST, "-gw", "bogus"], prober_factory=Factory())
    assert "usage: routecheck" not in capsys.readouterr().out

"""Tests for Prometheus text rendering of probe samples."""

from __future__ import annotations

from mikrotik_exporter.metrics.base import counter, gauge
from mikrotik_exporter.probe.exposition import render
from tests.fakes import key, parse_exposition


def test_render_gauges_and_counters():
    up = gauge("x_interface_up", "Interface running status", ("name",))
    rx = counter("x_interface_rx_bytes_total", "Bytes received", ("name",))
    body = render([
        up.sample(1, "ether1"),
        rx.sample(123456789, "ether1"),
        up.sample(0, "wlan1"),
    ]).decode()

    assert "# TYPE x_interface_up gauge" in body
    assert "# TYPE x_interface_rx_bytes counter" in body
    assert "# HELP x_interface_up Interface running status" in body

    values = parse_exposition(body)
    assert values[key("x_interface_up", name="ether1")] == 1
    assert values[key("x_interface_up", name="wlan1")] == 0
    assert values[key("x_interface_rx_bytes_total", name="ether1")] == 123456789


def test_counter_without_suffix_gets_total():
    rule_bytes = counter("x_firewall_rule_bytes", "Matched bytes", ("id", "table"))
    values = parse_exposition(render([rule_bytes.sample(5000, "*1", "filter")]).decode())
    assert values[key("x_firewall_rule_bytes_total", id="*1", table="filter")] == 5000


def test_label_values_are_escaped():
    info = gauge("x_rule_info", "Rule info", ("comment",))
    comment = 'allow "trusted"\\lan\nnext line'
    values = parse_exposition(render([info.sample(1, comment)]).decode())
    assert values[key("x_rule_info", comment=comment)] == 1


def test_family_declared_once():
    up = gauge("x_up", "Up", ("name",))
    body = render([up.sample(1, "a"), up.sample(1, "b"), up.sample(0, "c")]).decode()
    assert body.count("# TYPE x_up gauge") == 1


def test_render_empty():
    assert render([]) == b""


def test_render_is_isolated_per_call():
    up = gauge("x_up", "Up", ("name",))
    render([up.sample(1, "a")])
    body = render([up.sample(1, "b")]).decode()
    assert 'name="a"' not in body

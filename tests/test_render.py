"""Tests for reply rendering (cli/render.py).

Format helpers are pure; renderer tests capture stdout.
"""

from __future__ import annotations

import pytest

from ctlkit.cli.render import (
    format_address,
    format_engine_info,
    format_frontend_info,
    format_main_info,
    format_prefix,
    format_proposal,
    renderer_for,
)
from ctlkit.core.models import Action
from ctlkit.core.requests import MessageType, ReplyRecord


# ---------------------------------------------------------------------------
# Addresses
# ---------------------------------------------------------------------------

class TestAddresses:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("192.0.2.1", "192.0.2.1"),
            ("2001:db8::1", "2001:db8::1"),
            ("2001:0db8:0000::0001", "2001:db8::1"),
            ("999.1.1.1", "<invalid address>"),
            (None, "<invalid address>"),
        ],
    )
    def test_format_address(self, value: object, expected: str) -> None:
        assert format_address(value) == expected

    def test_prefix_v4(self) -> None:
        assert format_prefix("192.0.2.7", 24, version=4) == "192.0.2.0/24"

    def test_prefix_v6(self) -> None:
        assert format_prefix("2001:db8::1", 64, version=6) == "2001:db8::/64"

    def test_prefix_wrong_family(self) -> None:
        assert format_prefix("2001:db8::1", 64, version=4) == "<invalid IPv4>"

    def test_prefix_missing(self) -> None:
        assert format_prefix(None, None, version=6) == "<invalid IPv6>"


# ---------------------------------------------------------------------------
# Record formats
# ---------------------------------------------------------------------------

class TestRecordFormats:
    def test_main_info(self) -> None:
        assert format_main_info({"text": "hello"}) == "main says: 'hello'"

    def test_frontend_info(self) -> None:
        data = {"opts": 3, "yesno": 1, "integer": 42, "global_text": "g"}
        assert format_frontend_info(data) == "frontend says: 0x3 1 42 'g'"

    def test_frontend_info_without_opts(self) -> None:
        assert format_frontend_info({"global_text": "g"}) == "frontend says: 0 0 'g'"

    def test_proposal(self) -> None:
        data = {
            "xid": 0x1A2B,
            "index": 3,
            "source": 1,
            "mtu": 1500,
            "ifa": "192.0.2.5",
            "gateway": "192.0.2.1",
            "dns1": "bogus",
        }
        assert format_proposal(data) == [
            "xid: 0x1a2b index: 3 source: 1 mtu: 1500",
            f"{'gateway':>20}: 192.0.2.1",
            f"{'ifa':>20}: 192.0.2.5",
            f"{'dns1':>20}: <invalid address>",
            "",
        ]

    def test_engine_info(self) -> None:
        data = {
            "name": "group1",
            "yesno": 1,
            "integer": 7,
            "group_v4address": "192.0.2.0",
            "group_v4_bits": 24,
            "group_v6address": "bogus",
            "group_v6_bits": 64,
        }
        line = format_engine_info(data)
        assert line.startswith("engine says: 'group1          ' yes 7 ")
        assert "192.0.2.0/24" in line
        assert "<invalid IPv6>" in line


# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------

class TestRenderers:
    def test_main_renderer_prints(self, capsys: pytest.CaptureFixture[str]) -> None:
        renderer_for(Action.SHOW_MAIN)(
            ReplyRecord(MessageType.CTL_SHOW_MAIN_INFO, {"text": "hi"}),
        )
        assert "main says: 'hi'" in capsys.readouterr().out

    def test_long_text_stays_on_one_line(self, capsys: pytest.CaptureFixture[str]) -> None:
        text = "x" * 120
        renderer_for(Action.SHOW_MAIN)(
            ReplyRecord(MessageType.CTL_SHOW_MAIN_INFO, {"text": text}),
        )
        assert capsys.readouterr().out == f"main says: '{text}'\n"

    def test_emoji_codes_are_not_replaced(self, capsys: pytest.CaptureFixture[str]) -> None:
        renderer_for(Action.SHOW_MAIN)(
            ReplyRecord(MessageType.CTL_SHOW_MAIN_INFO, {"text": "if :smile: up"}),
        )
        assert capsys.readouterr().out == "main says: 'if :smile: up'\n"

    def test_other_record_types_are_ignored(self, capsys: pytest.CaptureFixture[str]) -> None:
        renderer_for(Action.SHOW_MAIN)(
            ReplyRecord(MessageType.CTL_SHOW_FRONTEND_INFO, {"global_text": "x"}),
        )
        assert capsys.readouterr().out == ""

    def test_daemon_text_is_not_markup(self, capsys: pytest.CaptureFixture[str]) -> None:
        renderer_for(Action.SHOW_MAIN)(
            ReplyRecord(MessageType.CTL_SHOW_MAIN_INFO, {"text": "[bold]x[/bold]"}),
        )
        assert "[bold]x[/bold]" in capsys.readouterr().out

    @pytest.mark.parametrize(
        "action", [Action.SHOW_PROPOSALS, Action.SHOW_DHCLIENT, Action.SHOW_SLAAC],
    )
    def test_proposal_renderers_accept_both_sources(
        self, action: Action, capsys: pytest.CaptureFixture[str],
    ) -> None:
        render = renderer_for(action)
        render(ReplyRecord(MessageType.CTL_SHOW_DHCLIENT, {"xid": 1}))
        render(ReplyRecord(MessageType.CTL_SHOW_SLAAC, {"xid": 2}))
        output = capsys.readouterr().out
        assert "xid: 0x1 " in output
        assert "xid: 0x2 " in output

    def test_action_without_renderer_prints_nothing(self, capsys: pytest.CaptureFixture[str]) -> None:
        renderer_for(Action.RELOAD)(
            ReplyRecord(MessageType.CTL_SHOW_MAIN_INFO, {"text": "hi"}),
        )
        assert capsys.readouterr().out == ""

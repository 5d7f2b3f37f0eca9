"""Tests for the interactive host menu."""

from tests.fakes import FakeProber, scripted_input
from sshmenu.config import HostEntry, LatencyStatus
from sshmenu.selector import REFRESH_LABEL, build_menu_rows, render_menu, select_host


def make_hosts():
    return {
        "charlie": HostEntry("charlie"),
        "alpha": HostEntry("alpha", hostname="10.0.0.1", username="ops"),
        "bravo": HostEntry("bravo"),
    }


class TestBuildMenuRows:
    def test_refresh_first_then_sorted_hosts(self):
        rows = build_menu_rows(make_hosts())

        assert rows[0][:2] == [0, REFRESH_LABEL]
        assert [row[1] for row in rows[1:]] == ["alpha", "bravo", "charlie"]
        assert [row[0] for row in rows[1:]] == [1, 2, 3]

    def test_user_and_latency_annotations(self):
        hosts = make_hosts()
        hosts["alpha"].record_probe(3.14159)
        hosts["bravo"].record_probe(None)

        rows = build_menu_rows(hosts)

        assert rows[1] == [1, "alpha", "ops", "3.1 ms"]
        assert rows[2] == [2, "bravo", "", "unreachable"]
        assert rows[3] == [3, "charlie", "", ""]

    def test_render_includes_headers_and_hosts(self):
        text = render_menu(make_hosts())
        assert "Host" in text
        assert "Latency" in text
        assert "charlie" in text
        assert REFRESH_LABEL in text


class TestSelectHost:
    def test_selecting_a_host_returns_its_alias(self, capsys):
        prober = FakeProber()

        selected = select_host(make_hosts(), prober, input_func=scripted_input("2"))

        assert selected == "bravo"
        assert prober.calls == []
        assert "Select a host" in capsys.readouterr().out

    def test_refresh_probes_all_hosts_and_keeps_looping(self, capsys):
        hosts = make_hosts()
        prober = FakeProber({"alpha": 12.0, "bravo": None, "charlie": 30.0})
        answers = scripted_input("0", "r", "1")

        selected = select_host(hosts, prober, input_func=answers)

        assert selected == "alpha"
        assert prober.calls == ["alpha", "bravo", "charlie"] * 2
        assert hosts["alpha"].latency == 12.0
        assert hosts["bravo"].status is LatencyStatus.UNREACHABLE
        out = capsys.readouterr().out
        assert out.count("Select a host") == 3
        assert "12.0 ms" in out

    def test_refresh_alone_never_terminates_with_a_host(self):
        prober = FakeProber(default=None)

        selected = select_host(make_hosts(), prober, input_func=scripted_input("0", "0", "0"))

        assert selected is None
        assert len(prober.calls) == 9

    def test_quit(self):
        assert select_host(make_hosts(), FakeProber(), input_func=scripted_input("q")) is None

    def test_eof_cancels(self):
        assert select_host(make_hosts(), FakeProber(), input_func=scripted_input()) is None

    def test_keyboard_interrupt_cancels(self):
        def interrupted(prompt=""):
            raise KeyboardInterrupt

        assert select_host(make_hosts(), FakeProber(), input_func=interrupted) is None

    def test_invalid_input_prompts_again(self, capsys):
        answers = scripted_input("banana", "7", "-1", " 3 ")

        selected = select_host(make_hosts(), FakeProber(), input_func=answers)

        assert selected == "charlie"
        assert len(answers.prompts) == 4
        out = capsys.readouterr().out
        assert "Invalid input" in out
        assert "Invalid number" in out

    def test_prompt_shows_range(self):
        answers = scripted_input("q")
        select_host(make_hosts(), FakeProber(), input_func=answers)
        assert "0-3" in answers.prompts[0]

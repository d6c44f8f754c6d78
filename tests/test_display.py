"""
Tests for terminal rendering and the interactive loop.

Shows sample frames for each scenario. Run with:
    pytest tests/test_display.py -v
    pytest tests/test_display.py -v -s   # see actual frames
"""

import contextlib
import importlib
import io

import pytest
from blessed.keyboard import Keystroke

from commitform.cli.loop import (
    EventLoop,
    Outcome,
    Session,
    TerminalError,
    translate_key,
)
from commitform.form import CommitDraft, InterruptEvent, KeyEvent, ResizeEvent, build_commit_form
from commitform.git import GitError
from commitform.output import Colors, hex_color, pad, strip_ansi, truncate, visible_len
from commitform.ui import Theme, compute, render, render_active, render_completed, render_form_pane, render_status_pane

cli_main = importlib.import_module("commitform.cli.main")

SCENARIO_KEYS = ['\r', *'api', '\r', *'1234', '\r', *'add retries', '\r', '\r', 'y', '\r']


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

class FakeTerminal:
    """Just enough of blessed.Terminal for the event loop."""

    home = '<frame>'
    clear_eol = ''
    clear_eos = ''

    def __init__(self, keys, width=120, height=40, resize_at=None):
        self.stream = io.StringIO()
        self.keys = [Keystroke(ucs=k) for k in keys]
        self.width = width
        self.height = height
        self.resize_at = resize_at or {}
        self.reads = 0
        self.modes = []

    def inkey(self, timeout=None):
        if self.reads in self.resize_at:
            self.width, self.height = self.resize_at[self.reads]
        self.reads += 1
        if not self.keys:
            # Out of scripted input: behave like ctrl+c under a real tty
            raise KeyboardInterrupt
        return self.keys.pop(0)

    def move_yx(self, y, x):
        return ''

    @contextlib.contextmanager
    def _mode(self, name):
        self.modes.append(name)
        yield

    def fullscreen(self):
        return self._mode('fullscreen')

    def raw(self):
        return self._mode('raw')

    def hidden_cursor(self):
        return self._mode('hidden_cursor')

    @property
    def frames(self):
        return self.stream.getvalue().count(self.home)


@pytest.fixture
def theme():
    return Theme.plain()


@pytest.fixture
def form():
    return build_commit_form()


@pytest.fixture
def print_sample(capsys):
    """Return a function that replays a frame for -s viewing."""
    def _print(lines):
        with capsys.disabled():
            print('\n'.join(lines))
    return _print


def press(form, keys):
    for key in keys:
        event = translate_key(Keystroke(ucs=key))
        if event is not None:
            form.dispatch(event)


# ---------------------------------------------------------------------------
# Form pane
# ---------------------------------------------------------------------------

class TestFormPane:

    def test_type_step_lists_options(self, form, theme):
        lines = render_form_pane(form, theme, 80)

        assert "Step 1 of 2 · Type" in lines
        assert "┃ Choose your type of commits" in lines
        assert "┃ > Feature" in lines
        assert "┃   Maintenance" in lines
        assert "esc quit" in lines[-2]

    def test_only_current_step_is_drawn(self, form, theme):
        press(form, ['\r'])
        text = '\n'.join(render_form_pane(form, theme, 80))

        assert "What's your scope?" in text
        assert "All done?" in text
        assert "Choose your type of commits" not in text

    def test_focused_text_shows_cursor(self, form, theme):
        press(form, ['\r', *'api'])
        lines = render_form_pane(form, theme, 80)
        assert "┃ > api_" in lines

    def test_inline_error_after_refused_confirm(self, form, theme):
        press(form, SCENARIO_KEYS[:-2] + ['\r'])
        lines = render_form_pane(form, theme, 80)
        assert "┃ * Welp, finish up then" in lines

    def test_confirm_buttons(self, form, theme):
        press(form, SCENARIO_KEYS[:-1])
        text = '\n'.join(render_form_pane(form, theme, 80))
        assert "[Yes]" in text
        assert "Wait, no" in text

    def test_description_counter(self, form, theme):
        press(form, ['\r', *'api', '\r', *'1', '\r', *'t', '\r', *'hello'])
        text = '\n'.join(render_form_pane(form, theme, 80))
        assert "5/400" in text

    def test_completed_form_has_no_pane(self, form, theme):
        press(form, SCENARIO_KEYS)
        assert render_form_pane(form, theme, 80) == []


# ---------------------------------------------------------------------------
# Status pane
# ---------------------------------------------------------------------------

class TestStatusPane:

    def test_box_has_exact_size(self, theme):
        lines = render_status_pane(CommitDraft(), theme, 40, 15)

        assert len(lines) == 15
        assert all(visible_len(line) == 40 for line in lines)
        assert lines[0].startswith('╭') and lines[0].endswith('╮')
        assert lines[-1].startswith('╰') and lines[-1].endswith('╯')

    def test_unset_fields_stay_blank_in_place(self, theme):
        lines = render_status_pane(CommitDraft(commit_type="feat", title="x"), theme, 40, 15)

        assert "Current Commit" in lines[1]
        assert "Commit Type: feat" in lines[2]
        assert lines[3][1:-1].strip() == ''   # Scope
        assert lines[4][1:-1].strip() == ''   # Work Item ID
        assert "Title: x" in lines[5]
        assert "Completed Commit" in lines[8]

    def test_summary_line(self, theme):
        draft = CommitDraft("fix", "db", "42", "close cursors", "Leaked on retry.")
        text = '\n'.join(render_status_pane(draft, theme, 40, 15))
        assert "fix(db)[42]: close cursors" in text
        assert "Leaked on retry." in text

    def test_multiline_description_gets_own_rows(self, theme):
        draft = CommitDraft("feat", "api", "1", "t", "a\nb")
        lines = render_status_pane(draft, theme, 40, 15)

        assert all('\n' not in line for line in lines)
        assert all(visible_len(line) == 40 for line in lines)
        assert "Description(Optional): a" in lines[6]
        assert lines[7][1:-1].strip() == 'b'

    def test_wide_characters_keep_box_aligned(self, theme):
        draft = CommitDraft("feat", "界面", "1", "修复按钮对齐问题 🎉")
        lines = render_status_pane(draft, theme, 40, 15)
        assert all(visible_len(line) == 40 for line in lines)
        assert all(line.endswith('│') for line in lines[1:-1])

    def test_long_values_wrap_inside_box(self, theme):
        draft = CommitDraft(title="word " * 20)
        lines = render_status_pane(draft, theme, 40, 20)
        assert all(visible_len(line) == 40 for line in lines)

    @pytest.mark.parametrize("width, height", [
        pytest.param(0, 10, id="no-width"),
        pytest.param(40, 0, id="no-height"),
        pytest.param(3, 10, id="too-thin"),
        pytest.param(40, 1, id="too-short"),
    ])
    def test_degenerate_sizes_never_fail(self, theme, width, height):
        lines = render_status_pane(CommitDraft(), theme, width, height)
        assert len(lines) == (height if width > 0 else 0)


# ---------------------------------------------------------------------------
# Whole frame
# ---------------------------------------------------------------------------

class TestFrame:

    def test_two_panes_side_by_side(self, form, theme, print_sample):
        press(form, ['\r', *'api'])
        frame = render(form, 160, 40, theme)
        print_sample(frame)

        text = '\n'.join(frame)
        assert "What's your scope?" in text
        assert "Scope: api" in text
        assert all(visible_len(line) <= 120 for line in frame)
        assert frame[0] == ''

    def test_description_newline_never_reaches_frame(self, form, theme):
        # ctrl+j inserts a newline into the description
        press(form, ['\r', *'api', '\r', '1', '\r', 't', '\r', 'a', '\n', 'b'])
        assert form.field('description').value == "a\nb"

        frame = render(form, 120, 40, theme)
        assert all('\n' not in line for line in frame)
        assert all(visible_len(line) <= 120 for line in frame)
        box = [line for line in frame if '│' in line]
        assert len({visible_len(line) for line in box}) == 1

    def test_status_height_tracks_form(self, form, theme):
        frame = render(form, 120, 60, theme)
        form_lines = render_form_pane(form, theme, 80)
        tops = [i for i, line in enumerate(frame) if '╭' in line]
        bottoms = [i for i, line in enumerate(frame) if '╰' in line]
        assert bottoms[0] - tops[0] + 1 == len(form_lines)

    @pytest.mark.parametrize("width", [0, 10, 30, 60, 90])
    def test_narrow_terminal_truncates(self, form, theme, width):
        frame = render(form, width, 40, theme)
        assert all(visible_len(line) <= max(width, 1) for line in frame)

    def test_frame_clipped_to_terminal_height(self, form, theme):
        assert len(render(form, 120, 10, theme)) == 10

    def test_render_active_uses_given_layout(self, form, theme):
        layout = compute(120, 40, 53, 15)
        frame = render_active(form, layout, theme)
        status_rows = [line for line in frame if '│' in line]
        assert status_rows
        assert all(line.index('│') == 1 + layout.form_width + layout.status_margin_left
                   for line in status_rows)

    def test_completed_frame(self, form, theme):
        press(form, SCENARIO_KEYS)
        assert render_completed(form) == "feat(api)[1234]: add retries\n\n"
        assert render(form, 120, 40, theme) == ["feat(api)[1234]: add retries", "", ""]


# ---------------------------------------------------------------------------
# Theme and output helpers
# ---------------------------------------------------------------------------

class TestTheme:

    def test_plain_theme_adds_no_escapes(self, theme):
        assert theme.error("bad") == "bad"
        assert theme.focus_bar() == "┃ "

    def test_colored_theme_resets(self):
        styled = Theme().status_title("Current Commit")
        assert styled.endswith(Colors.RESET)
        assert strip_ansi(styled) == "Current Commit"

    def test_error_header_on_failed_step(self, form):
        colored = Theme()
        press(form, ['\r', '\r'])
        lines = render_form_pane(form, colored, 80)
        assert colored.error_header in lines[1]


class TestOutputHelpers:

    def test_visible_len_ignores_escapes(self):
        assert visible_len("\033[31mab\033[0m") == 2

    def test_truncate_keeps_escapes_closed(self):
        cut = truncate("\033[31mabcdef\033[0m", 3)
        assert strip_ansi(cut) == "abc"
        assert cut.endswith(Colors.RESET)

    @pytest.mark.parametrize("text, width, expected", [
        pytest.param("ab", 5, "ab   ", id="pads"),
        pytest.param("abcdef", 3, "abc", id="cuts"),
        pytest.param("abc", 0, "", id="zero"),
    ])
    def test_pad(self, text, width, expected):
        assert pad(text, width) == expected

    def test_wide_characters_take_two_columns(self):
        assert visible_len("日本") == 4
        assert visible_len("\033[1m日本\033[0m") == 4

    @pytest.mark.parametrize("text, width, expected", [
        pytest.param("日本語", 5, "日本 ", id="cjk"),
        pytest.param("a日", 2, "a ", id="wide-char-dropped-whole"),
    ])
    def test_pad_wide(self, text, width, expected):
        assert pad(text, width) == expected

    def test_hex_color(self):
        assert hex_color('#fff') == '\033[38;2;255;255;255m'
        assert hex_color('#02BF87', bg=True) == '\033[48;2;2;191;135m'
        assert hex_color('nothex') == ''


# ---------------------------------------------------------------------------
# Key translation
# ---------------------------------------------------------------------------

class TestTranslateKey:

    @pytest.mark.parametrize("keystroke, expected", [
        pytest.param(Keystroke(ucs='a'), KeyEvent.char('a'), id="char"),
        pytest.param(Keystroke(ucs=' '), KeyEvent.char(' '), id="space"),
        pytest.param(Keystroke(ucs='\r', code=343, name='KEY_ENTER'), KeyEvent('enter'), id="enter"),
        pytest.param(Keystroke(ucs='\n', code=343, name='KEY_ENTER'), KeyEvent('ctrl+j'), id="ctrl-j"),
        pytest.param(Keystroke(ucs='\t'), KeyEvent('tab'), id="tab"),
        pytest.param(Keystroke(ucs='\x03'), KeyEvent('ctrl+c'), id="ctrl-c"),
        pytest.param(Keystroke(ucs='\x7f', code=263, name='KEY_BACKSPACE'), KeyEvent('backspace'), id="backspace"),
        pytest.param(Keystroke(ucs='\x1b[Z', code=353, name='KEY_BTAB'), KeyEvent('shift+tab'), id="shift-tab"),
        pytest.param(Keystroke(ucs='\x1b[A', code=259, name='KEY_UP'), KeyEvent('up'), id="up"),
        pytest.param(Keystroke(ucs='\x1b', code=361, name='KEY_ESCAPE'), KeyEvent('esc'), id="esc"),
    ])
    def test_known_keys(self, keystroke, expected):
        assert translate_key(keystroke) == expected

    @pytest.mark.parametrize("keystroke", [
        pytest.param(Keystroke(ucs='\x1b[15~', code=269, name='KEY_F5'), id="function-key"),
        pytest.param(Keystroke(ucs='\x00'), id="nul"),
    ])
    def test_ignored_keys(self, keystroke):
        assert translate_key(keystroke) is None


# ---------------------------------------------------------------------------
# Session: what each event does
# ---------------------------------------------------------------------------

class TestSession:

    @pytest.fixture
    def session(self, form, theme):
        return Session(form, theme, 120, 40)

    def test_q_quits_on_select(self, session):
        session.handle(KeyEvent.char('q'))
        assert session.outcome is Outcome.QUIT
        assert session.result.draft is None

    def test_q_is_typed_into_text(self, session, form):
        session.handle(KeyEvent('enter'))
        session.handle(KeyEvent.char('q'))
        assert session.outcome is None
        assert form.field('scope').value == 'q'

    def test_esc_quits_anywhere(self, session):
        session.handle(KeyEvent('enter'))
        session.handle(KeyEvent('esc'))
        assert session.outcome is Outcome.QUIT

    def test_interrupt_mid_entry(self, session, form):
        """ctrl+c after type and scope: no draft, form never completed."""
        for key in (KeyEvent('enter'), KeyEvent.char('a'), KeyEvent('enter')):
            session.handle(key)
        assert session.handle(KeyEvent('ctrl+c')) is False

        assert session.outcome is Outcome.INTERRUPTED
        assert session.result.draft is None
        assert not form.completed

    def test_signal_interrupt(self, session):
        session.handle(InterruptEvent('signal'))
        assert session.outcome is Outcome.INTERRUPTED

    def test_resize_updates_size(self, session):
        assert session.handle(ResizeEvent(50, 20)) is True
        assert (session.width, session.height) == (50, 20)
        assert all(visible_len(line) <= 50 for line in session.frame())

    def test_events_after_done_are_ignored(self, session, form):
        session.handle(KeyEvent('esc'))
        assert session.handle(KeyEvent('enter')) is False
        assert form.current_step_index == 0

    def test_completion(self, session):
        for key in SCENARIO_KEYS:
            session.handle(translate_key(Keystroke(ucs=key)))
        assert session.outcome is Outcome.COMPLETED
        assert session.result.draft.format() == "feat(api)[1234]: add retries\n\n"


# ---------------------------------------------------------------------------
# Event loop: driven by a fake terminal
# ---------------------------------------------------------------------------

class TestEventLoop:

    def _run(self, form, theme, term):
        session = Session(form, theme, term.width, term.height)
        return EventLoop(session, term, poll_interval=0).run()

    def test_full_session(self, form, theme):
        term = FakeTerminal(SCENARIO_KEYS)
        result = self._run(form, theme, term)

        assert result.outcome is Outcome.COMPLETED
        assert result.draft.format() == "feat(api)[1234]: add retries\n\n"
        assert term.modes == ['fullscreen', 'raw', 'hidden_cursor']
        assert term.keys == []

    def test_interrupt_stops_before_next_render(self, form, theme):
        term = FakeTerminal(['\r', *'api', '\r', '\x03', 'x'])
        result = self._run(form, theme, term)

        assert result.outcome is Outcome.INTERRUPTED
        assert result.draft is None
        # Initial frame plus one per state change; nothing after ctrl+c
        assert term.frames == 1 + 5
        assert len(term.keys) == 1

    def test_resize_triggers_redraw(self, form, theme):
        term = FakeTerminal(['\x1b'], width=120, height=40, resize_at={0: (60, 20)})
        session = Session(form, theme, term.width, term.height)
        result = EventLoop(session, term, poll_interval=0).run()

        assert result.outcome is Outcome.QUIT
        assert term.frames == 2
        assert session.width == 60

    def test_keyboard_interrupt_is_an_interrupt(self, form, theme):
        term = FakeTerminal([])
        result = self._run(form, theme, term)
        assert result.outcome is Outcome.INTERRUPTED

    def test_unchanged_keys_do_not_redraw(self, form, theme):
        # Letters mean nothing to a select field
        term = FakeTerminal(['x', 'z', '\x1b'])
        self._run(form, theme, term)
        assert term.frames == 1


# ---------------------------------------------------------------------------
# main(): exit codes and stdout contract
# ---------------------------------------------------------------------------

class TestMain:

    @pytest.fixture
    def in_repo(self, monkeypatch):
        monkeypatch.setattr(cli_main, "require_repository_root", lambda: None)

    def _use_terminal(self, monkeypatch, keys):
        term = FakeTerminal(keys)
        monkeypatch.setattr(cli_main, "open_terminal", lambda: term)
        return term

    def test_outside_repository(self, monkeypatch, capsys):
        def fail():
            raise GitError("Error! Current directory is NOT a Git Repository")
        monkeypatch.setattr(cli_main, "require_repository_root", fail)

        assert cli_main.main([]) == 1
        captured = capsys.readouterr()
        assert "NOT a Git Repository" in captured.err
        assert captured.out == ""

    def test_completed_prints_message(self, monkeypatch, capsys, in_repo):
        self._use_terminal(monkeypatch, SCENARIO_KEYS)

        assert cli_main.main([]) == 0
        # Exactly the message, nothing appended
        assert capsys.readouterr().out == "feat(api)[1234]: add retries\n\n"

    def test_completed_with_description(self, monkeypatch, capsys, in_repo):
        keys = SCENARIO_KEYS[:-3] + [*'body', '\r', 'y', '\r']
        self._use_terminal(monkeypatch, keys)

        assert cli_main.main([]) == 0
        assert capsys.readouterr().out == "feat(api)[1234]: add retries\n\nbody"

    def test_interrupt_prints_nothing(self, monkeypatch, capsys, in_repo):
        self._use_terminal(monkeypatch, ['\r', *'api', '\x03'])

        assert cli_main.main([]) == 130
        assert capsys.readouterr().out == ""

    def test_quit_is_clean(self, monkeypatch, capsys, in_repo):
        self._use_terminal(monkeypatch, ['q'])

        assert cli_main.main([]) == 0
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Cancelled." in captured.err

    def test_terminal_failure(self, monkeypatch, capsys, in_repo):
        def no_tty():
            raise TerminalError("commit-form needs an interactive terminal")
        monkeypatch.setattr(cli_main, "open_terminal", no_tty)

        assert cli_main.main([]) == 1
        assert "interactive terminal" in capsys.readouterr().err

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            cli_main.main(['--version'])
        assert exc.value.code == 0
        assert "1.0.0" in capsys.readouterr().out

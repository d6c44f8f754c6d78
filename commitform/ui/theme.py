"""Theme - colors and glyphs used by fields and the frame renderer."""

from dataclasses import dataclass

from commitform.output import Colors, color256, hex_color

RED = '#FE5F86'
INDIGO = '#7571F9'
GREEN = '#02BF87'


@dataclass(frozen=True)
class Theme:
    """Maps each visual role to an escape sequence; plain when disabled."""
    enabled: bool = True
    header: str = hex_color(INDIGO) + Colors.BOLD
    border: str = hex_color(INDIGO)
    status_header: str = hex_color(GREEN) + Colors.BOLD
    highlight: str = color256(212)
    error_header: str = hex_color(RED) + Colors.BOLD
    error_text: str = hex_color(RED)
    help_text: str = color256(240)
    dimmed: str = Colors.DIM
    active_button: str = hex_color(INDIGO, bg=True) + Colors.BOLD
    idle_button: str = color256(240)

    @classmethod
    def plain(cls) -> 'Theme':
        return cls(enabled=False)

    def paint(self, text: str, codes: str) -> str:
        if not self.enabled or not text:
            return text
        return f"{codes}{text}{Colors.RESET}"

    # Field roles

    def field_title(self, text: str, focused: bool) -> str:
        return self.paint(text, self.header) if focused else self.paint(text, self.dimmed)

    def focus_bar(self) -> str:
        return self.paint('┃ ', self.border)

    def cursor(self) -> str:
        return self.paint(' ', Colors.INVERT) if self.enabled else '_'

    def selected(self, text: str) -> str:
        return self.paint(text, self.highlight)

    def button(self, text: str, active: bool) -> str:
        label = f" {text} "
        if not self.enabled:
            return f"[{text}]" if active else label
        return self.paint(label, self.active_button if active else self.idle_button)

    def error(self, text: str) -> str:
        return self.paint(text, self.error_text)

    def dim(self, text: str) -> str:
        return self.paint(text, self.dimmed)

    # Frame roles

    def step_header(self, text: str, has_error: bool) -> str:
        return self.paint(text, self.error_header if has_error else self.header)

    def status_title(self, text: str) -> str:
        return self.paint(text, self.status_header)

    def emphasis(self, text: str) -> str:
        return self.paint(text, self.highlight)

    def help(self, text: str) -> str:
        return self.paint(text, self.help_text)

    def frame(self, text: str) -> str:
        return self.paint(text, self.border)

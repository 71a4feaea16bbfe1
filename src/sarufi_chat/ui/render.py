"""
Frame rendering: a pure function of SessionState.
"""

from sarufi_chat.ui.state import BotList, Screen, SessionState, TextInput
from sarufi_chat.ui.wrap import word_wrap

TRANSCRIPT_WIDTH = 50
CURSOR = "█"


def render_bot_list(bots: BotList) -> str:
    lines = [bots.title, ""]
    if not bots.items:
        lines.append("No items.")
        return "\n".join(lines)
    for i, bot in enumerate(bots.items):
        gutter = "│ " if i == bots.cursor else "  "
        lines.append(f"{gutter}{bot.name}")
        lines.append(f"{gutter}{bot.description or ''}")
        lines.append("")
    return "\n".join(lines).rstrip("\n")


def render_input(text_input: TextInput) -> str:
    if not text_input.value:
        cursor = CURSOR if text_input.focused else ""
        return f"> {cursor}{text_input.placeholder}"
    if not text_input.focused:
        return f"> {text_input.value}"
    before = text_input.value[: text_input.cursor]
    after = text_input.value[text_input.cursor :]
    return f"> {before}{CURSOR}{after}"


def _render_chat(state: SessionState) -> str:
    name = state.selected_bot.name if state.selected_bot else ""
    s = f"Bot: {name}\n"
    for entry in state.transcript:
        s += word_wrap(entry, TRANSCRIPT_WIDTH) + "\n"
    s += "\n\n"
    if state.screen == Screen.WAITING_FOR_RESPONSE:
        s += state.reply_spinner.frame
    else:
        s += render_input(state.message_input)
    return s


def render(state: SessionState) -> str:
    """Return the text of the next frame. Never mutates ``state``."""
    if state.quit:
        return ""
    if state.error is not None:
        return str(state.error)
    if state.screen == Screen.AUTHENTICATING:
        return f"{state.auth_spinner.frame} Authenticating"
    if state.screen == Screen.LISTING_BOTS:
        return render_bot_list(state.bots)
    return _render_chat(state)

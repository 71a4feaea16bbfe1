"""Word wrapping for transcript lines."""


def word_wrap(text: str, width: int) -> str:
    """Greedily pack words into lines of at most ``width`` columns.

    Words are never split, so a word longer than ``width`` sits alone on an
    overlong line. Runs of whitespace collapse to a single space or newline.
    Empty or all-whitespace input is returned unchanged.
    """
    words = text.split()
    if not words:
        return text

    lines = [words[0]]
    space_left = width - len(words[0])
    for word in words[1:]:
        if len(word) + 1 > space_left:
            lines.append(word)
            space_left = width - len(word)
        else:
            lines[-1] += " " + word
            space_left -= len(word) + 1
    return "\n".join(lines)

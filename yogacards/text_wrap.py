"""Greedy word wrap for card text, measured in characters."""


def wrap_text(text, max_width):
    """Wrap ``text`` into lines of at most ``max_width`` characters.

    Words are never split: a word longer than ``max_width`` gets a line of
    its own. Empty or whitespace-only text gives a single empty line.
    """
    if max_width < 1:
        raise ValueError(f"max_width must be at least 1, got {max_width}")
    words = (text or "").split()
    if not words:
        return [""]
    lines, cur = [], words[0]
    for w in words[1:]:
        if len(cur) + len(w) + 1 <= max_width:
            cur += " " + w
        else:
            lines.append(cur)
            cur = w
    lines.append(cur)
    return lines

def truncate(text: str, max_len: int) -> str:
    if len(text) <= max_len:
        return text
    if max_len <= 3:
        return text[:max_len]
    return text[: max_len - 3] + "..."


def truncate_to_width(text: str, width: int) -> str:
    """Flatten whitespace controls and pad or cut to exactly width characters."""
    text = text.replace("\n", " ").replace("\t", " ").replace("\r", " ")
    if len(text) > width:
        if width <= 3:
            return "." * width
        return text[: width - 3] + "..."
    return text.ljust(width)


def pad_center(text: str, width: int) -> str:
    if len(text) >= width:
        return truncate_to_width(text, width)
    left = (width - len(text)) // 2
    return " " * left + text + " " * (width - len(text) - left)


def wrap_text(text: str, width: int) -> list[str]:
    if len(text) <= width:
        return [text]
    lines = []
    current = ""
    for word in text.split():
        if current and len(current) + 1 + len(word) > width:
            lines.append(current)
            current = word
        elif current:
            current += " " + word
        else:
            current = word
    lines.append(current)
    return lines


def cell_type(value: str, formula: str = "") -> str:
    if formula:
        return "Formula"
    if value == "":
        return "Empty"
    try:
        float(value)
    except ValueError:
        return "Text"
    return "Number"

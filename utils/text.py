def blank_to_none(text):
    """Empty or whitespace-only cells become None; anything else is kept as is"""
    if text is None:
        return None

    text = str(text)
    if not text.strip():
        return None

    return text

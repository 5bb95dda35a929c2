def parse_table_ids(text: str | None) -> list[int]:
    """
    '5,6' -> [5, 6]; '7' -> [7]; '' -> [].
    Non-numeric tokens are ignored and repeated ids kept once, in first-seen order. Never raises.
    """
    if not text or not text.strip():
        return []
    seen = set()
    out = []
    for tok in text.split(","):
        tok = tok.strip()
        if not tok or not (tok.isascii() and tok.isdigit()):
            continue
        n = int(tok)
        if n not in seen:
            seen.add(n)
            out.append(n)
    return out

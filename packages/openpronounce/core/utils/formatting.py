import unicodedata


def collation_key(text: str) -> str:
    """
    Sort key that ignores case and accents, so "Éclair", "eclair" and
    "ECLAIR" collate together and "apricot" sorts between "Apple" and "Banana".
    """
    decomposed = unicodedata.normalize("NFKD", text or "")
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()

def to_uppercase(value: str | None) -> str | None:
    """
    Strip and uppercase an environment value; None passes through untouched.
    """
    if value is None:
        return None
    return str(value).strip().upper()


def to_lowercase(value: str | None) -> str | None:
    """
    Strip and lowercase an environment value; None passes through untouched.
    """
    if value is None:
        return None
    return str(value).strip().lower()

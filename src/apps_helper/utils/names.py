def normalize(name: str) -> str:
    """
    returns the comparable form of a name.

    keeps only alphanumeric characters and lower-cases them, so that
    "My-Project", "my_project" and "MY PROJECT" all compare equal.
    """
    # lower() first: it can emit combining marks (e.g. for "İ") that must be dropped too
    return "".join(c for c in name.lower() if c.isalnum())

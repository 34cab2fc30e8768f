__version__ = "0.3.0"


def version_info() -> str:
    return f"ttview {__version__}"

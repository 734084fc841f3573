"""Tagged stderr lines; stdout is reserved for the captured file's path."""

import sys

TAG = "[capture-page]"


def log(message: str) -> None:
    print(f"{TAG} {message}", file=sys.stderr)


def quiet(message: str) -> None:
    pass

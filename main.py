from rich.pretty import pprint

from invocations import *


@invocation
def callback(
        file,
        mode="r",
        /,
        *names,
        encoding,
        errors="strict",
        **options,
):
    return file, mode, names, encoding, errors, options


if __name__ == '__main__':
    pprint(callback("notes.txt"))
    pprint(callback(encoding="utf-8")("notes.txt", "w", "a", "b"))

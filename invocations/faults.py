"""
Invocations faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every error the wrapper
  itself raises. Errors raised by a wrapped target are never translated and do
  not have a code.
- InvocationFault: base type that carries message + options and knows how to
  render itself in a friendly, actionable way through rich.
- MissingCallableError / SignatureError: the two construction-time failures.

Taxonomy
- construction: no callable target was given (MissingCallableError, a TypeError).
- introspection: the target's parameter list cannot be obtained or its explicit
  descriptor is malformed (SignatureError, a ValueError).
- target: anything raised by the wrapped callable propagates verbatim.

Supplying too few arguments is not a fault: the caller receives a further
specialized Invocation instead.

Integration
- Faults are plain exceptions; `console.print(fault)` renders them with rich.
- The host application may expose __styles__ and __codes__ mappings in __main__
  to restyle the rendering or relabel the codes.
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes raised by the wrapper (stable identifiers).

    grouping
    - construction (2110x)
      • MISSING_CALLABLE, UNINTROSPECTABLE_SIGNATURE, MALFORMED_DESCRIPTOR
    """
    # --- construction errors (21xxx) ---
    MISSING_CALLABLE            = 21101
    UNINTROSPECTABLE_SIGNATURE  = 21102
    MALFORMED_DESCRIPTOR        = 21103

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class InvocationFault(Exception):
    """
    base type of every error raised by the wrapper itself.

    options
    - code: FaultCode of the failure.
    - title: short, lowercased summary shown in the header.
    - hint: one actionable sentence.
    - colorful: style the rendering (default True).
    - fancy: draw a panel around the rendering (default False).

    subclasses declare their defaults through __options__; keyword options
    given at construction override them.
    """
    __options__ = MappingProxyType({})

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType({
            "colorful": True,
            "fancy": False,
        } | dict(type(self).__options__) | options)

    def __str__(self):
        return "" if self.message is Unset else self.message

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white library name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if self.options["colorful"] else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not self.options["colorful"]:
                return Text(str(fragment))
            return Text(str(fragment), style)

        header = Text.assemble(
            "[ ",
            text(getattr(main, "__prog__", "invocations"), styler("prog-name")),
            " — ",
            text(self.options["code"].normalize(), styler("code")),
            " | ",
            text(self.options["title"].title(), styler("error-title")),
            " ]"
        )
        message = text(str(self), styler("error-message"))
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.options["hint"], styler("hint")))

        if self.options["fancy"]:
            return Panel(Group(message, hint), title=header, title_align="left", width=console.width - 4)

        return Group(header, message, hint)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class MissingCallableError(InvocationFault, TypeError):
    __options__ = MappingProxyType({
        "code": FaultCode.MISSING_CALLABLE,
        "title": "missing callable",
        "hint": "pass a function, or use @invocation(...) as a decorator",
    })


class SignatureError(InvocationFault, ValueError):
    __options__ = MappingProxyType({
        "code": FaultCode.UNINTROSPECTABLE_SIGNATURE,
        "title": "unintrospectable signature",
        "hint": "implement __params__() on the target to describe its parameters",
    })


__all__ = (
    "FaultCode",
    "InvocationFault",
    "MissingCallableError",
    "SignatureError",
)

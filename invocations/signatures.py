r"""
Invocations signature classification and arity accounting.

Overview
- Kinds
  • ParameterKind: the six parameter kinds a target may declare
    (req, opt, rest, keyreq, key, keyrest), mapped from inspect.Parameter.

- Classification
  • parameters(callable): ordered (kind, name) pairs for a target, computed once
    per Invocation. Uses the explicit descriptor protocol when the target
    implements __params__(), inspect.signature otherwise.
  • select(parameters, *kinds): names of the requested kinds in declared order.

- Arity
  • arity(callable): minimum arity with the positive-count / negated-variadic
    encoding (a callable with n mandatory arguments and optional ones reports
    -(n + 1)). Required keywords collectively count as one argument slot.
  • normalize(arity): non-negative form of an encoded arity.

- Presentation
  • defaults(callable): declared defaults of positional-only parameters.
  • signature(callable, exclude): an inspect.Signature of the target without
    the excluded names (used by Invocation.__signature__).

Descriptor protocol
- Callables that cannot be inspected (some builtins, foreign objects) may
  describe themselves:
    class Target:
        def __call__(self, *args, **kwargs): ...
        def __params__(self):
            return (("req", "x"), ("key", "scale"))
        def __arity__(self):  # optional, derived from __params__ otherwise
            return -2

Quick example:
    >>> def f(a, b=1, *c, d, e=2, **f): ...
    >>> [(str(kind), name) for kind, name in parameters(f)]
    [('req', 'a'), ('opt', 'b'), ('rest', 'c'), ('keyreq', 'd'), ('key', 'e'), ('keyrest', 'f')]
    >>> arity(f)
    -3
    >>> normalize(arity(f))
    2
"""
import builtins
import inspect
import operator
from collections.abc import Iterable
from enum import StrEnum
from inspect import Parameter

from .faults import FaultCode, SignatureError
from .utils import Unset


class ParameterKind(StrEnum):
    """
    kind of a declared parameter.

    mapping from inspect.Parameter
    - POSITIONAL_ONLY / POSITIONAL_OR_KEYWORD → REQ, or OPT when defaulted
    - VAR_POSITIONAL                         → REST
    - KEYWORD_ONLY                           → KEYREQ, or KEY when defaulted
    - VAR_KEYWORD                            → KEYREST
    """
    REQ = "req"
    OPT = "opt"
    REST = "rest"
    KEYREQ = "keyreq"
    KEY = "key"
    KEYREST = "keyrest"

    @classmethod
    def of(cls, parameter, /):
        """
        classify an inspect.Parameter.
        """
        defaulted = parameter.default is not Parameter.empty
        match parameter.kind:
            case Parameter.POSITIONAL_ONLY | Parameter.POSITIONAL_OR_KEYWORD:
                return cls.OPT if defaulted else cls.REQ
            case Parameter.VAR_POSITIONAL:
                return cls.REST
            case Parameter.KEYWORD_ONLY:
                return cls.KEY if defaulted else cls.KEYREQ
            case Parameter.VAR_KEYWORD:
                return cls.KEYREST
        raise ValueError(f"unknown parameter kind: {parameter.kind!r}")

    @property
    def positional(self):
        return self in (ParameterKind.REQ, ParameterKind.OPT, ParameterKind.REST)

    @property
    def keyword(self):
        return not self.positional


# inspect kinds used when a signature is synthesized from a descriptor
_KINDS = {
    ParameterKind.REQ: Parameter.POSITIONAL_OR_KEYWORD,
    ParameterKind.OPT: Parameter.POSITIONAL_OR_KEYWORD,
    ParameterKind.REST: Parameter.VAR_POSITIONAL,
    ParameterKind.KEYREQ: Parameter.KEYWORD_ONLY,
    ParameterKind.KEY: Parameter.KEYWORD_ONLY,
    ParameterKind.KEYREST: Parameter.VAR_KEYWORD,
}


def _descriptor(callable, name, /):
    """
    Return the bound descriptor method `name` of a target, or None.

    Classes are skipped: their protocol methods are unbound functions that
    describe instances, not the constructor.
    """
    if isinstance(callable, type):
        return None
    method = getattr(callable, name, None)
    return method if builtins.callable(method) else None


def _coerce(entries, /):
    """
    Validate descriptor entries into (ParameterKind, str) pairs.
    """
    if not isinstance(entries, Iterable) or isinstance(entries, (str, bytes)):
        raise SignatureError(
            "__params__() must return an iterable of (kind, name) pairs",
            code=FaultCode.MALFORMED_DESCRIPTOR,
            title="malformed descriptor",
        )
    pairs = []
    for entry in entries:
        try:
            kind, name = entry
            kind = ParameterKind(kind)
        except (TypeError, ValueError):
            raise SignatureError(
                f"__params__() entry {entry!r} is not a (kind, name) pair",
                code=FaultCode.MALFORMED_DESCRIPTOR,
                title="malformed descriptor",
            ) from None
        if not isinstance(name, str) or not name:
            raise SignatureError(
                f"__params__() entry {entry!r} must name the parameter with a non-empty string",
                code=FaultCode.MALFORMED_DESCRIPTOR,
                title="malformed descriptor",
            )
        pairs.append((kind, name))
    return tuple(pairs)


def parameters(callable, /):
    """
    Ordered (kind, name) pairs declared by a callable.

    Resolution
    - a target implementing __params__() is trusted verbatim (entries may use
      ParameterKind members or their string values);
    - otherwise inspect.signature is used. Bound methods report their
      parameters without the bound instance.

    Raises
    - SignatureError: when the parameter list cannot be obtained.
    """
    if descriptor := _descriptor(callable, "__params__"):
        return _coerce(descriptor())
    try:
        signature = inspect.signature(callable)
    except (TypeError, ValueError) as error:
        raise SignatureError(f"cannot introspect the parameters of {callable!r}") from error
    return tuple((ParameterKind.of(parameter), parameter.name) for parameter in signature.parameters.values())


def select(parameters, /, *kinds):
    """
    Names of the parameters of the given kinds, in declared order.
    """
    return tuple(name for kind, name in parameters if kind in kinds)


def arity(callable, /, declared=Unset):
    """
    Minimum arity of a callable in the negated-variadic encoding.

    - n mandatory arguments and nothing optional → n
    - n mandatory arguments plus optional ones   → -(n + 1)

    Required keyword parameters count as a single mandatory slot. Optional
    keywords (key, keyrest) make the callable variadic only when it has no
    required keyword. A target implementing __arity__() is trusted.
    """
    if descriptor := _descriptor(callable, "__arity__"):
        try:
            return operator.index(descriptor())
        except TypeError:
            raise SignatureError(
                "__arity__() must return an integer",
                code=FaultCode.MALFORMED_DESCRIPTOR,
                title="malformed descriptor",
            ) from None

    if declared is Unset:
        declared = parameters(callable)
    kinds = [kind for kind, _ in declared]

    mandatory = kinds.count(ParameterKind.REQ) + (ParameterKind.KEYREQ in kinds)
    variadic = (
        ParameterKind.OPT in kinds or
        ParameterKind.REST in kinds or
        (ParameterKind.KEYREQ not in kinds and (ParameterKind.KEY in kinds or ParameterKind.KEYREST in kinds))
    )
    return -(mandatory + 1) if variadic else mandatory


def normalize(arity, /):
    """
    Non-negative form of an encoded arity: arity when positive, |arity + 1| otherwise.

    Zero is not positive and normalizes to one.
    """
    return arity if arity > 0 else abs(arity + 1)


def defaults(callable, /):
    """
    Declared defaults of the positional-only parameters of a callable.

    Required positional-only parameters map to Parameter.empty. Targets using
    the descriptor protocol declare no positional-only parameters.
    """
    if _descriptor(callable, "__params__") is not None:
        return {}
    try:
        source = inspect.signature(callable)
    except (TypeError, ValueError) as error:
        raise SignatureError(f"cannot introspect the parameters of {callable!r}") from error
    return {
        name: item.default
        for name, item in source.parameters.items()
        if item.kind is Parameter.POSITIONAL_ONLY
    }


def signature(callable, /, exclude=()):
    """
    inspect.Signature of a callable without the excluded parameter names.

    Targets using the descriptor protocol get a synthesized signature where
    optional parameters default to Unset.
    """
    if _descriptor(callable, "__params__") is None:
        try:
            source = inspect.signature(callable)
        except (TypeError, ValueError) as error:
            raise SignatureError(f"cannot introspect the parameters of {callable!r}") from error
        items = list(source.parameters.values())
        annotation = source.return_annotation
    else:
        items = [
            Parameter(name, _KINDS[kind], default=Unset if kind in (ParameterKind.OPT, ParameterKind.KEY) else Parameter.empty)
            for kind, name in parameters(callable)
        ]
        annotation = inspect.Signature.empty

    # descriptors may declare orders Python cannot (a required after an optional)
    return inspect.Signature(
        [item for item in items if item.name not in exclude],
        return_annotation=annotation,
        __validate_parameters__=False,
    )


__all__ = (
    "ParameterKind",
    "parameters",
    "select",
    "arity",
    "normalize",
    "defaults",
    "signature",
)

"""
Invocations core: self-currying, order-independent callable wrappers.

What this module provides
- Invocation: a drop-in replacement for a function (plain function, lambda,
  bound method, callable instance, another Invocation...) that:
  • curries itself: calling it with too few arguments returns a new, further
    specialized Invocation instead of failing;
  • binds arguments in any order: keywords may be given before positionals,
    and positionals fill whatever names are not bound yet;
  • accepts keywords for parameters that are normally positional.

- invocation(...): convenience factory, usable directly or as a decorator.

Core ideas
- State is immutable. Every call that supplies arguments builds a brand-new
  Invocation (see prepare); the previous one is never touched, so chains can
  be shared and branched freely.
- Readiness is computed, not stored: an Invocation is prepared when every
  required parameter name is known.
- Bookkeeping is advisory. The wrapper never validates argument counts beyond
  deciding when to call; the target's own checks are the only guard, and
  whatever the target raises reaches the caller unchanged.

Quick start
    from invocations import invocation

    @invocation
    def area(width, height, *, unit="m"):
        return f"{width * height}{unit}²"

    area(height=3)(2)            # '6m²'
    area(unit="cm")(2)(3)        # '6cm²'
    area[2, 3]                   # '6m²'

Binding rules
- required: the target's required positional then required keyword names,
  preceded by as many optional names as the target's minimum arity claims.
- inferences: pending positional values zipped against the positional names
  (required then optional) that are not bound by keyword yet.
- unassigned: positional values left over after inference; they are passed
  through as true positional arguments and feed *args.
- known: keyword bindings plus inferences; an explicit keyword always wins.
"""
import builtins
import functools
import logging
import operator
from inspect import Parameter

from . import signatures
from .faults import MissingCallableError
from .signatures import ParameterKind, select
from .utils import Unset, coalesce, mirror, rename

logger = logging.getLogger(__name__)


class Invocation:
    """
    Self-currying wrapper around a target callable.

    Lifecycle
    - Constructed around a callable and any already-known arguments.
    - Each call either invokes the target (when enough is known) or returns a
      new Invocation with the supplied arguments folded in.
    - All derived state is computed once, in the constructor, and exposed as
      read-only views: an Invocation is effectively immutable and may be
      shared between threads.

    Introspection
    - function, state, rest: what the Invocation was built from.
    - required, optional, inferences, unassigned, known, missing: derived
      binding state (see the module documentation).
    - arguments, keywords: the exact call the target would receive.
    - parameters, arity, prepared: what is still needed.
    """

    # Subset shown by __repr__/__rich_repr__.
    __displayable__ = (
        "function",
        "known",
        "unassigned",
        "missing",
    )

    # Read-only views over the construction-time state.
    function = mirror("function")
    state = mirror("state")
    rest = mirror("rest")
    required = mirror("required")
    optional = mirror("optional")
    inferences = mirror("inferences")
    unassigned = mirror("unassigned")
    known = mirror("known")
    missing = mirror("missing")
    arguments = mirror("arguments")
    keywords = mirror("keywords")

    def __init__(self, callable=Unset, /, *rest, **state):
        """
        Create a new Invocation.

        Parameters
        - callable: the target, anything with an introspectable signature or
          implementing the __params__() descriptor protocol.
        - *rest: positional arguments already known (inferred onto names).
        - **state: keyword arguments already known.

        Raises
        - MissingCallableError: when no callable target is given.
        - SignatureError: when the target's parameters cannot be introspected.
        """
        if not builtins.callable(callable):
            raise MissingCallableError(
                f"{type(self).__name__}() requires a callable object"
                + ("" if callable is Unset else f", got {type(callable).__name__!r}")
            )

        self._function = callable
        self._state = dict(state)
        self._rest = tuple(rest)
        self._parameters = signatures.parameters(callable)

        # Required: optional names claimed by the minimum arity, then the truly required ones.
        required_arguments = select(self._parameters, ParameterKind.REQ)
        required_keywords = select(self._parameters, ParameterKind.KEYREQ)
        optionals = select(self._parameters, ParameterKind.OPT, ParameterKind.KEY)
        minimum = signatures.normalize(signatures.arity(callable, self._parameters))
        needed = max(minimum - (len(required_arguments) + (1 if required_keywords else 0)), 0)
        self._required = (*optionals[:needed], *required_arguments, *required_keywords)
        self._optional = optionals[needed:]

        # Inference: pending positionals fill the positional names not bound by keyword, in order.
        candidates = [
            name for name in select(self._parameters, ParameterKind.REQ, ParameterKind.OPT)
            if name not in self._state
        ]
        self._inferences = dict(zip(candidates, self._rest))
        self._unassigned = self._rest[len(self._inferences):]
        self._known = self._inferences | self._state
        self._missing = tuple(name for name in self._required if name not in self._known)

        self._arguments, self._keywords = self._layout()

    def _layout(self):
        """
        Resolve the positional arguments and keywords the target will receive.

        Positional names (req, opt, rest) present in `known` are passed in
        declared order, followed by the unassigned values. Once a req/opt name
        is absent, a later positional-only name fills the skipped slots with
        their declared defaults and stays positional; any other later name is
        passed by keyword so no value slides into another parameter's slot.
        Keyword names present in `known` follow in declared order, then every
        other known name (for a **kwargs target; any other target rejects it
        itself).
        """
        arguments = []
        keywords = {}
        skipped = []
        positional_only = signatures.defaults(self._function)

        for kind, name in self._parameters:
            if not kind.positional:
                continue
            if name not in self._known:
                if kind is not ParameterKind.REST:
                    skipped.append(name)
                continue
            if skipped and name in positional_only:
                fillers = [positional_only.get(slot, Parameter.empty) for slot in skipped]
                if not any(filler is Parameter.empty for filler in fillers):
                    arguments.extend(fillers)
                    skipped.clear()
            if skipped:
                keywords[name] = self._known[name]
            else:
                arguments.append(self._known[name])
        arguments.extend(self._unassigned)

        declared = set()
        for kind, name in self._parameters:
            declared.add(name)
            if kind.keyword and name in self._known:
                keywords[name] = self._known[name]
        for name, value in self._known.items():
            if name not in declared:
                keywords[name] = value

        return tuple(arguments), keywords

    @property
    def prepared(self):
        """
        Is the target ready to be called (every required name is known)?
        """
        return not self._missing

    @property
    def arity(self):
        """
        How many additional arguments are needed?

        Missing required keywords count as a single argument, as they do in
        the arity of the target itself.
        """
        required_keywords = select(self._parameters, ParameterKind.KEYREQ)
        missing_keywords = [name for name in self._missing if name in required_keywords]
        return len(self._missing) - len(missing_keywords) + (1 if missing_keywords else 0)

    @property
    def parameters(self):
        """
        Declared (kind, name) pairs of the target that are not known yet.

        For inspection only: the result has no effect on binding.
        """
        return tuple((kind, name) for kind, name in self._parameters if name not in self._known)

    def __params__(self):
        """
        Descriptor protocol: an Invocation describes its remaining parameters,
        so it can itself be wrapped by another Invocation.
        """
        return self.parameters

    @property
    def __signature__(self):
        """
        inspect.Signature of the target restricted to the remaining parameters.
        """
        return signatures.signature(self._function, exclude=self._known.keys())

    def prepare(self, /, *rest, **keyrest):
        """
        Specialize without calling.

        Returns a new Invocation whose pending positionals are the unassigned
        values followed by `rest`, and whose keywords are the known bindings
        updated with `keyrest` (later keywords override earlier bindings and
        inferences).
        """
        function = type(self)(self._function, *self._unassigned, *rest, **(self._known | keyrest))
        logger.debug("prepared %r with %d positional(s) and keyword(s) %s", function, len(rest), list(keyrest))
        return function

    def call(self, /, *rest, **keyrest):
        """
        Specialize, and invoke the target if able.

        - Without arguments: invoke when prepared, otherwise return self.
        - With arguments: prepare a new Invocation; invoke it when prepared,
          otherwise return it.

        Returns the target's return value, or an Invocation still waiting for
        arguments. Exceptions raised by the target propagate unchanged.
        """
        if not rest and not keyrest:
            return self._invoke() if self.prepared else self
        function = self.prepare(*rest, **keyrest)
        if function.prepared:
            return function._invoke()
        logger.debug("deferred %r: missing %s", function, list(function.missing))
        return function

    __call__ = call
    apply = call

    def __getitem__(self, key, /):
        """
        Index-style call: invocation[1, 2] is invocation(1, 2).

        A tuple key is spread into positional arguments; any other key is a
        single positional argument.
        """
        return self.call(*key) if isinstance(key, tuple) else self.call(key)

    def _invoke(self):
        """
        Call the target with the resolved arguments and keywords.
        """
        logger.debug("invoking %r", self._function)
        return self._function(*self._arguments, **self._keywords)

    def to_function(self):
        """
        Convert the Invocation into a plain function forwarding every call to it.
        """
        @rename(getattr(self._function, "__name__", "invocation"))
        def function(*rest, **keyrest):
            return self.call(*rest, **keyrest)

        function.__signature__ = self.__signature__
        return function

    def curry(self, n=Unset, /):
        """
        Convert the Invocation into a curried function of `n` arguments.

        The returned function accumulates positional arguments and keywords
        across calls and forwards them to this Invocation once at least `n`
        arguments were collected. Keywords count as a single argument, as in
        `arity`. `n` defaults to the Invocation's arity.
        """
        n = operator.index(coalesce(n, self.arity))
        if n <= 0:
            return self.to_function()

        def accumulate(collected, bound):
            @rename("curried")
            def curried(*rest, **keyrest):
                arguments = (*collected, *rest)
                keywords = bound | keyrest
                if len(arguments) + (1 if keywords else 0) >= n:
                    return self.call(*arguments, **keywords)
                return accumulate(arguments, keywords)
            return curried

        return accumulate((), {})

    def __repr__(self):
        """
        Concise, stable representation with the displayable fields.

        Example
        - invocation(function=<function f at 0x...>, known={'a': 1}, unassigned=(), missing=('b',))
        """
        return "invocation(%s)" % (
            ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
        )

    def __rich_repr__(self):
        """
        Yield (name, object) pairs for pretty printers (e.g., rich).
        """
        for name in type(self).__displayable__:
            yield name, getattr(self, "_" + name)


def invocation(*args, **kwargs):
    """
    Create an Invocation, or return a decorator that will create one.

    Modes
    - Direct:
        inv = invocation(func, 1, key=2)
      Returns Invocation(func, 1, key=2).

    - Decorator:
        @invocation
        def func(...): ...

        @invocation(1, key=2)
        def func(...): ...
      The decorated function becomes the target, with the decorator's
      arguments already bound.

    The direct mode is chosen when the first positional argument is callable,
    so a callable value cannot be pre-bound as the first argument of the
    decorator form; bind it by keyword instead.
    """
    if args and builtins.callable(args[0]):
        return Invocation(*args, **kwargs)

    @rename("invocation")
    def wrapper(source=Unset, /):
        return Invocation(source, *args, **kwargs)

    return wrapper


__all__ = (
    "Invocation",
    "invocation",
)

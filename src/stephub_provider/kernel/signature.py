from __future__ import annotations

import inspect
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, get_origin

from stephub_provider.errors import ProviderConfigError, UnsatisfiableParameterError
from stephub_provider.kernel.accessors import NamedArgumentAccessor, ParameterAccessor, SessionStateAccessor
from stephub_provider.kernel.step_method import ParameterDescriptor
from stephub_provider.model.session import SessionState
from stephub_provider.model.spec import ArgumentSpec


@dataclass(frozen=True, slots=True)
class SignatureAnalysis:
    accessors: tuple[ParameterAccessor, ...]
    arguments: tuple[ArgumentSpec, ...]


def is_session_parameter(declared_type: object, session_type: type[object] = SessionState) -> bool:
    # Session parameters are typed with the session-state class, a subclass of it, or a base it fits into.
    if declared_type is Any or get_origin(declared_type) is not None:
        return False
    if not isinstance(declared_type, type):
        return False
    return issubclass(declared_type, session_type) or issubclass(session_type, declared_type)


def analyze_parameters(
    handler_name: str,
    params: Sequence[ParameterDescriptor],
    *,
    session_type: type[object] = SessionState,
) -> SignatureAnalysis:
    # Classify each declared parameter, in order, into exactly one accessor.
    accessors: list[ParameterAccessor] = []
    arguments: list[ArgumentSpec] = []
    for position, descriptor in enumerate(params):
        if is_session_parameter(descriptor.declared_type, session_type):
            accessors.append(SessionStateAccessor(expected_type=descriptor.declared_type))
        elif descriptor.argument is not None:
            accessors.append(NamedArgumentAccessor(name=descriptor.argument))
            arguments.append(ArgumentSpec(name=descriptor.argument, schema=descriptor.declared_type))
        else:
            raise UnsatisfiableParameterError(handler_name, position, descriptor.label)
    return SignatureAnalysis(accessors=tuple(accessors), arguments=tuple(arguments))


def check_arity(handler_name: str, handler: Callable[..., Any], params: Sequence[ParameterDescriptor]) -> None:
    # Every parameter the handler requires must have a descriptor, and no descriptor may be left over.
    try:
        signature = inspect.signature(handler)
    except (TypeError, ValueError):
        return
    declared = len(params)
    try:
        signature.bind(*range(declared))
    except TypeError:
        pass
    else:
        return
    positional = [
        p
        for p in signature.parameters.values()
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]
    accepts_varargs = any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in signature.parameters.values())
    if declared > len(positional) and not accepts_varargs:
        raise ProviderConfigError(
            f"Handler {handler_name} declares {declared} step parameters but accepts only {len(positional)}"
        )
    for position, parameter in enumerate(signature.parameters.values()):
        if parameter.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            continue
        if parameter.default is not inspect.Parameter.empty:
            continue
        if parameter.kind is inspect.Parameter.KEYWORD_ONLY or position >= declared:
            raise UnsatisfiableParameterError(handler_name, position, parameter.name)
    raise ProviderConfigError(f"Handler {handler_name} cannot be called with its declared step parameters")

"""Check an actor implementation against its generated contract.

A mismatch is returned as a ContractError instead of being raised, so
callers (tests, start-up checks) decide how fatal it is.
"""

from __future__ import annotations

import inspect

from .errors import ContractError
from .model import Actor


def _positional_count(func) -> int | None:
    """Positional parameters after self, or None if *args is accepted."""
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return None
    count = 0
    for param in list(signature.parameters.values())[1:]:
        if param.kind == param.VAR_POSITIONAL:
            return None
        if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
            if param.default is param.empty:
                count += 1
    return count


def check_implementation(actor: Actor, impl: type) -> ContractError | None:
    """Return a ContractError listing every method `impl` gets wrong, or None."""
    violations: list[str] = []

    for method in actor.methods:
        func = getattr(impl, method.attribute, None)
        if func is None:
            violations.append(f"missing method {method.attribute} ({method.name})")
            continue
        if not inspect.iscoroutinefunction(func):
            violations.append(f"{method.attribute} must be a coroutine function")
            continue

        expected = 1 if method.has_request else 0
        actual = _positional_count(func)
        if actual is not None and actual != expected:
            wanted = "a request argument" if expected else "no arguments"
            violations.append(f"{method.attribute} must take {wanted}, takes {actual}")

    if violations:
        return ContractError(actor.actor_type, violations)
    return None
